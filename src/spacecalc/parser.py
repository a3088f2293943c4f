'''
Infix to postfix (RPN) translation, by shunting-yard.
'''

from collections import deque

from .util import ParseError
from .tokens import Kind


def _isprefixfunction(token):
    return token.kind is Kind.IDENTIFIER and token.isfunction


def _yields_to(top, incoming):
    '''
    Return True if top of operator stack must be output before pushing
    incoming binary operator.

    Equal precedence pops too, so every operator, ^ included, is
    left-associative.
    '''
    if _isprefixfunction(top):
        return True
    return top.kind is Kind.OPERATOR and \
        top.value.precedence >= incoming.value.precedence


def to_postfix(tokens):
    '''
    Reorder infix Tokens into postfix order.

    Parentheses are consumed. Raises ParseError on mismatched parentheses.
    '''
    output = []
    operators = deque()
    for token in tokens:
        if token.kind is Kind.NUMBER or token.isconstant:
            output.append(token)
        elif token.kind is Kind.POSTFIX:
            # Binds to whatever was completed just before it.
            output.append(token)
        elif _isprefixfunction(token):
            operators.append(token)
        elif token.kind is Kind.OPERATOR:
            while operators and _yields_to(operators[-1], token):
                output.append(operators.pop())
            operators.append(token)
        elif token.kind is Kind.LPAREN:
            operators.append(token)
        elif token.kind is Kind.RPAREN:
            while operators and operators[-1].kind is not Kind.LPAREN:
                output.append(operators.pop())
            if not operators:
                raise ParseError('Mismatched parentheses')
            operators.pop()
            # f(x): the function applies to the parenthesised argument
            if operators and _isprefixfunction(operators[-1]):
                output.append(operators.pop())
        else:
            raise ParseError("Unexpected token '{0}'".format(token))
    while operators:
        token = operators.pop()
        if token.kind in {Kind.LPAREN, Kind.RPAREN}:
            raise ParseError('Mismatched parentheses')
        output.append(token)
    return output
