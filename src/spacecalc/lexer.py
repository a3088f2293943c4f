from functools import reduce
import operator
import math

import regex

from .util import LexError, wrap_user_errors
from .tokens import Kind, Token, Operator, Function, resolve


class Lexer:
    '''
    Lexer for infix calculator expressions.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # A run of digits and decimal points. Well-formedness is checked when
    # converting, so 1.2.3 is one (bad) lexeme rather than 1.2 and .3.
    NUMBER = r'[\d.]+'
    # pi, Sin, g0
    NAME = r'\p{L}[\p{L}\d]*'

    OPERATOR = r'(?:' + r'|'.join(regex.escape(symbol.value)
                                  for symbol
                                  in Operator) + r')'
    # Factorial sugar: 3! is fact(3)
    POSTFIX = r'!'
    LPAREN = r'\('
    RPAREN = r'\)'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<space>' + SPACE + r')|' \
             r'(?<number>' + NUMBER + r')|' \
             r'(?<name>' + NAME + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<postfix>' + POSTFIX + r')|' \
             r'(?<lparen>' + LPAREN + r')|' \
             r'(?<rparen>' + RPAREN + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield all lexemes.

        Raises LexError on the first character that starts no lexeme.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise LexError("Unrecognized character '{0}'".format(line[0]))

    def matchedgroups(self, match):
        '''
        Return the named groups that took part in the match.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

    def tokenize(self, expression):
        '''
        Return list of Tokens for expression, skipping whitespace.
        '''
        tokens = []
        for match in self.lex(expression):
            groups = self.matchedgroups(match)
            if 'space' in groups:
                continue
            previous = tokens[-1] if tokens else None
            tokens.append(self.token(groups, previous))
        return tokens

    def token(self, groups, previous):
        '''
        Turn lexeme match groups into a Token.

        previous is the Token before it, if any, for telling negation from
        subtraction.
        '''
        if 'number' in groups:
            text = groups['number']
            return Token(Kind.NUMBER, self._number(text), text)
        elif 'name' in groups:
            text = groups['name']
            return Token(Kind.IDENTIFIER, self._resolve(text), text)
        elif 'operator' in groups:
            text = groups['operator']
            if text == Operator.SUB.value and self.isprefix(previous):
                return Token(Kind.IDENTIFIER, Function.NEG, text)
            return Token(Kind.OPERATOR, Operator(text), text)
        elif 'postfix' in groups:
            return Token(Kind.POSTFIX, Function.FACT, groups['postfix'])
        elif 'lparen' in groups:
            return Token(Kind.LPAREN, None, groups['lparen'])
        elif 'rparen' in groups:
            return Token(Kind.RPAREN, None, groups['rparen'])
        raise LexError('Unrecognized lexeme {0}'.format(groups))

    def isprefix(self, previous):
        '''
        Return True if a minus after previous is a negation.
        '''
        return previous is None or \
            previous.kind in {Kind.OPERATOR, Kind.LPAREN}

    @wrap_user_errors("Invalid number '{1}'", LexError)
    def _number(self, text):
        value = float(text)
        if not math.isfinite(value):
            raise LexError("Number too large '{0}'".format(text))
        return value

    @wrap_user_errors("Unknown name '{1}'", LexError)
    def _resolve(self, text):
        return resolve(text)


def tokenize(expression):
    '''
    Split expression into Tokens.
    '''
    return Lexer().tokenize(expression)
