'''
Scientific expression calculator.

Evaluates infix expressions with the usual operators, unary minus, a handful
of functions and constants, and a postfix factorial:

    >>> calculate('2 * (3 + 4)')
    14.0
    >>> calculate('3! + sqrt(16)')
    10.0

Under the hood, text is lexed into tokens, reordered into postfix (RPN) by
shunting-yard, and run on a stack machine. Each call is independent.

Also ships the closed-form mission formulas (delta-v, orbital and escape
velocity, Hohmann transfers, surface gravity) in spacecalc.space.
'''

# TODO: Right-associative ^ behind a flag, once callers can opt in.

from .util import CalculatorError, LexError, ParseError, EvalError, \
    InputError, format_result
from .lexer import Lexer, tokenize
from .parser import to_postfix
from .machine import Machine, evaluate
from .calculator import calculate
from .cli import CLI


__all__ = ('calculate', 'tokenize', 'to_postfix', 'evaluate', 'format_result',
           'Machine', 'Lexer', 'CLI',
           'CalculatorError', 'LexError', 'ParseError', 'EvalError',
           'InputError')
