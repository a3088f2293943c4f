'''
Lexical tokens and the fixed lookup tables they refer to.

Everything here is immutable and shared by every evaluation.
'''

from collections import namedtuple
from enum import Enum
from types import MappingProxyType

import math


class Kind(Enum):
    NUMBER = 'number'
    # Constant or prefix function; the token value says which.
    IDENTIFIER = 'identifier'
    OPERATOR = 'operator'
    # Factorial written as a trailing !
    POSTFIX = 'postfix'
    LPAREN = '('
    RPAREN = ')'


class Operator(Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    POW = '^'

    @property
    def precedence(self):
        return PRECEDENCE[self]


class Function(Enum):
    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    LOG = 'log'
    LN = 'ln'
    SQRT = 'sqrt'
    ABS = 'abs'
    FACT = 'fact'
    NEG = 'neg'


PRECEDENCE = MappingProxyType({
    Operator.ADD: 1,
    Operator.SUB: 1,
    Operator.MUL: 2,
    Operator.DIV: 2,
    Operator.POW: 3,
})

CONSTANTS = MappingProxyType({
    'pi': math.pi,
    'tau': math.tau,
    'e': math.e,
    # Standard gravity, m/s²
    'g0': 9.80665,
})


class Token(namedtuple('Token', ['kind', 'value', 'text'])):
    '''
    Lexeme resolved to what the machine needs.

    value is a float for numbers and constants, a Function for prefix or
    postfix functions, an Operator for binary operators and None for
    parentheses. text is the lexeme as typed, for error messages.
    '''
    __slots__ = ()

    @property
    def isfunction(self):
        return isinstance(self.value, Function)

    @property
    def isconstant(self):
        return self.kind is Kind.IDENTIFIER and not self.isfunction

    def __str__(self):
        if self.isfunction:
            return self.value.value
        return self.text


def resolve(name):
    '''
    Return the constant value or Function named, case-insensitively.

    Raises ValueError for unknown names.
    '''
    name = name.lower()
    try:
        return CONSTANTS[name]
    except KeyError:
        return Function(name)
