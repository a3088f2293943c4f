from collections import deque
from types import MappingProxyType
import operator
import math

from .util import EvalError, wrap_user_errors
from .tokens import Kind, Operator, Function


MAX_FACTORIAL = 170


def _divide(left, right):
    if right == 0:
        raise EvalError('Division by zero')
    return left / right


def _power(left, right):
    '''
    left ** right in floating point, fractional and negative exponents
    included.
    '''
    try:
        return math.pow(left, right)
    except OverflowError as e:
        raise EvalError('Overflow in {0} ^ {1}'.format(left, right)) from e
    except ValueError as e:
        raise EvalError('Domain error in {0} ^ {1}'.format(left, right)) \
            from e


def _log10(value):
    if value <= 0:
        raise EvalError('Domain error: log requires a positive argument')
    return math.log10(value)


def _ln(value):
    if value <= 0:
        raise EvalError('Domain error: ln requires a positive argument')
    return math.log(value)


def _sqrt(value):
    if value < 0:
        raise EvalError('Domain error: sqrt requires a non-negative argument')
    return math.sqrt(value)


def _factorial(value):
    '''
    n! for integral 0 <= n <= 170, as a float. 171! overflows a double.
    '''
    if not 0 <= value <= MAX_FACTORIAL:
        raise EvalError('Domain error: factorial requires 0 <= n <= {0}'
                        .format(MAX_FACTORIAL))
    if not float(value).is_integer():
        raise EvalError('Factorial requires integer')
    return float(math.factorial(int(value)))


class Machine:
    '''
    Arithmetic stack machine (postfix evaluator).

    Takes postfix Tokens and runs them. Holds only the operand stack for a
    single run, so make a new one per evaluation.
    '''

    OPERATORS = MappingProxyType({
        Operator.ADD: operator.__add__,
        Operator.SUB: operator.__sub__,
        Operator.MUL: operator.__mul__,
        Operator.DIV: _divide,
        Operator.POW: _power,
    })

    FUNCTIONS = MappingProxyType({
        Function.SIN: math.sin,
        Function.COS: math.cos,
        Function.TAN: math.tan,
        Function.LOG: _log10,
        Function.LN: _ln,
        Function.SQRT: _sqrt,
        Function.ABS: abs,
        Function.FACT: _factorial,
        Function.NEG: operator.__neg__,
    })

    # Functions taking an angle
    TRIGONOMETRIC = frozenset({Function.SIN, Function.COS, Function.TAN})

    def __init__(self, degrees=False):
        '''
        Create empty stack machine.

        :param degrees: Trigonometric functions take degrees, not radians.
        '''
        self.stack = deque()
        self.degrees = degrees

    def run(self, postfix):
        '''
        Feed all postfix Tokens, then pop and return the result.
        '''
        for token in postfix:
            self.feed(token)
        if len(self.stack) != 1:
            raise EvalError('Invalid expression')
        return self.stack.pop()

    def feed(self, token):
        '''
        Stack or apply one Token.
        '''
        if token.kind is Kind.NUMBER or token.isconstant:
            self._pshstack(token.value)
        elif token.kind is Kind.OPERATOR:
            self._binary(token.value)
        elif token.kind in {Kind.IDENTIFIER, Kind.POSTFIX}:
            self._unary(token.value)
        else:
            raise EvalError("Unknown token '{0}'".format(token))

    def _binary(self, op):
        right, left = self._popstack(2, 'Insufficient operands for {0}'
                                        .format(op.value))
        result = type(self).OPERATORS[op](left, right)
        self._pshstack(self._finite(result, op.value))

    def _unary(self, function):
        value, = self._popstack(1, 'Missing operand for {0}'
                                   .format(function.value))
        result = self._call(function, value)
        self._pshstack(self._finite(result, function.value))

    def _finite(self, result, name):
        '''
        Return result, raising EvalError if it overflowed to inf or nan.
        '''
        if not math.isfinite(result):
            raise EvalError('Overflow in {0}'.format(name))
        return result

    @wrap_user_errors('Domain error: {1.value}')
    def _call(self, function, value):
        if self.degrees and function in type(self).TRIGONOMETRIC:
            value = math.radians(value)
        return type(self).FUNCTIONS[function](value)

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n, message):
        '''
        Pop specified number of args from stack, topmost first.

        Raises EvalError with message if not enough args.
        '''
        if len(self.stack) < n:
            raise EvalError(message)
        return [self.stack.pop() for _ in range(n)]


def evaluate(postfix, degrees=False):
    '''
    Run postfix Tokens on a fresh Machine and return the float result.
    '''
    return Machine(degrees=degrees).run(postfix)
