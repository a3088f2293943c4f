from decimal import Decimal
from functools import wraps


class CalculatorError(Exception):
    pass


class LexError(CalculatorError):
    pass


class ParseError(CalculatorError):
    pass


class EvalError(CalculatorError):
    pass


class InputError(CalculatorError):
    pass


def wrap_user_errors(fmt, error=EvalError):
    '''
    Decorator that converts exceptions from numeric routines to calculator
    errors.

    Passes through CalculatorErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalculatorError:
                raise
            except (ArithmeticError, ValueError) as e:
                raise error(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator


def format_result(value):
    '''
    Format number for display with 15 significant digits.

    Never uses exponent notation, so the output can be read back in as an
    expression.
    '''
    text = '{:.15g}'.format(value)
    if 'e' in text:
        text = format(Decimal(text), 'f')
    return text
