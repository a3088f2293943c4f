import logging

from .lexer import tokenize
from .parser import to_postfix
from .machine import evaluate


logger = logging.getLogger(__name__)


def calculate(expression, degrees=False):
    '''
    Evaluate infix expression and return a float.

    :param degrees: Trigonometric functions take degrees, not radians.
    :raises CalculatorError: LexError, ParseError or EvalError.
    '''
    tokens = tokenize(expression)
    logger.debug('tokens: %s', ' '.join(map(str, tokens)))
    postfix = to_postfix(tokens)
    logger.debug('postfix: %s', ' '.join(map(str, postfix)))
    return evaluate(postfix, degrees=degrees)
