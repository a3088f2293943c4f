'''
End to end expression evaluation tests
'''

from concurrent.futures import ThreadPoolExecutor
import logging
import math

from spacecalc import calculate, format_result
from spacecalc.util import CalculatorError, LexError, ParseError, EvalError

from pytest import approx, mark, raises


@mark.parametrize('expression, expected', [
    ('2+3*4', 14),
    ('(2+3)*4', 20),
    ('10-4-3', 3),
    ('100/10/5', 2),
    ('2*3^2', 18),
    ('1.5 + .5', 2),
    ('7/2', 3.5),
])
def test_arithmetic(expression, expected):
    assert calculate(expression) == expected


def test_power_left_associative():
    assert calculate('2^3^2') == 64
    assert calculate('(2^3)^2') == 64


def test_power_right_grouping_needs_parentheses():
    assert calculate('2^(3^2)') == 512


def test_fractional_and_negative_exponents():
    assert calculate('4^0.5') == 2
    assert calculate('2^-1') == 0.5


@mark.parametrize('expression, expected', [
    ('-5+3', -2),
    ('3-5', -2),
    ('2*-3', -6),
    ('-(2+3)', -5),
    ('3!-2', 4),
    # Negation binds tighter than ^
    ('-2^2', 4),
])
def test_negation(expression, expected):
    assert calculate(expression) == expected


@mark.parametrize('expression, expected', [
    ('3!+2', 8),
    ('2+3!', 8),
    ('2!', 2),
    ('0!', 1),
    ('1!', 1),
    ('-3!', -6),
    ('(1+2)!', 6),
    ('sqrt(4)!', 2),
    ('fact(4)', 24),
    ('3!!', 720),
])
def test_factorial(expression, expected):
    assert calculate(expression) == expected


def test_largest_factorial():
    assert calculate('170!') == float(math.factorial(170))


def test_factorial_out_of_range():
    with raises(EvalError, match='(?i)domain error'):
        calculate('171!')


def test_factorial_of_fraction():
    with raises(EvalError, match='(?i)factorial requires integer'):
        calculate('3.5!')


@mark.parametrize('expression, expected', [
    ('sqrt(16)', 4),
    ('log(100)', 2),
    ('ln(1)', 0),
    ('abs(-3)', 3),
    ('SIN(0)', 0),
    ('cos(0)', 1),
])
def test_functions(expression, expected):
    assert calculate(expression) == expected


def test_sqrt_of_negative():
    with raises(EvalError, match='(?i)domain error'):
        calculate('sqrt(-1)')


def test_constants():
    assert calculate('pi') == approx(math.pi)
    assert calculate('2*pi') == approx(2 * math.pi)
    assert calculate('TAU') == approx(calculate('2*pi'))
    assert calculate('ln(e)') == approx(1)
    assert calculate('g0') == 9.80665


def test_degrees():
    assert calculate('sin(30)', degrees=True) == approx(0.5)
    assert calculate('sin(30)') == approx(math.sin(30))


def test_division_by_zero():
    with raises(EvalError, match='(?i)division by zero'):
        calculate('5/0')


@mark.parametrize('expression', ['(2+3', '2+3)'])
def test_mismatched_parentheses(expression):
    with raises(ParseError, match='(?i)mismatched parentheses'):
        calculate(expression)


@mark.parametrize('expression', ['', ' \t '])
def test_empty(expression):
    with raises(EvalError, match='(?i)invalid expression'):
        calculate(expression)


def test_malformed_number():
    with raises(LexError):
        calculate('1.2.3 + 1')


def test_errors_share_base():
    for expression in ['2 $ 2', '(1', '1/0']:
        with raises(CalculatorError):
            calculate(expression)


@mark.parametrize('expression', ['1/3', '2*pi', '-sqrt(2)', '0.1+0.2',
                                 '10^20', '10^(0-20)', '170!', '1/7^9'])
def test_formatted_result_reads_back(expression):
    value = calculate(expression)
    assert calculate(format_result(value)) == approx(value, rel=1e-14)


def test_format_result():
    assert format_result(14.0) == '14'
    assert format_result(0.1 + 0.2) == '0.3'
    assert format_result(1e20) == '100000000000000000000'
    assert format_result(-2.5) == '-2.5'


def test_concurrent_evaluation():
    expressions = ['{0}!+{0}'.format(n) for n in range(12)]
    with ThreadPoolExecutor(max_workers=4) as executor:
        results = list(executor.map(calculate, expressions))
    assert results == [math.factorial(n) + n for n in range(12)]


@mark.parametrize('expression', ['10^200*10^200',
                                 '10^200*10^200-10^200*10^200',
                                 '1/10^-310',
                                 '(10^200*10^200)!'])
def test_overflow_is_an_error(expression):
    with raises(EvalError, match='Overflow'):
        calculate(expression)


def test_huge_literal_is_an_error():
    with raises(LexError, match='Number too large'):
        calculate('1' + '0' * 400)


def test_logs_tokens_and_postfix(caplog):
    caplog.set_level(logging.DEBUG, logger='spacecalc.calculator')
    calculate('3!+2')
    assert caplog.messages == ['tokens: 3 fact + 2', 'postfix: 3 fact 2 +']
    assert {record.levelno for record in caplog.records} == {logging.DEBUG}
