'''
Calculator entry point tests
'''

from calcbot import calculate, try_calculate, ErrorKind
from calcbot.util import InvalidOperation, format_number

from pytest import raises, mark


def test_calculate():
    assert calculate('2+3*4') == 14


def test_calculate_raises():
    with raises(InvalidOperation):
        calculate('2/0')


def test_try_calculate_value():
    result = try_calculate('(2+3)*4')
    assert result.value == 20
    assert result.error is None


@mark.parametrize('expression,kind', [
    ('2+a', ErrorKind.UNEXPECTED_TOKEN),
    ('()', ErrorKind.INVALID_EXPRESSION),
    ('2+', ErrorKind.INVALID_EXPRESSION),
    ('1..2', ErrorKind.UNEXPECTED_NUMBER),
    ('(2+3', ErrorKind.UNMATCHED_PARENTHESIS),
    ('2/0', ErrorKind.INVALID_OPERATION),
])
def test_try_calculate_error_kind(expression, kind):
    result = try_calculate(expression)
    assert result.value is None
    assert result.error.kind is kind


def test_try_calculate_allow_invalid():
    assert try_calculate('2/0', allow_invalid=True).error is None


@mark.parametrize('value,text', [
    (5.0, '5'),
    (-6.0, '-6'),
    (0.5, '0.5'),
    (1e20, '1e+20'),
    (1 / 3, '0.333333333333'),
])
def test_format_number(value, text):
    assert format_number(value) == text
