from collections import namedtuple
from enum import Enum
from functools import wraps


class TokenKind(Enum):
    NUMBER = 'number'
    OPERATOR = 'operator'
    LPAREN = 'lparen'
    RPAREN = 'rparen'


class Token:
    '''
    Classified lexeme of an expression.

    Only NUMBER tokens change after being produced, and only while the lexer
    is still accumulating their digits.
    '''
    __slots__ = 'value', 'kind', 'position'

    def __init__(self, value, kind, position):
        self.value = value
        self.kind = kind
        self.position = position

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.value, self.kind, self.position) == \
               (other.value, other.kind, other.position)

    def __repr__(self):
        return 'Token({0!r}, {1}, {2})'.format(self.value,
                                               self.kind.name,
                                               self.position)


class ErrorKind(Enum):
    UNEXPECTED_TOKEN = 'UnexpectedToken'
    INVALID_EXPRESSION = 'InvalidExpression'
    UNEXPECTED_NUMBER = 'UnexpectedNumber'
    UNMATCHED_PARENTHESIS = 'UnmatchedParenthesis'
    INVALID_OPERATION = 'InvalidOperation'


class CalcError(Exception):
    '''
    Base of all expression errors.

    args[0] is always the human readable message.
    '''
    kind = None

    def __init__(self, message, text=None, position=None):
        super().__init__(message)
        self.text = text
        self.position = position


class UnexpectedToken(CalcError):
    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, character, position):
        super().__init__('Unexpected token {0!r} at {1}'.format(character,
                                                                position),
                         character, position)


class InvalidExpression(CalcError):
    kind = ErrorKind.INVALID_EXPRESSION


class UnexpectedNumber(CalcError):
    kind = ErrorKind.UNEXPECTED_NUMBER


class UnmatchedParenthesis(CalcError):
    kind = ErrorKind.UNMATCHED_PARENTHESIS


class InvalidOperation(CalcError):
    kind = ErrorKind.INVALID_OPERATION


def wrap_user_errors(error, fmt):
    '''
    Decorator that converts stray exceptions into the given CalcError.

    Passes through CalcErrors. The message is formatted with the call's
    arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise error(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator


# Tagged outcome of a calculation; exactly one of the two is None.
Result = namedtuple('Result', ['value', 'error'])


def format_number(value):
    '''
    Render a result: 12 significant digits, no trailing .0 when integral.
    '''
    return '{0:.12g}'.format(value)
