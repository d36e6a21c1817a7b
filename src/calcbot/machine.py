from collections import deque, namedtuple
from types import MappingProxyType
import math
import operator

from .util import (TokenKind, InvalidExpression, InvalidOperation,
                   UnexpectedNumber, UnmatchedParenthesis, wrap_user_errors)


Operator = namedtuple('Operator', ['arity',
                                   'precedence',
                                   'associativity',
                                   'function'])


def _divide(left, right):
    '''
    IEEE-754 division: dividing by zero gives an infinity or nan.
    '''
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1, right)


def _power(base, exponent):
    '''
    IEEE-754 power: overflow gives an infinity, leaving the reals gives nan.
    '''
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and exponent % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # 0 ^ -1
        if base == 0:
            return math.inf
        # -8 ^ 0.5
        return math.nan


class Machine:
    '''
    Shunting-yard stack machine (infix calculator).

    Takes tokens and evaluates operators as soon as precedence allows,
    without building a tree. Every call to evaluate is a fresh run; the
    instance only holds configuration.
    '''

    # Significant digits kept on output, hiding binary representation noise.
    DIGITS = 12

    OPERATORS = MappingProxyType({
        '^': Operator(2, 4, 'right', _power),
        'u+': Operator(1, 3, 'right', operator.__pos__),
        'u-': Operator(1, 3, 'right', operator.__neg__),
        '*': Operator(2, 2, 'left', operator.__mul__),
        '/': Operator(2, 2, 'left', _divide),
        '+': Operator(2, 1, 'left', operator.__add__),
        '-': Operator(2, 1, 'left', operator.__sub__),
    })
    # Symbols as they appear in text; unary ones are spelled like binary.
    SYMBOLS = tuple(symbol
                    for symbol
                    in OPERATORS
                    if not symbol.startswith('u'))

    def __init__(self, allow_invalid=False):
        '''
        Create machine.

        :param allow_invalid: Let operators produce infinities and nan
                              instead of raising InvalidOperation.
        '''
        self.allow_invalid = allow_invalid

    def evaluate(self, tokens):
        '''
        Evaluate token sequence to a number.
        '''
        output = deque()
        pending = deque()
        for token in tokens:
            if token.kind is TokenKind.NUMBER:
                output.append(self._iconvert(token))
            elif token.kind is TokenKind.OPERATOR:
                # Prefix operators have no left operand to resolve yet.
                if type(self).OPERATORS[token.value].arity > 1:
                    while pending and \
                          pending[-1].kind is TokenKind.OPERATOR and \
                          self._yields(token, pending[-1]):
                        self._apply(pending.pop(), output)
                pending.append(token)
            elif token.kind is TokenKind.LPAREN:
                pending.append(token)
            else:
                while pending and pending[-1].kind is not TokenKind.LPAREN:
                    self._apply(pending.pop(), output)
                if not pending:
                    raise UnmatchedParenthesis(
                        'Unmatched parenthesis at {0}'.format(token.position),
                        token.value, token.position)
                pending.pop()
        for token in pending:
            if token.kind is TokenKind.LPAREN:
                raise UnmatchedParenthesis(
                    'Unclosed parenthesis at {0}'.format(token.position),
                    token.value, token.position)
        while pending:
            self._apply(pending.pop(), output)
        if len(output) != 1:
            raise InvalidExpression('Incomplete expression')
        return self._round(output.pop())

    def _yields(self, incoming, top):
        '''
        Return True if operator on top of stack must be evaluated first.
        '''
        o1 = type(self).OPERATORS[incoming.value]
        o2 = type(self).OPERATORS[top.value]
        if o1.associativity == 'left':
            return o1.precedence <= o2.precedence
        return o1.precedence < o2.precedence

    def _apply(self, token, output):
        '''
        Pop operands for operator token, push its result.

        Does the real work.
        '''
        op = type(self).OPERATORS[token.value]
        # If you don't reverse, you'll do 2 - 3 when you say 3 - 2.
        args = reversed(self._popstack(output, op.arity, token))
        result = self._fix(op.function(*args))
        if not self.allow_invalid and not math.isfinite(result):
            raise InvalidOperation(
                'Invalid result of {0!r} at {1}'.format(token.value[-1],
                                                        token.position),
                token.value[-1], token.position)
        output.append(result)

    def _popstack(self, stack, n, token):
        '''
        Pop specified number of operands from stack, topmost first.
        '''
        if len(stack) < n:
            raise InvalidExpression(
                'Missing operand for {0!r} at {1}'.format(token.value[-1],
                                                          token.position),
                token.value[-1], token.position)
        return [stack.pop() for _ in range(n)]

    @wrap_user_errors(UnexpectedNumber, 'Cannot convert {1.value!r} at '
                                        '{1.position}')
    def _iconvert(self, token):
        '''
        Convert numeral text to the machine's number type.
        '''
        n = float(token.value)
        if not math.isfinite(n):
            raise UnexpectedNumber(
                'Numeral too large at {0}'.format(token.position),
                token.value, token.position)
        return n

    def _round(self, n):
        '''
        Round number to the machine's precision, for output.
        '''
        if not math.isfinite(n):
            return n
        # + 0.0 folds -0.0 into 0.0
        return self._fix(n) + 0.0

    def _fix(self, n):
        '''
        Cut n to DIGITS significant digits, dropping representation noise.

        Applied to every operator result, so 0.1+0.2 is 0.3 before anything
        else sees it.
        '''
        return float('{0:.{1}g}'.format(n, type(self).DIGITS))


def evaluate(tokens, allow_invalid=False):
    '''
    Evaluate token sequence with a fresh machine.
    '''
    return Machine(allow_invalid=allow_invalid).evaluate(tokens)
