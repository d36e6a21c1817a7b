from .util import CalcError, Result
from .lexer import tokenize
from .machine import evaluate


def calculate(expression, allow_invalid=False):
    '''
    Tokenize and evaluate expression, raising CalcError on failure.
    '''
    return evaluate(tokenize(expression), allow_invalid=allow_invalid)


def try_calculate(expression, allow_invalid=False):
    '''
    Like calculate, but return a Result instead of raising.

    Switch on result.error.kind to tell failures apart.
    '''
    try:
        return Result(calculate(expression, allow_invalid), None)
    except CalcError as e:
        return Result(None, e)
