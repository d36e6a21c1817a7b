from pytest import Item, fixture

from calcbot.lexer import Lexer
from calcbot.machine import Machine


@fixture
def lexer():
    return Lexer()


@fixture
def machine():
    return Machine()


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit which expressions
    a run checked.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          # Drop the full-diff hint
          '\n'.join(str(expl).splitlines()[:-2]))
