'''
Infix calculator and chat calculator bot.

Evaluates plain arithmetic: numbers, + - * / ^, unary + and -, and
parentheses, with implicit multiplication before a parenthesis group.
Expressions are tokenized and evaluated with the shunting-yard algorithm;
nothing is ever handed to Python's eval, so the accepted input is exactly
that grammar and nothing more.

No variables, no functions. Not intended to be Turing-complete!
'''

from .util import CalcError, ErrorKind, Result
from .lexer import Lexer, tokenize
from .machine import Machine, evaluate
from .calculator import calculate, try_calculate
from .bot import CalcBot
from .cli import CLI


__all__ = ('Machine', 'Lexer', 'CalcBot', 'CLI', 'CalcError', 'ErrorKind',
           'Result', 'tokenize', 'evaluate', 'calculate', 'try_calculate')
