from functools import reduce
import operator

import regex

from .util import Token, TokenKind, UnexpectedToken, InvalidExpression
from .machine import Machine


class Lexer:
    '''
    Lexer for the infix arithmetic grammar.

    Holds no state between calls; one instance may lex any number of
    expressions, concurrently or not.
    '''
    # Digits and the decimal point. Well-formedness of the numeral is the
    # machine's business.
    NUMBER = r'[0-9.]'

    assert not [symbol
                for symbol
                in Machine.SYMBOLS
                if len(symbol) != 1]
    OPERATOR = r'[' + r''.join(map(regex.escape, Machine.SYMBOLS)) + r']'
    LPAREN = r'\('
    RPAREN = r'\)'
    SPACE = r'\s'

    # All possible lexemes, one character each.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<lparen>' + LPAREN + r')|' \
             r'(?<rparen>' + RPAREN + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    # Operators that turn unary where no left operand precedes them.
    PREFIXABLE = '+', '-'

    def lex(self, expression):
        '''
        Take an expression and yield its tokens, each once complete.

        Raises UnexpectedToken on the first unknown character and
        InvalidExpression on an empty parenthesis group.
        '''
        previous = None
        for position, character in enumerate(expression):
            match = type(self).PATTERN.fullmatch(character)
            if match is None:
                raise UnexpectedToken(character, position)
            group = match.lastgroup
            if group == 'space':
                continue
            if group == 'number':
                if previous is not None and previous.kind is TokenKind.NUMBER:
                    previous.value += character
                    continue
                new = [Token(character, TokenKind.NUMBER, position)]
            elif group == 'operator':
                if self.isprefix(character, previous):
                    character = 'u' + character
                new = [Token(character, TokenKind.OPERATOR, position)]
            elif group == 'lparen':
                new = [Token(character, TokenKind.LPAREN, position)]
                # 2(3+4), (1)(2)
                if previous is not None and \
                   previous.kind in {TokenKind.NUMBER, TokenKind.RPAREN}:
                    new.insert(0, Token('*', TokenKind.OPERATOR, position))
            else:
                if previous is not None and previous.kind is TokenKind.LPAREN:
                    raise InvalidExpression(
                        'Empty parentheses at {0}'.format(position),
                        '()', previous.position)
                new = [Token(character, TokenKind.RPAREN, position)]
            for token in new:
                if previous is not None:
                    yield previous
                previous = token
        if previous is not None:
            yield previous

    def isprefix(self, symbol, previous):
        '''
        Return True if operator symbol has no left operand to bind to.
        '''
        return symbol in type(self).PREFIXABLE and \
            (previous is None or
             previous.kind in {TokenKind.OPERATOR, TokenKind.LPAREN})


def tokenize(expression):
    '''
    Return the list of tokens of expression.
    '''
    return list(Lexer().lex(expression))
