'''
Infix lexer tests
'''

from calcbot.util import (Token, TokenKind, InvalidExpression,
                          UnexpectedToken)
from calcbot.lexer import tokenize

from pytest import raises


NUMBER = TokenKind.NUMBER
OPERATOR = TokenKind.OPERATOR
LPAREN = TokenKind.LPAREN
RPAREN = TokenKind.RPAREN


def kinds(tokens):
    return [(t.kind, t.value) for t in tokens]


def test_numbers_merge(lexer):
    assert list(lexer.lex('12.5')) == [Token('12.5', NUMBER, 0)]


def test_space_does_not_split_number():
    assert kinds(tokenize('1 2')) == [(NUMBER, '12')]


def test_malformed_numeral_is_lexed():
    # Rejecting it is the machine's job.
    assert kinds(tokenize('1.2.3')) == [(NUMBER, '1.2.3')]
    assert kinds(tokenize('.')) == [(NUMBER, '.')]


def test_binary_operators():
    assert kinds(tokenize('1+2*3')) == [(NUMBER, '1'),
                                        (OPERATOR, '+'),
                                        (NUMBER, '2'),
                                        (OPERATOR, '*'),
                                        (NUMBER, '3')]


def test_positions():
    assert [t.position for t in tokenize(' 10 - 2')] == [1, 4, 6]


def test_unary_at_start():
    assert kinds(tokenize('-3+5'))[0] == (OPERATOR, 'u-')
    assert kinds(tokenize('+3'))[0] == (OPERATOR, 'u+')


def test_unary_after_operator():
    assert kinds(tokenize('3*-2')) == [(NUMBER, '3'),
                                       (OPERATOR, '*'),
                                       (OPERATOR, 'u-'),
                                       (NUMBER, '2')]


def test_unary_after_left_parenthesis():
    assert kinds(tokenize('(-1)'))[1] == (OPERATOR, 'u-')


def test_binary_after_right_parenthesis():
    assert kinds(tokenize('(1)-1'))[3] == (OPERATOR, '-')


def test_never_unary():
    assert kinds(tokenize('*2')) == [(OPERATOR, '*'), (NUMBER, '2')]


def test_implicit_multiplication():
    tokens = tokenize('2(3+4)')
    assert tokens[1] == Token('*', OPERATOR, 1)
    assert tokens[2] == Token('(', LPAREN, 1)


def test_implicit_multiplication_between_groups():
    assert kinds(tokenize('(1)(2)')) == [(LPAREN, '('),
                                         (NUMBER, '1'),
                                         (RPAREN, ')'),
                                         (OPERATOR, '*'),
                                         (LPAREN, '('),
                                         (NUMBER, '2'),
                                         (RPAREN, ')')]


def test_no_implicit_multiplication_after_operator_or_parenthesis():
    assert (OPERATOR, '*') not in kinds(tokenize('1+(2)'))
    assert (OPERATOR, '*') not in kinds(tokenize('((2))'))


def test_unexpected_token():
    with raises(UnexpectedToken, match="'a' at 2") as info:
        tokenize('2+a')
    assert info.value.text == 'a'
    assert info.value.position == 2


def test_empty_parentheses():
    with raises(InvalidExpression):
        tokenize('()')
    with raises(InvalidExpression):
        tokenize('2*( )')


def test_empty_input():
    assert tokenize('') == []
    assert tokenize('   ') == []


def test_lexer_is_reusable(lexer):
    assert list(lexer.lex('1+1')) == list(lexer.lex('1+1'))
