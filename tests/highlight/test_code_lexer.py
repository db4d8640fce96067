"""
Тесты для лексера листингов кода.

Проверяет корректную токенизацию:
- разделителей и переводов строк
- серий пробелов
- идентификаторов и чисел максимальной длины
- ошибок на нераспознанных символах
"""

import pytest

from sxdoc.errors import InvalidCharacterError
from sxdoc.highlight.lexer import CodeLexer, tokenize
from sxdoc.highlight.tokens import TokenType


def _kinds(tokens):
    return [(t.type, t.text) for t in tokens]


def test_simple_expression():
    tokens = tokenize("(+ 1 2)")

    assert _kinds(tokens) == [
        (TokenType.LDELIM, "("),
        (TokenType.IDENTIFIER, "+"),
        (TokenType.WHITESPACE, " "),
        (TokenType.NUMERAL, "1"),
        (TokenType.WHITESPACE, " "),
        (TokenType.NUMERAL, "2"),
        (TokenType.RDELIM, ")"),
    ]
    assert tokens[2].count == 1


def test_empty_text():
    assert tokenize("") == []


def test_tokenize_is_deterministic():
    text = "(define (square x)\n  (* x x))"
    assert tokenize(text) == tokenize(text)


def test_whitespace_run_is_one_token():
    tokens = tokenize("a    b")

    assert _kinds(tokens) == [
        (TokenType.IDENTIFIER, "a"),
        (TokenType.WHITESPACE, "    "),
        (TokenType.IDENTIFIER, "b"),
    ]
    assert tokens[1].count == 4


@pytest.mark.parametrize("text", ["list->vector", "set!", "a1b2", "!$%^&*-_=+:<>/?", "<=", "x?"])
def test_identifier_maximal_munch(text):
    assert _kinds(tokenize(text)) == [(TokenType.IDENTIFIER, text)]


def test_numeral_then_identifier():
    assert _kinds(tokenize("123abc")) == [
        (TokenType.NUMERAL, "123"),
        (TokenType.IDENTIFIER, "abc"),
    ]


def test_unicode_letters_are_symbol_chars():
    assert _kinds(tokenize("λx")) == [(TokenType.IDENTIFIER, "λx")]


def test_newlines_and_positions():
    tokens = tokenize("(a\n b)")

    assert [t.type for t in tokens] == [
        TokenType.LDELIM,
        TokenType.IDENTIFIER,
        TokenType.NEWLINE,
        TokenType.WHITESPACE,
        TokenType.IDENTIFIER,
        TokenType.RDELIM,
    ]
    b = tokens[4]
    assert (b.position, b.line, b.column) == (4, 2, 2)


class TestInvalidCharacters:

    def test_hash(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("#")
        assert exc_info.value.char == "#"
        assert exc_info.value.position == 0

    def test_position_inside_text(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            tokenize("(a #b)")
        error = exc_info.value
        assert (error.char, error.position, error.line, error.column) == ("#", 3, 1, 4)

    @pytest.mark.parametrize("char", ["\t", "\r", "[", "'", '"', ".", ";"])
    def test_unrecognized_classes(self, char):
        with pytest.raises(InvalidCharacterError):
            tokenize(f"a{char}b")

    def test_no_partial_result(self):
        lexer = CodeLexer("(ok) #")
        with pytest.raises(InvalidCharacterError):
            lexer.tokenize()


@pytest.mark.parametrize("text, char, position", [
    ("x²", "²", 1),
    ("½", "½", 0),
    ("a٣", "٣", 1),
])
def test_non_letter_alphanumerics_are_invalid(text, char, position):
    # Надстрочные цифры, дроби и не-ASCII цифры не являются буквами
    with pytest.raises(InvalidCharacterError) as exc_info:
        tokenize(text)

    assert (exc_info.value.char, exc_info.value.position) == (char, position)
