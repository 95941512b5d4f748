"""Tests for the pattern tokenizer."""

import pytest
from flatre.tokenizer import Tokenizer, tokenize
from flatre.tokens import Token, TokenType
from flatre.errors import (
    PatternErrorKind,
    UnterminatedCharClass,
    UnterminatedEscape,
)


def types(pattern):
    return [token.type for token in tokenize(pattern)]


class TestTokenizerBasics:
    """Basic tokenizer functionality tests."""

    def test_empty_pattern(self):
        """Empty pattern produces no tokens."""
        assert tokenize("") == ()

    def test_literals(self):
        tokens = tokenize("ab")
        assert tokens == (
            Token(TokenType.LITERAL, "a"),
            Token(TokenType.LITERAL, "b"),
        )

    def test_returns_tuple(self):
        assert isinstance(tokenize("abc"), tuple)

    def test_metacharacters(self):
        assert types("^$+?.()|") == [
            TokenType.START_ANCHOR,
            TokenType.END_ANCHOR,
            TokenType.PLUS,
            TokenType.QUESTION,
            TokenType.ANY,
            TokenType.GROUP_OPEN,
            TokenType.GROUP_CLOSE,
            TokenType.ALTERNATION,
        ]

    def test_other_characters_are_literal(self):
        """Characters with no special meaning, '*' and '{' included."""
        tokens = tokenize("*{} -]")
        assert all(token.type == TokenType.LITERAL for token in tokens)
        assert [token.value for token in tokens] == list("*{} -]")

    def test_positions(self):
        tokens = tokenize(r"a\d[xy]b")
        assert [token.position for token in tokens] == [0, 1, 3, 7]

    def test_position_ignored_in_equality(self):
        assert Token(TokenType.LITERAL, "a", 0) == Token(TokenType.LITERAL, "a", 5)


class TestTokenizerEscapes:
    """Escape sequence tests."""

    def test_digit(self):
        assert types(r"\d") == [TokenType.DIGIT]

    def test_word(self):
        assert types(r"\w") == [TokenType.WORD]

    def test_backreference(self):
        assert tokenize(r"\1") == (Token(TokenType.BACKREFERENCE, 1),)

    def test_multi_digit_backreference(self):
        assert tokenize(r"\12") == (Token(TokenType.BACKREFERENCE, 12),)

    def test_backreference_with_zero(self):
        assert tokenize(r"\10a") == (
            Token(TokenType.BACKREFERENCE, 10),
            Token(TokenType.LITERAL, "a"),
        )

    def test_backslash_zero_is_literal(self):
        assert tokenize(r"\0") == (Token(TokenType.LITERAL, "0"),)

    @pytest.mark.parametrize("ch", list(".+?()[]|^$\\"))
    def test_escaped_metacharacter(self, ch):
        assert tokenize("\\" + ch) == (Token(TokenType.LITERAL, ch),)

    def test_unknown_escape_is_literal(self):
        """Letters other than d and w stand for themselves."""
        assert tokenize(r"\n\s") == (
            Token(TokenType.LITERAL, "n"),
            Token(TokenType.LITERAL, "s"),
        )

    def test_trailing_backslash(self):
        with pytest.raises(UnterminatedEscape) as exc_info:
            tokenize("abc\\")
        assert exc_info.value.kind == PatternErrorKind.UNTERMINATED_ESCAPE
        assert exc_info.value.position == 3

    def test_lone_backslash(self):
        with pytest.raises(UnterminatedEscape):
            tokenize("\\")


class TestTokenizerCharClass:
    """Character class tests."""

    def test_simple_class(self):
        assert tokenize("[abc]") == (
            Token(TokenType.CHAR_CLASS, frozenset("abc")),
        )

    def test_negated_class(self):
        assert tokenize("[^abc]") == (
            Token(TokenType.NEGATED_CHAR_CLASS, frozenset("abc")),
        )

    def test_caret_not_first_is_member(self):
        assert tokenize("[a^]") == (
            Token(TokenType.CHAR_CLASS, frozenset("a^")),
        )

    def test_metacharacters_inside_class(self):
        assert tokenize("[.+(|]") == (
            Token(TokenType.CHAR_CLASS, frozenset(".+(|")),
        )

    def test_escaped_bracket(self):
        assert tokenize(r"[\]a]") == (
            Token(TokenType.CHAR_CLASS, frozenset("]a")),
        )

    def test_escape_inside_class_is_literal(self):
        """\\d inside a class is the letter d."""
        assert tokenize(r"[\d\\]") == (
            Token(TokenType.CHAR_CLASS, frozenset("d\\")),
        )

    def test_empty_class(self):
        assert tokenize("[]") == (Token(TokenType.CHAR_CLASS, frozenset()),)

    def test_class_followed_by_tokens(self):
        assert types("[ab]+c") == [
            TokenType.CHAR_CLASS,
            TokenType.PLUS,
            TokenType.LITERAL,
        ]

    def test_unterminated_class(self):
        with pytest.raises(UnterminatedCharClass) as exc_info:
            tokenize("x[abc")
        assert exc_info.value.kind == PatternErrorKind.UNTERMINATED_CHAR_CLASS
        assert exc_info.value.position == 1

    def test_unterminated_after_escape(self):
        with pytest.raises(UnterminatedCharClass):
            tokenize(r"[ab\]")

    def test_backslash_at_end_of_class(self):
        with pytest.raises(UnterminatedCharClass):
            tokenize("[ab\\")


class TestTokenizerReuse:
    def test_tokenizer_is_deterministic(self):
        tokenizer = Tokenizer(r"(\w+) \1|[^x]?")
        assert tokenizer.tokenize() == tokenizer.tokenize()
        assert tokenize(r"(\w+) \1|[^x]?") == tokenizer.tokenize()
