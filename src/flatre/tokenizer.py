"""
Pattern tokenizer.

Turns a pattern string into a flat tuple of tokens in a single left-to-right
scan. Escapes understood outside classes:
    \\d          digit
    \\w          word character
    \\<n>        backreference (n starts with 1-9)
    \\<other>    the character itself
Inside [...] every escape is literal.
"""

from typing import List, Optional, Tuple

from .errors import UnterminatedCharClass, UnterminatedEscape
from .tokens import SIMPLE_TOKENS, Token, TokenType


class Tokenizer:
    """Tokenizes a regex pattern."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.pos = 0
        self.length = len(pattern)

    def _peek(self) -> Optional[str]:
        """Look at current character without consuming."""
        if self.pos < self.length:
            return self.pattern[self.pos]
        return None

    def _advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos < self.length:
            ch = self.pattern[self.pos]
            self.pos += 1
            return ch
        return None

    def tokenize(self) -> Tuple[Token, ...]:
        """Tokenize the whole pattern."""
        self.pos = 0
        tokens: List[Token] = []

        while self.pos < self.length:
            start = self.pos
            ch = self._peek()

            if ch == "\\":
                tokens.append(self._read_escape())
            elif ch == "[":
                tokens.append(self._read_char_class())
            elif ch in SIMPLE_TOKENS:
                self._advance()
                tokens.append(Token(SIMPLE_TOKENS[ch], None, start))
            else:
                self._advance()
                tokens.append(Token(TokenType.LITERAL, ch, start))

        return tuple(tokens)

    def _read_escape(self) -> Token:
        """Read an escape sequence outside a character class."""
        start = self.pos
        self._advance()  # consume '\\'
        ch = self._advance()

        if ch is None:
            raise UnterminatedEscape(position=start)

        if ch == "d":
            return Token(TokenType.DIGIT, None, start)
        if ch == "w":
            return Token(TokenType.WORD, None, start)

        if ch in "123456789":
            digits = ch
            while self._peek() is not None and self._peek() in "0123456789":
                digits += self._advance()
            return Token(TokenType.BACKREFERENCE, int(digits), start)

        # Identity escape
        return Token(TokenType.LITERAL, ch, start)

    def _read_char_class(self) -> Token:
        """Read a character class [...] or [^...]."""
        start = self.pos
        self._advance()  # consume '['

        negated = False
        if self._peek() == "^":
            self._advance()
            negated = True

        chars = set()
        while True:
            ch = self._advance()
            if ch is None:
                raise UnterminatedCharClass(position=start)
            if ch == "]":
                break
            if ch == "\\":
                escaped = self._advance()
                if escaped is None:
                    raise UnterminatedCharClass(position=start)
                chars.add(escaped)
            else:
                chars.add(ch)

        token_type = TokenType.NEGATED_CHAR_CLASS if negated else TokenType.CHAR_CLASS
        return Token(token_type, frozenset(chars), start)


def tokenize(pattern: str) -> Tuple[Token, ...]:
    """Convenience function returning the tokens of *pattern*."""
    return Tokenizer(pattern).tokenize()
