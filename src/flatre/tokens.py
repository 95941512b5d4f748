"""Token types for the pattern tokenizer."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class TokenType(Enum):
    """Pattern token types."""

    # Atoms
    LITERAL = auto()
    DIGIT = auto()  # \d
    WORD = auto()  # \w
    CHAR_CLASS = auto()  # [...]
    NEGATED_CHAR_CLASS = auto()  # [^...]
    ANY = auto()  # .

    # Anchors
    START_ANCHOR = auto()  # ^
    END_ANCHOR = auto()  # $

    # Quantifiers
    PLUS = auto()  # +
    QUESTION = auto()  # ?

    # Structure
    GROUP_OPEN = auto()  # (
    GROUP_CLOSE = auto()  # )
    ALTERNATION = auto()  # |

    BACKREFERENCE = auto()  # \1, \2, ...


# Single-character metacharacters
SIMPLE_TOKENS = {
    "^": TokenType.START_ANCHOR,
    "$": TokenType.END_ANCHOR,
    "+": TokenType.PLUS,
    "?": TokenType.QUESTION,
    ".": TokenType.ANY,
    "(": TokenType.GROUP_OPEN,
    ")": TokenType.GROUP_CLOSE,
    "|": TokenType.ALTERNATION,
}

# Tokens that test exactly one subject character
ATOMS = frozenset({
    TokenType.LITERAL,
    TokenType.DIGIT,
    TokenType.WORD,
    TokenType.CHAR_CLASS,
    TokenType.NEGATED_CHAR_CLASS,
    TokenType.ANY,
})

QUANTIFIERS = frozenset({TokenType.PLUS, TokenType.QUESTION})

# Tokens a quantifier may follow
QUANTIFIABLE = ATOMS | {TokenType.GROUP_CLOSE}


@dataclass(frozen=True)
class Token:
    """A token from the pattern source."""

    type: TokenType
    value: Any = None
    position: int = field(default=-1, compare=False)

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r})"
        return f"Token({self.type.name})"
