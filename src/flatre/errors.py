"""Pattern compilation error types."""

from enum import Enum, auto


class PatternErrorKind(Enum):
    """Kinds of malformed pattern."""

    UNTERMINATED_ESCAPE = auto()
    UNTERMINATED_CHAR_CLASS = auto()
    UNBALANCED_GROUP = auto()


class PatternError(Exception):
    """Base class for all pattern compilation errors."""

    def __init__(self, message: str, kind: PatternErrorKind, position: int = -1):
        self.message = message
        self.kind = kind
        self.position = position
        # Include position in error message if known
        if position >= 0:
            formatted_message = f"{message} (position {position})"
        else:
            formatted_message = message
        super().__init__(formatted_message)


class UnterminatedEscape(PatternError):
    """Pattern ends with a bare backslash."""

    def __init__(self, message: str = "Trailing backslash", position: int = -1):
        super().__init__(message, PatternErrorKind.UNTERMINATED_ESCAPE, position)


class UnterminatedCharClass(PatternError):
    """Character class without a closing ']'."""

    def __init__(self, message: str = "Unterminated character class", position: int = -1):
        super().__init__(message, PatternErrorKind.UNTERMINATED_CHAR_CLASS, position)


class UnbalancedGroupError(PatternError):
    """Unmatched '(' or ')'."""

    def __init__(self, message: str = "Unbalanced group", position: int = -1):
        super().__init__(message, PatternErrorKind.UNBALANCED_GROUP, position)


UnbalancedGroup = UnbalancedGroupError
