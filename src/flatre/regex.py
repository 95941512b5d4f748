"""
Main regex module - public interface.

Compiles a pattern once and searches subjects with it.
"""

from typing import Callable, Iterator, List, Optional, Tuple, Union

from .groups import GroupTable, number_groups
from .matcher import Captures, Matcher
from .tokenizer import tokenize
from .tokens import Token


__all__ = ['CompiledPattern', 'Match', 'compile', 'search', 'match', 'test',
           'finditer', 'findall']


class Match:
    """Result of a successful search."""

    def __init__(self, string: str, start: int, end: int, captures: Captures):
        self.string = string
        self.start = start
        self.end = end
        self._spans = ((start, end),) + tuple(captures[1:])

    @property
    def captures(self) -> Tuple[Optional[str], ...]:
        """Captured text by group id; index 0 is the whole match."""
        return tuple(
            None if span is None else self.string[span[0]:span[1]]
            for span in self._spans
        )

    def __getitem__(self, idx: int) -> Optional[str]:
        return self.group(idx)

    def __len__(self) -> int:
        return len(self._spans)

    def group(self, idx: int = 0) -> Optional[str]:
        if idx < 0 or idx >= len(self._spans):
            raise IndexError(f"No such group: {idx}")
        span = self._spans[idx]
        if span is None:
            return None
        return self.string[span[0]:span[1]]

    def groups(self) -> Tuple[Optional[str], ...]:
        return self.captures[1:]  # Exclude group 0

    def span(self, idx: int = 0) -> Tuple[int, int]:
        """(start, end) of group *idx*, or (-1, -1) if it did not take part."""
        if idx < 0 or idx >= len(self._spans):
            raise IndexError(f"No such group: {idx}")
        span = self._spans[idx]
        return (-1, -1) if span is None else span

    def __repr__(self):
        return f"Match({self.group()!r}, span=({self.start}, {self.end}))"


class CompiledPattern:
    """
    A compiled pattern.

    Compilation tokenizes the pattern and numbers its groups once; searching
    never raises.
    """

    def __init__(
        self,
        pattern: str,
        trace: Optional[Callable[[str], None]] = None
    ):
        """
        Compile *pattern*.

        Args:
            pattern: The regex pattern string
            trace: Called with a message at each matcher decision point

        Raises:
            PatternError: if the pattern is malformed
        """
        self.pattern = pattern
        self.trace = trace

        self.tokens: Tuple[Token, ...] = tokenize(pattern)
        self.groups: GroupTable = number_groups(self.tokens)
        self._matcher = Matcher(self.tokens, self.groups, trace)

    @property
    def group_count(self) -> int:
        return self.groups.count

    def __eq__(self, other):
        if not isinstance(other, CompiledPattern):
            return NotImplemented
        return self.tokens == other.tokens and self.groups == other.groups

    def __hash__(self):
        # Group tables are derived from the tokens
        return hash(self.tokens)

    def __repr__(self):
        return f"CompiledPattern({self.pattern!r})"

    def search(self, string: str, start: int = 0) -> Optional[Match]:
        """
        Search for the leftmost match.

        Args:
            string: The string to search
            start: First start offset to try

        Returns:
            Match or None if no match
        """
        # len(string) is included so empty-width patterns can match at the end
        for offset in range(start, len(string) + 1):
            result = self._matcher.match_at(string, offset)
            if result is not None:
                end, captures = result
                return Match(string, offset, end, captures)
        return None

    def test(self, string: str) -> bool:
        return self.search(string) is not None

    def finditer(self, string: str) -> Iterator[Match]:
        """Yield all non-overlapping matches from left to right."""
        position = 0
        while position <= len(string):
            found = self.search(string, position)
            if found is None:
                return
            yield found
            position = found.end if found.end > found.start else found.end + 1

    def findall(self, string: str) -> List[str]:
        return [found.group() for found in self.finditer(string)]


PatternLike = Union[str, CompiledPattern]


def compile(pattern: str, trace: Optional[Callable[[str], None]] = None) -> CompiledPattern:
    """
    Compile a pattern.

    Args:
        pattern: The regex pattern
        trace: Optional trace collaborator

    Returns:
        CompiledPattern

    Raises:
        PatternError: if the pattern is malformed
    """
    return CompiledPattern(pattern, trace)


def _compiled(pattern: PatternLike) -> CompiledPattern:
    if isinstance(pattern, CompiledPattern):
        return pattern
    return CompiledPattern(pattern)


def search(pattern: PatternLike, string: str) -> Optional[Match]:
    """
    Search for pattern in string.

    Args:
        pattern: The regex pattern or a compiled pattern
        string: The string to search

    Returns:
        Match or None
    """
    return _compiled(pattern).search(string)


def match(string: str, pattern: PatternLike) -> bool:
    """
    Test whether *string* contains a match of *pattern*.

    Args:
        string: The subject line
        pattern: The regex pattern or a compiled pattern

    Returns:
        True if matches, False otherwise
    """
    return _compiled(pattern).test(string)


def test(pattern: PatternLike, string: str) -> bool:
    """Pattern-first spelling of :func:`match`."""
    return _compiled(pattern).test(string)


def finditer(pattern: PatternLike, string: str) -> Iterator[Match]:
    return _compiled(pattern).finditer(string)


def findall(pattern: PatternLike, string: str) -> List[str]:
    return _compiled(pattern).findall(string)
