"""
flatre - a small backtracking regular expression engine.

Supports literals, \\d, \\w, [...] and [^...] classes, '.', '^', '$',
greedy '+' and '?', capturing groups, alternation and backreferences.
Patterns are matched as slices of one flat token tuple rather than as a
parse tree.
"""

__version__ = "0.1.0"

from .errors import (
    PatternError,
    PatternErrorKind,
    UnbalancedGroup,
    UnbalancedGroupError,
    UnterminatedCharClass,
    UnterminatedEscape,
)
from .regex import (
    CompiledPattern,
    Match,
    compile,
    findall,
    finditer,
    match,
    search,
    test,
)

__all__ = [
    "CompiledPattern",
    "Match",
    "PatternError",
    "PatternErrorKind",
    "UnbalancedGroup",
    "UnbalancedGroupError",
    "UnterminatedCharClass",
    "UnterminatedEscape",
    "compile",
    "findall",
    "finditer",
    "match",
    "search",
    "test",
]
