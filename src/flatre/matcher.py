"""
Backtracking matcher.

Evaluates contiguous slices [lo, hi) of a flat token tuple against a subject
string. There is no parse tree: groups and alternation are located by index
arithmetic over the token tuple.

Capture state is a tuple of (start, end) spans, one slot per group id. Tuples
are immutable, so every branch point (alternation choice, quantifier
backtrack step, group repetition) works on its own value and a failed branch
can never leak captures into a sibling.
"""

import string
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .groups import GroupTable
from .tokens import ATOMS, QUANTIFIABLE, QUANTIFIERS, Token, TokenType


Span = Tuple[int, int]
Captures = Tuple[Optional[Span], ...]
AttemptResult = Optional[Tuple[int, Captures]]

DIGITS = frozenset(string.digits)
WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")

# Quantifiers that do not follow an atom match their own character
STRAY_QUANTIFIER_CHARS = {
    TokenType.PLUS: "+",
    TokenType.QUESTION: "?",
}


class Matcher:
    """
    Recursive slice matcher for one compiled pattern.

    Instances hold no per-subject state and can be reused for any number of
    subjects.
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        groups: GroupTable,
        trace: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize matcher.

        Args:
            tokens: Token tuple from the tokenizer
            groups: Group table for *tokens*
            trace: Called with a message at each decision point
        """
        self.tokens = tokens
        self.groups = groups
        self.trace = trace
        self._alternatives: Dict[Tuple[int, int], Optional[List[Span]]] = {}

    def new_captures(self) -> Captures:
        """Fresh capture context with every slot unset."""
        return (None,) * (self.groups.count + 1)

    def match_at(self, subject: str, start_offset: int) -> AttemptResult:
        """Attempt the whole pattern starting at *start_offset*."""
        return self.attempt(subject, 0, len(self.tokens), start_offset,
                            start_offset, self.new_captures())

    def attempt(
        self,
        subject: str,
        lo: int,
        hi: int,
        cursor: int,
        start_offset: int,
        captures: Captures
    ) -> AttemptResult:
        """
        Match the token slice [lo, hi) against *subject* at *cursor*.

        Args:
            subject: String being matched
            lo, hi: Token slice bounds
            cursor: Position in *subject*
            start_offset: Where the top-level attempt began; passed through
                unchanged and not consulted, since '^' tests the cursor
                against 0
            captures: Incoming capture context

        Returns:
            (end_cursor, captures) on success, None on failure
        """
        alternatives = self._split_alternatives(lo, hi)
        if alternatives is None:
            return self._sequence(subject, lo, hi, cursor, start_offset, captures)

        for number, (alt_lo, alt_hi) in enumerate(alternatives, 1):
            if self.trace is not None:
                self.trace(f"alternative {number}/{len(alternatives)} "
                           f"tokens [{alt_lo}:{alt_hi}) at {cursor}")
            result = self._sequence(subject, alt_lo, alt_hi, cursor,
                                    start_offset, captures)
            if result is not None:
                return result
        return None

    def _split_alternatives(self, lo: int, hi: int) -> Optional[List[Span]]:
        """Split [lo, hi) at depth-0 bars; None when there are none."""
        key = (lo, hi)
        if key in self._alternatives:
            return self._alternatives[key]

        bars = []
        depth = 0
        for index in range(lo, hi):
            token_type = self.tokens[index].type
            if token_type == TokenType.GROUP_OPEN:
                depth += 1
            elif token_type == TokenType.GROUP_CLOSE:
                depth -= 1
            elif token_type == TokenType.ALTERNATION and depth == 0:
                bars.append(index)

        result = None
        if bars:
            starts = [lo] + [bar + 1 for bar in bars]
            ends = bars + [hi]
            result = list(zip(starts, ends))
        self._alternatives[key] = result
        return result

    def _quantifier_at(self, index: int, hi: int) -> Optional[TokenType]:
        """Quantifier type at *index* if it applies to the token before it."""
        if index >= hi or self.tokens[index].type not in QUANTIFIERS:
            return None
        if self.tokens[index - 1].type not in QUANTIFIABLE:
            return None
        return self.tokens[index].type

    def _sequence(
        self,
        subject: str,
        lo: int,
        hi: int,
        cursor: int,
        start_offset: int,
        captures: Captures
    ) -> AttemptResult:
        """Walk a slice with no top-level alternation."""
        index = lo
        while index < hi:
            token = self.tokens[index]
            token_type = token.type

            if token_type == TokenType.START_ANCHOR:
                if cursor != 0:
                    return None
                index += 1

            elif token_type == TokenType.END_ANCHOR:
                if cursor != len(subject):
                    return None
                index += 1

            elif token_type == TokenType.GROUP_OPEN:
                # Everything after the group is handled as its continuation
                return self._group(subject, index, hi, cursor, start_offset, captures)

            elif token_type == TokenType.BACKREFERENCE:
                end = self._backreference(subject, token.value, cursor, captures)
                if end is None:
                    return None
                cursor = end
                index += 1

            elif token_type in ATOMS:
                quantifier = self._quantifier_at(index + 1, hi)
                if quantifier == TokenType.PLUS:
                    return self._atom_plus(subject, index, hi, cursor,
                                           start_offset, captures)
                if quantifier == TokenType.QUESTION:
                    return self._atom_question(subject, index, hi, cursor,
                                               start_offset, captures)
                if not self._atom_matches(token, subject, cursor):
                    return None
                cursor += 1
                index += 1

            elif token_type in STRAY_QUANTIFIER_CHARS:
                if (cursor >= len(subject)
                        or subject[cursor] != STRAY_QUANTIFIER_CHARS[token_type]):
                    return None
                cursor += 1
                index += 1

            else:
                raise AssertionError(f"Unexpected token in slice: {token!r}")

        return cursor, captures

    def _atom_matches(self, token: Token, subject: str, cursor: int) -> bool:
        """Test one subject character against an atom."""
        if cursor >= len(subject):
            matched = False
        else:
            ch = subject[cursor]
            token_type = token.type
            if token_type == TokenType.LITERAL:
                matched = ch == token.value
            elif token_type == TokenType.DIGIT:
                matched = ch in DIGITS
            elif token_type == TokenType.WORD:
                matched = ch in WORD_CHARS
            elif token_type == TokenType.CHAR_CLASS:
                matched = ch in token.value
            elif token_type == TokenType.NEGATED_CHAR_CLASS:
                matched = ch not in token.value
            else:  # ANY
                matched = True

        if self.trace is not None:
            self.trace(f"test {token!r} at {cursor}: {'ok' if matched else 'fail'}")
        return matched

    def _atom_plus(
        self,
        subject: str,
        index: int,
        hi: int,
        cursor: int,
        start_offset: int,
        captures: Captures
    ) -> AttemptResult:
        """Greedy one-or-more of a single atom."""
        token = self.tokens[index]
        if not self._atom_matches(token, subject, cursor):
            return None

        longest = 1
        while self._atom_matches(token, subject, cursor + longest):
            longest += 1

        for count in range(longest, 0, -1):
            if self.trace is not None:
                self.trace(f"{token!r}+ backtrack: trying {count} of {longest}")
            result = self._sequence(subject, index + 2, hi, cursor + count,
                                    start_offset, captures)
            if result is not None:
                return result
        return None

    def _atom_question(
        self,
        subject: str,
        index: int,
        hi: int,
        cursor: int,
        start_offset: int,
        captures: Captures
    ) -> AttemptResult:
        """Greedy zero-or-one of a single atom."""
        token = self.tokens[index]
        if self._atom_matches(token, subject, cursor):
            result = self._sequence(subject, index + 2, hi, cursor + 1,
                                    start_offset, captures)
            if result is not None:
                return result

        if self.trace is not None:
            self.trace(f"{token!r}? backtrack: trying 0")
        return self._sequence(subject, index + 2, hi, cursor, start_offset, captures)

    def _enter_group(
        self,
        subject: str,
        open_index: int,
        cursor: int,
        start_offset: int,
        captures: Captures
    ) -> AttemptResult:
        """Match one repetition of a group and record its capture."""
        close_index = self.groups.close_index(open_index)
        group_id = self.groups.group_id(open_index)

        if self.trace is not None:
            self.trace(f"enter group {group_id} at {cursor}")
        result = self.attempt(subject, open_index + 1, close_index, cursor,
                              start_offset, captures)
        if result is None:
            if self.trace is not None:
                self.trace(f"group {group_id} failed at {cursor}")
            return None

        end, inner = result
        if group_id > 0:
            inner = inner[:group_id] + ((cursor, end),) + inner[group_id + 1:]
        if self.trace is not None:
            self.trace(f"exit group {group_id} at {end}: {subject[cursor:end]!r}")
        return end, inner

    def _group(
        self,
        subject: str,
        open_index: int,
        hi: int,
        cursor: int,
        start_offset: int,
        captures: Captures
    ) -> AttemptResult:
        """Match a group, its quantifier and the rest of the slice."""
        close_index = self.groups.close_index(open_index)
        quantifier = self._quantifier_at(close_index + 1, hi)
        rest = close_index + 2 if quantifier is not None else close_index + 1

        first = self._enter_group(subject, open_index, cursor, start_offset, captures)

        if quantifier is None:
            if first is None:
                return None
            return self._sequence(subject, rest, hi, first[0], start_offset, first[1])

        if quantifier == TokenType.QUESTION:
            if first is not None:
                result = self._sequence(subject, rest, hi, first[0],
                                        start_offset, first[1])
                if result is not None:
                    return result
            if self.trace is not None:
                self.trace(f"group {self.groups.group_id(open_index)}? "
                           f"backtrack: trying 0")
            return self._sequence(subject, rest, hi, cursor, start_offset, captures)

        # PLUS
        if first is None:
            return None
        repetitions = [first]
        while True:
            previous_end, previous_captures = repetitions[-1]
            following = self._enter_group(subject, open_index, previous_end,
                                          start_offset, previous_captures)
            # An empty repetition would loop forever
            if following is None or following[0] == previous_end:
                break
            repetitions.append(following)

        for count in range(len(repetitions), 0, -1):
            end, repeated_captures = repetitions[count - 1]
            if self.trace is not None:
                self.trace(f"group {self.groups.group_id(open_index)}+ backtrack: "
                           f"trying {count} of {len(repetitions)}")
            result = self._sequence(subject, rest, hi, end, start_offset,
                                    repeated_captures)
            if result is not None:
                return result
        return None

    def _backreference(
        self,
        subject: str,
        number: int,
        cursor: int,
        captures: Captures
    ) -> Optional[int]:
        """Return the cursor after the referenced text, or None."""
        span = captures[number] if 0 < number < len(captures) else None
        if span is None:
            if self.trace is not None:
                self.trace(f"backreference \\{number} unset")
            return None

        text = subject[span[0]:span[1]]
        matched = subject.startswith(text, cursor)
        if self.trace is not None:
            self.trace(f"backreference \\{number} {text!r} at {cursor}: "
                       f"{'ok' if matched else 'fail'}")
        if not matched:
            return None
        return cursor + len(text)
