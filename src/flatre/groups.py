"""Capture group numbering."""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from .errors import UnbalancedGroupError
from .tokens import Token, TokenType


@dataclass(frozen=True)
class GroupTable:
    """Group ids and closing positions, keyed by GROUP_OPEN token index."""

    ids: Dict[int, int]
    closing: Dict[int, int]
    count: int

    def __hash__(self):
        return hash((tuple(sorted(self.ids.items())),
                     tuple(sorted(self.closing.items())),
                     self.count))

    def group_id(self, open_index: int) -> int:
        return self.ids[open_index]

    def close_index(self, open_index: int) -> int:
        return self.closing[open_index]


def number_groups(tokens: Sequence[Token]) -> GroupTable:
    """
    Assign group ids left to right and check that parentheses balance.

    Ids follow the position of the opening '(' only, so in ``(a(b))(c)`` the
    groups are numbered 1, 2, 3 from left to right.

    Raises:
        UnbalancedGroupError: on a stray ')' or an unclosed '('.
    """
    ids: Dict[int, int] = {}
    closing: Dict[int, int] = {}
    stack: List[int] = []
    next_id = 1

    for index, token in enumerate(tokens):
        if token.type == TokenType.GROUP_OPEN:
            ids[index] = next_id
            next_id += 1
            stack.append(index)
        elif token.type == TokenType.GROUP_CLOSE:
            if not stack:
                raise UnbalancedGroupError("Unmatched ')'", token.position)
            closing[stack.pop()] = index

    if stack:
        raise UnbalancedGroupError("Unterminated group", tokens[stack[-1]].position)

    return GroupTable(ids, closing, next_id - 1)
