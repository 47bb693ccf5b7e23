"""Backtracking matcher that runs a parsed pattern over a whole text."""

from __future__ import annotations

import string

from .parser import Parser
from .regex import NFAState, NodeType, ScaleState

_SPACE = frozenset(" \t\n\v\f\r")
_DIGITS = frozenset(string.digits)
_WORD = frozenset(string.ascii_letters + string.digits + "_")


def _accepts(state: NFAState, ch: str) -> bool:
    kind = state.kind
    if kind == NodeType.LITERAL:
        return state.char == ord(ch)
    if kind == NodeType.ANY_CHAR:
        return ch != "\n"
    if kind == NodeType.SINGLE_LETTER:
        return ch in _SPACE
    if kind == NodeType.NON_SINGLE_LETTER:
        return ch not in _SPACE
    if kind == NodeType.DIGIT:
        return ch in _DIGITS
    if kind == NodeType.WORD:
        return ch in _WORD
    if kind == NodeType.NON_WORD:
        return ch not in _WORD
    if kind == NodeType.SCALE and isinstance(state, ScaleState):
        return ch in state
    return False


class ProductionFA:
    """Decides whether a pattern, back-references included, matches a whole text."""

    def __init__(self, pattern: str, text: str) -> None:
        parser = Parser(pattern)
        self.pattern = pattern
        self.text = text
        self.has_refer = parser.has_refer
        self.lookarounds = parser.lookarounds
        self.refer_count = 0
        self.match_state = parser.match_state
        self.match_state.refer_no = self.refer_count + 1
        self.match_state.group_type = 0
        self.result = self._search(parser.re.start)

    def _search(self, start: NFAState | None) -> bool:
        text = self.text
        size = len(text)
        visited: set[tuple[int, int, str]] = set()
        # Entries: (state, position, last captured text, start of current capture).
        stack: list[tuple[NFAState | None, int, str, int]] = [(start, 0, "", -1)]
        while stack:
            state, pos, group, cur_start = stack.pop()
            if pos > size:
                continue
            if pos < size and ord(text[pos]) > 255:
                raise ValueError(f"character {text[pos]!r} at {pos} is outside the byte range")
            if state is None:
                continue
            key = (state.id, pos, group)
            if key in visited:
                continue
            visited.add(key)

            kind = state.kind
            if kind == NodeType.MATCH:
                if pos == size:
                    return True
            elif kind in (NodeType.SPLIT, NodeType.BLANK):
                stack.append((state.out2, pos, group, cur_start))
                stack.append((state.out1, pos, group, cur_start))
            elif kind == NodeType.REFER_START:
                if text.startswith(group, pos):
                    stack.append((state.out1, pos + len(group), group, cur_start))
            elif kind == NodeType.GROUP_START:
                stack.append((state.out2, pos, group, pos))
                stack.append((state.out1, pos, group, pos))
            elif kind == NodeType.GROUP_END:
                stack.append((state.out1, pos, text[cur_start:pos], cur_start))
            elif pos < size and _accepts(state, text[pos]):
                stack.append((state.out1, pos + 1, group, cur_start))
        return False


def match(pattern: str, text: str) -> bool:
    """Return whether ``pattern`` matches the whole of ``text``."""
    return ProductionFA(pattern, text).result