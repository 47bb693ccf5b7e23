"""Regular-expression syntax tree nodes and the NFA fragments they build."""

from __future__ import annotations

import itertools
import sys
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Iterable

UNBOUNDED = sys.maxsize

_state_ids = itertools.count()


class NodeType(IntEnum):
    """Kinds of NFA states; literal states carry their character separately."""

    LITERAL = 0
    SPLIT = 256
    MATCH = 257
    REV_MATCH = 258
    TAB = 280
    NEWLINE = 281
    RETURN = 282
    DIGIT = 283
    WHITESPACE = 284
    NON_WHITESPACE = 285
    SINGLE_LETTER = 286
    NON_SINGLE_LETTER = 287
    NEW_PAGE = 288
    ESCAPE = 289
    BOUNDARY = 290
    NON_BOUNDARY = 291
    ANY_CHAR = 292
    UNSUPPORTED = 293
    BLANK = 294
    SCALE = 295
    WORD = 296
    NON_WORD = 297
    NEG_SCALE = 298
    GROUP_START = 299
    GROUP_END = 300
    REFER_START = 301
    REFER_END = 302
    LOOK_AROUND = 303
    META_CHARACTER = 304


class RegexError(ValueError):
    """Raised when a regular expression cannot be built."""


class NFAState:
    """One state of the NFA, with up to two outgoing edges."""

    def __init__(
        self,
        kind: NodeType,
        out1: NFAState | None = None,
        out2: NFAState | None = None,
        *,
        char: int | None = None,
        refer_no: int = -1,
    ) -> None:
        self.kind = kind
        self.out1 = out1
        self.out2 = out2
        self.char = char
        self.refer_no = refer_no
        self.group_type = -1
        self.look_around_no = 0
        self.reverse_out: list[NFAState] = []
        self.id = next(_state_ids)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, kind={self.kind.name}, char={self.char!r})"


class ScaleState(NFAState):
    """A state accepting any byte in a 256-bit character set."""

    def __init__(self, scale: int) -> None:
        super().__init__(NodeType.SCALE)
        self.scale = scale

    def __contains__(self, ch: object) -> bool:
        code = ord(ch) if isinstance(ch, str) else ch
        if not isinstance(code, int) or not 0 <= code < 256:
            return False
        return bool((self.scale >> code) & 1)


class LookAroundState(NFAState):
    """A state guarding a look-ahead or look-behind sub-automaton."""

    def __init__(
        self,
        ahead: bool,
        positive: bool,
        inner_start: NFAState | None,
        match_state: NFAState,
        has_refer: bool = False,
    ) -> None:
        super().__init__(NodeType.LOOK_AROUND)
        self.ahead = ahead
        self.positive = positive
        self.inner_start = inner_start
        self.match_state = match_state
        self.has_refer = has_refer


def _append(first: list[NFAState], second: Iterable[NFAState | None]) -> list[NFAState]:
    first.extend(state for state in second if state is not None)
    return first


def _patch1(states: Iterable[NFAState], target: NFAState) -> None:
    for state in states:
        state.out1 = target
        target.reverse_out.append(state)


def _patch2(states: Iterable[NFAState], target: NFAState) -> None:
    for state in states:
        state.out2 = target
        target.reverse_out.append(state)


def _is_group_start(state: NFAState | None) -> bool:
    return state is not None and state.kind in (NodeType.GROUP_START, NodeType.REFER_START)


class Regex(ABC):
    """A node of the parsed expression together with its NFA fragment."""

    def __init__(self) -> None:
        self.min_len = 0
        self.max_len = 0
        self.is_prefix = False
        self.is_suffix = False
        self.group_id = -1
        self.is_reference = False
        self.refer_no = -1
        self.start: NFAState | None = None
        self.out1: list[NFAState] = []
        self.out2: list[NFAState] = []
        self.old_out1: list[NFAState] | None = None
        self.old_out2: list[NFAState] | None = None

    @abstractmethod
    def copy(self) -> Regex:
        """Return a structurally equal node with a fresh NFA fragment."""

    def set_group_state(self, is_group: bool, is_reference: bool, refer_no: int) -> None:
        """Wrap the fragment between group (or reference) start and end states."""
        if is_group:
            start_kind, end_kind = NodeType.GROUP_START, NodeType.GROUP_END
        elif is_reference:
            start_kind, end_kind = NodeType.REFER_START, NodeType.REFER_END
        else:
            return
        new_start = NFAState(start_kind, self.start, refer_no=refer_no)
        new_out = NFAState(end_kind, refer_no=refer_no)
        _patch1(self.out1, new_out)
        _patch2(self.out2, new_out)
        self.old_out1 = self.out1
        self.old_out2 = self.out2
        self.start = new_start
        self.out1 = [new_out]
        self.out2 = []


class Blank(Regex):
    """The empty expression."""

    def __init__(self) -> None:
        super().__init__()
        state = NFAState(NodeType.BLANK)
        self.start = state
        self.out1 = [state]

    def copy(self) -> Blank:
        return Blank()

    def __str__(self) -> str:
        return "Blank"


class Refer(Regex):
    """A back-reference to a capture group."""

    def __init__(self) -> None:
        super().__init__()
        state = NFAState(NodeType.REFER_START)
        self.start = state
        self.out1 = [state]

    def copy(self) -> Regex:
        raise RegexError("a back-reference cannot be copied")

    def __str__(self) -> str:
        return ""


class AnyChar(Regex):
    """The '.' wildcard."""

    def __init__(self) -> None:
        super().__init__()
        state = NFAState(NodeType.ANY_CHAR)
        self.start = state
        self.out1 = [state]
        self.min_len = self.max_len = 1

    def copy(self) -> AnyChar:
        return AnyChar()

    def __str__(self) -> str:
        return "[AnyCharacter]"


class Choice(Regex):
    """Alternation of two expressions."""

    def __init__(self, this_one: Regex, that_one: Regex) -> None:
        super().__init__()
        self.this_one = this_one
        self.that_one = that_one
        self.start = NFAState(NodeType.SPLIT, this_one.start, that_one.start)
        self.out1 = _append(this_one.out1, that_one.out1)
        self.out2 = _append(this_one.out2, that_one.out2)
        self.min_len = min(this_one.min_len, that_one.min_len)
        self.max_len = max(this_one.max_len, that_one.max_len)

    def copy(self) -> Choice:
        return Choice(self.this_one.copy(), self.that_one.copy())

    def __str__(self) -> str:
        return f"[choice in{self.this_one} and {self.that_one}]"


def _char_code(value: str | int) -> int:
    return ord(value) if isinstance(value, str) else value


class MultiChoice(Regex):
    """A bracketed character class over the 256 byte values."""

    _FULL = (1 << 256) - 1

    def __init__(self, low: str | int | None = None, high: str | int | None = None) -> None:
        super().__init__()
        self.scale = 0
        if low is None and high is None:
            self.min_len = self.max_len = 1
            return
        if low is None or high is None:
            raise RegexError("a character range needs both ends")
        lo, hi = _char_code(low), _char_code(high)
        if lo < 0 or hi > 255:
            raise RegexError(f"character range {lo}-{hi} is outside 0-255")
        if hi >= lo:
            self.scale = (1 << (hi + 1)) - (1 << lo)

    def and_op(self, other: MultiChoice) -> None:
        """Keep only the characters also in ``other``."""
        self.scale &= other.scale

    def or_op(self, other: MultiChoice) -> None:
        """Add the characters of ``other``."""
        self.scale |= other.scale

    def reverse(self) -> None:
        """Complement the set within the 256 byte values."""
        self.scale = ~self.scale & self._FULL

    def generate_nfa(self) -> None:
        """Build the single scale state for the current set."""
        state = ScaleState(self.scale)
        self.start = state
        self.out1 = [state]

    def copy(self) -> MultiChoice:
        duplicate = MultiChoice()
        duplicate.scale = self.scale
        duplicate.generate_nfa()
        return duplicate

    def __str__(self) -> str:
        return "[MultiChoice]"


class PlusRepetition(Regex):
    """One or more repetitions."""

    def __init__(self, internal: Regex) -> None:
        super().__init__()
        self.internal = internal
        if _is_group_start(internal.start):
            start = internal.start
            start.kind = NodeType.SPLIT
            for state in internal.out1:
                state.kind = NodeType.SPLIT
                state.out1 = start
                start.reverse_out.append(state)
            new_internal = internal.copy()
            group_start = NFAState(NodeType.GROUP_START, new_internal.start)
            start.out2 = group_start
            group_start.reverse_out.append(start)
            new_out = NFAState(NodeType.GROUP_END)
            group_start.refer_no = new_out.refer_no = start.refer_no
            _patch1(new_internal.out1, new_out)
            _patch2(new_internal.out2, new_out)
            self.start = start
            self.out1 = [new_out]
            self.out2 = []
        else:
            split = NFAState(NodeType.SPLIT, internal.start)
            _patch1(internal.out1, split)
            _patch2(internal.out2, split)
            self.start = internal.start
            self.out1 = []
            self.out2 = [split]
            self.min_len = internal.min_len
            self.max_len = UNBOUNDED

    def copy(self) -> PlusRepetition:
        return PlusRepetition(self.internal.copy())

    def __str__(self) -> str:
        return f"[+ repetition of {self.internal}]"


class Prefix(Regex):
    """An expression anchored at the start."""

    def __init__(self, internal: Regex) -> None:
        super().__init__()
        self.internal = internal

    def copy(self) -> Regex:
        raise RegexError("a prefix node cannot be copied")

    def __str__(self) -> str:
        return f"[Prefix of {self.internal} ]"


class Primitives(Regex):
    """A single literal character."""

    def __init__(self, c: str) -> None:
        super().__init__()
        self.c = c
        state = NFAState(NodeType.LITERAL, char=ord(c))
        self.start = state
        self.out1 = [state]
        self.min_len = self.max_len = 1

    def copy(self) -> Primitives:
        return Primitives(self.c)

    def __str__(self) -> str:
        return f"Primitives:{self.c}"


class QuoraRepetition(Regex):
    """Zero or one occurrence."""

    def __init__(self, internal: Regex) -> None:
        super().__init__()
        self.internal = internal
        if _is_group_start(internal.start):
            for state in internal.out1:
                internal.start.out2 = state
                state.reverse_out.append(internal.start)
            self.start = internal.start
            self.out1 = internal.out1
            self.out2 = internal.out2
        else:
            split = NFAState(NodeType.SPLIT, internal.start)
            self.start = split
            self.out1 = internal.out1
            self.out2 = _append(internal.out2, [split])
            self.min_len = 0
            self.max_len = internal.max_len

    def copy(self) -> QuoraRepetition:
        return QuoraRepetition(self.internal.copy())

    def __str__(self) -> str:
        return f"[? repetition of {self.internal}]"


class Sequence(Regex):
    """Concatenation of two expressions."""

    def __init__(self, first: Regex, second: Regex) -> None:
        super().__init__()
        self.first = first
        self.second = second
        self.start = first.start
        _patch1(first.out1, second.start)
        _patch2(first.out2, second.start)
        self.out1 = second.out1
        self.out2 = second.out2
        self.min_len = first.min_len + second.min_len
        if UNBOUNDED in (first.max_len, second.max_len):
            self.max_len = UNBOUNDED
        else:
            self.max_len = first.max_len + second.max_len

    def copy(self) -> Sequence:
        return Sequence(self.first.copy(), self.second.copy())

    def __str__(self) -> str:
        return f"[{self.first}+{self.second}]"


_SPECIAL_CLASSES = {
    "s": NodeType.SINGLE_LETTER,
    "S": NodeType.NON_SINGLE_LETTER,
    "w": NodeType.WORD,
    "W": NodeType.NON_WORD,
    "d": NodeType.DIGIT,
}

_SPECIAL_ESCAPES = {"r": "\r", "n": "\n", "t": "\t", "v": "\v", "f": "\f"}


class SpecialChars(Regex):
    """A backslash escape: a character class or an escaped character."""

    def __init__(self, special: str) -> None:
        super().__init__()
        self.special = special
        if special in _SPECIAL_CLASSES:
            state = NFAState(_SPECIAL_CLASSES[special])
        else:
            literal = _SPECIAL_ESCAPES.get(special, special)
            state = NFAState(NodeType.LITERAL, char=ord(literal))
        self.start = state
        self.out1 = [state]

    def copy(self) -> SpecialChars:
        return SpecialChars(self.special)

    def __str__(self) -> str:
        return f"[Special character:\\{self.special}"


class StarRepetition(Regex):
    """Zero or more repetitions."""

    def __init__(self, internal: Regex) -> None:
        super().__init__()
        self.internal = internal
        if _is_group_start(internal.start):
            start = internal.start
            start.kind = NodeType.SPLIT
            for state in internal.out1:
                state.kind = NodeType.SPLIT
            _patch1(internal.out1, start)
            _patch2(internal.out2, start)
            new_internal = internal.copy()
            group_start = NFAState(NodeType.GROUP_START, new_internal.start)
            start.out2 = group_start
            group_start.reverse_out.append(start)
            new_out = NFAState(NodeType.GROUP_END)
            group_start.refer_no = new_out.refer_no = start.refer_no
            _patch1(new_internal.out1, new_out)
            _patch2(new_internal.out2, new_out)
            group_start.out2 = new_out
            new_out.reverse_out.append(group_start)
            self.start = start
            self.out1 = [new_out]
            self.out2 = []
        else:
            split = NFAState(NodeType.SPLIT, internal.start)
            _patch1(internal.out1, split)
            _patch2(internal.out2, split)
            self.start = split
            self.out1 = []
            self.out2 = [split]

    def copy(self) -> StarRepetition:
        return StarRepetition(self.internal.copy())

    def __str__(self) -> str:
        return f"[* repetition of{self.internal}]"


class Suffix(Regex):
    """An expression anchored at the end."""

    def __init__(self, internal: Regex) -> None:
        super().__init__()
        self.internal = internal

    def copy(self) -> Suffix:
        return Suffix(self.internal.copy())

    def __str__(self) -> str:
        return f"[Suffix of {self.internal}]"


class LookAround(Regex):
    """A look-ahead or look-behind assertion around an inner expression."""

    def __init__(self, r: Regex, ahead: bool, positive: bool, has_refer: bool = False) -> None:
        super().__init__()
        self.r = r
        self.ahead = ahead
        self.positive = positive
        self.has_refer = has_refer
        match_state = NFAState(NodeType.MATCH)
        _patch1(r.out1, match_state)
        _patch2(r.out2, match_state)
        state = LookAroundState(ahead, positive, r.start, match_state, has_refer)
        self.start = state
        self.out1 = [state]
        self.out2 = []

    def copy(self) -> LookAround:
        return LookAround(self.r, self.ahead, self.positive)

    def __str__(self) -> str:
        return "[LookAround]"