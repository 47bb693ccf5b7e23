"""Recursive-descent parser that turns a pattern into an NFA."""

from __future__ import annotations

import re
from typing import Callable, Iterable

from .regex import (
    AnyChar,
    Blank,
    Choice,
    LookAround,
    LookAroundState,
    MultiChoice,
    NFAState,
    NodeType,
    PlusRepetition,
    Primitives,
    QuoraRepetition,
    Refer,
    Regex,
    RegexError,
    Sequence,
    SpecialChars,
    StarRepetition,
)

_BACKREF = re.compile(r"\\([0-9]+)")
_HAS_BACKREF = re.compile(r"\\[0-9]")

_REPEATERS: dict[str, Callable[[Regex], Regex]] = {
    "*": StarRepetition,
    "+": PlusRepetition,
    "?": QuoraRepetition,
}

_WHITESPACE_RANGES = ((" ", " "), ("\t", "\t"), ("\n", "\n"))
_WORD_RANGES = (("0", "9"), ("a", "z"), ("A", "Z"))

# Shorthand classes usable inside brackets: (ranges, negated).
_SHORTHANDS = {
    "s": (_WHITESPACE_RANGES, False),
    "S": (_WHITESPACE_RANGES, True),
    "w": (_WORD_RANGES, False),
    "W": (_WORD_RANGES, True),
    "d": ((("0", "9"),), False),
}


class ParseError(RegexError):
    """Raised when a pattern is malformed."""


def _attach(states: Iterable[NFAState], target: NFAState, *, second: bool) -> None:
    for state in states:
        if second:
            state.out2 = target
        else:
            state.out1 = target
        target.reverse_out.append(state)


def _shorthand_class(ranges: Iterable[tuple[str, str]], negate: bool) -> MultiChoice:
    result = MultiChoice()
    for low, high in ranges:
        result.or_op(MultiChoice(low, high))
    if negate:
        result.reverse()
    return result


class Parser:
    """Parses a pattern; the resulting expression is available as ``re``."""

    def __init__(self, pattern: str) -> None:
        self._position = 0
        self._group_id = 0
        self.is_prefix = False
        self.is_suffix = False
        self.refer_ids: list[int] = []
        self.id2num: dict[int, int] = {}
        self.refer_no2num: dict[int, int] = {}
        self.group_count = 0
        self.refer_count = 0
        self.has_refer = False
        self.lookarounds: list[LookAroundState] = []
        self.groups: dict[int, Regex] = {}

        text = pattern
        if text.startswith("^"):
            self.is_prefix = True
            text = text[1:]
        if text.endswith("$"):
            self.is_suffix = True
            body = text[:-1]
            backslashes = len(body) - len(body.rstrip("\\"))
            if backslashes % 2 == 0:
                text = body
        self._input = text

        for found in _BACKREF.finditer(text):
            number = int(found.group(1))
            self.has_refer = True
            if number not in self.id2num:
                self.refer_ids.append(number)
                self.id2num[number] = -1
                self.group_count += 1
        self.id2num = {key: index for index, key in enumerate(sorted(self.id2num))}

        self.re: Regex = self._regex()
        self.match_state = NFAState(NodeType.MATCH)
        self.state_no = self.match_state.id - self.re.start.id + 1
        _attach(self.re.out1, self.match_state, second=False)
        _attach(self.re.out2, self.match_state, second=True)
        self.re.is_prefix = self.is_prefix
        self.re.is_suffix = self.is_suffix

    def parse(self) -> Regex:
        """Return the parsed expression."""
        return self.re

    def _peek(self) -> str:
        try:
            return self._input[self._position]
        except IndexError:
            raise ParseError(f"unexpected end of pattern at position {self._position}") from None

    def _eat(self, expected: str) -> None:
        if self._peek() == expected:
            self._position += 1

    def _next(self) -> str:
        ch = self._peek()
        self._position += 1
        return ch

    def _more(self) -> bool:
        return self._position < len(self._input)

    def _regex(self) -> Regex:
        term = self._term()
        if self._more() and self._peek() == "|":
            self._eat("|")
            return Choice(term, self._regex())
        return term

    def _term(self) -> Regex:
        node: Regex = Blank()
        while self._more() and self._peek() not in "|)":
            node = Sequence(node, self._factor())
        return node

    def _factor(self) -> Regex:
        node = self._base()
        while self._more() and self._peek() in _REPEATERS:
            node = _REPEATERS[self._next()](node)
        return node

    def _base(self) -> Regex:
        ch = self._peek()
        if ch == "(":
            return self._group()
        if ch == "\\":
            return self._escape()
        if ch == ".":
            self._eat(".")
            return AnyChar()
        if ch == "[":
            self._eat("[")
            node = self._multi_choice()
            self._eat("]")
            return node
        return Primitives(self._next())

    def _group(self) -> Regex:
        self._eat("(")
        capturing = True
        if self._peek() == "?":
            self._eat("?")
            if self._peek() == ":":
                self._eat(":")
                capturing = False
            else:
                return self._look_around()
        if not capturing:
            node = self._regex()
            self._eat(")")
            return node

        self._group_id += 1
        group_id = self._group_id
        refer_no = -1
        referenced = group_id in self.id2num
        if referenced:
            refer_no = self.refer_count
            self.refer_count += 1
            self.refer_no2num[refer_no] = self.id2num[group_id]
        node = self._regex()
        self.groups[group_id] = node
        if referenced:
            node.set_group_state(True, False, refer_no)
        node.group_id = group_id
        self._eat(")")
        return node

    def _look_around(self) -> Regex:
        ahead = False
        if self._peek() == "<":
            self._eat("<")
            ahead = True
        sign = self._peek()
        if sign == "=":
            positive = True
        elif sign == "!":
            positive = False
        else:
            raise ParseError(f"illegal expression at position {self._position}")
        self._eat(sign)
        start = self._position
        inner = self._regex()
        end = self._position
        self._eat(")")
        has_refer = _HAS_BACKREF.search(self._input[start:end + 1]) is not None
        node = LookAround(inner, ahead, positive, has_refer)
        if has_refer:
            self.lookarounds.append(node.start)
            node.start.look_around_no = len(self.lookarounds)
        return node

    def _escape(self) -> Regex:
        self._eat("\\")
        esc = self._next()
        if ord(esc) > 255 or ord(esc) == 0:
            raise ParseError(f"cannot escape character {esc!r}")
        if "0" <= esc <= "9":
            number = int(esc)
            while self._more() and "0" <= self._peek() <= "9":
                number = number * 10 + int(self._next())
            if number > self._group_id:
                raise ParseError(f"back-reference \\{number} refers to a group not yet opened")
            return Refer()
        return SpecialChars(esc)

    def _multi_choice(self) -> MultiChoice:
        negative = False
        if self._peek() == "^":
            negative = True
            self._eat("^")
        result = MultiChoice()
        while self._more() and self._peek() != "]":
            result.or_op(self._single_choice(inside=True))
            while self._peek() == "&":
                self._eat("&")
                self._eat("&")
                result.and_op(self._and_choice())
        if negative:
            result.reverse()
        result.generate_nfa()
        return result

    def _single_choice(self, inside: bool = False) -> MultiChoice:
        if not inside and self._peek() == "[":
            self._eat("[")
            nested = self._multi_choice()
            self._eat("]")
            return nested
        low = self._next()
        if low == "\\":
            self._eat("\\")
            low = self._next()
            if low in _SHORTHANDS:
                ranges, negate = _SHORTHANDS[low]
                return _shorthand_class(ranges, negate)
        if self._peek() == "-":
            self._eat("-")
            if self._peek() == "]":
                single = MultiChoice(low, low)
                single.or_op(MultiChoice("-", "-"))
                return single
            return MultiChoice(low, self._next())
        return MultiChoice(low, low)

    def _and_choice(self) -> MultiChoice:
        result = MultiChoice()
        while self._more() and self._peek() not in "]&":
            result.or_op(self._single_choice())
        return result