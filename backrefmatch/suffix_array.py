"""Suffix arrays of sentinel-terminated texts, built by induced sorting."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import accumulate

BYTE_ALPHABET = 256


def _bucket_bounds(counts: Sequence[int]) -> tuple[list[int], list[int]]:
    ends = list(accumulate(counts))
    starts = [end - count for end, count in zip(ends, counts)]
    return starts, ends


def _induce(
    s: Sequence[int],
    is_s_type: Sequence[bool],
    counts: Sequence[int],
    lms_order: Sequence[int],
) -> list[int]:
    """Place the LMS suffixes in the given order and induce every other suffix."""
    n = len(s)
    sa = [-1] * n

    _, ends = _bucket_bounds(counts)
    for pos in reversed(lms_order):
        ends[s[pos]] -= 1
        sa[ends[s[pos]]] = pos

    starts, _ = _bucket_bounds(counts)
    for j in range(n):
        pos = sa[j] - 1
        if sa[j] > 0 and not is_s_type[pos]:
            sa[starts[s[pos]]] = pos
            starts[s[pos]] += 1

    _, ends = _bucket_bounds(counts)
    for j in range(n - 1, -1, -1):
        pos = sa[j] - 1
        if sa[j] > 0 and is_s_type[pos]:
            ends[s[pos]] -= 1
            sa[ends[s[pos]]] = pos

    return sa


def _suffix_array(s: Sequence[int], k: int) -> list[int]:
    """Suffix array of ``s``, whose last symbol is a unique smallest sentinel."""
    n = len(s)
    if n == 1:
        return [0]

    is_s_type = [False] * n
    is_s_type[n - 1] = True
    for i in range(n - 2, -1, -1):
        is_s_type[i] = s[i] < s[i + 1] or (s[i] == s[i + 1] and is_s_type[i + 1])

    lms = [i for i in range(1, n) if is_s_type[i] and not is_s_type[i - 1]]
    lms_set = set(lms)

    counts = [0] * k
    for symbol in s:
        counts[symbol] += 1

    # Stage 1: sort the LMS substrings.
    sa = _induce(s, is_s_type, counts, lms)
    sorted_lms = [pos for pos in sa if pos in lms_set]

    next_lms = dict(zip(lms, lms[1:]))

    def lms_substring(pos: int) -> tuple[int, ...]:
        end = next_lms.get(pos, pos)
        return tuple(s[pos:end + 1])

    names: dict[int, int] = {}
    name = -1
    previous: tuple[int, ...] | None = None
    for pos in sorted_lms:
        current = lms_substring(pos)
        if current != previous:
            name += 1
            previous = current
        names[pos] = name
    name_count = name + 1

    # Stage 2: solve the reduced problem, recursing while names repeat.
    reduced = [names[pos] for pos in lms]
    if name_count < len(lms):
        reduced_sa = _suffix_array(reduced, name_count)
    else:
        reduced_sa = [0] * len(reduced)
        for index, symbol in enumerate(reduced):
            reduced_sa[symbol] = index

    # Stage 3: induce the full suffix array from the sorted LMS suffixes.
    return _induce(s, is_s_type, counts, [lms[index] for index in reduced_sa])


def _validate(symbols: Sequence[int], k: int) -> None:
    if not symbols:
        raise ValueError("the text must not be empty")
    if symbols[-1] != 0:
        raise ValueError("the text must end with the sentinel symbol 0")
    for index, symbol in enumerate(symbols[:-1]):
        if symbol == 0:
            raise ValueError(f"the sentinel symbol 0 appears before the end, at {index}")
        if not 0 < symbol < k:
            raise ValueError(f"symbol {symbol} at {index} is outside the alphabet 0..{k - 1}")


def sacak(data: bytes | bytearray | memoryview | Sequence[int]) -> list[int]:
    """Suffix array of a byte string whose last byte is the sentinel 0."""
    symbols = list(bytes(data)) if isinstance(data, (bytes, bytearray, memoryview)) else list(data)
    _validate(symbols, BYTE_ALPHABET)
    return _suffix_array(symbols, BYTE_ALPHABET)


def sacak_int(data: Sequence[int], k: int) -> list[int]:
    """Suffix array of an integer text over the alphabet ``0..k-1``, ending with the sentinel 0."""
    if k < 1:
        raise ValueError(f"alphabet size must be positive, got {k}")
    symbols = list(data)
    _validate(symbols, k)
    return _suffix_array(symbols, k)