"""Generalized suffix arrays of separator-delimited collections of texts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from itertools import accumulate

from .suffix_array import BYTE_ALPHABET, sacak_int

SENTINEL = 0
SEPARATOR = 1


@dataclass(frozen=True)
class GeneralizedSuffixArray:
    """The suffix array of a concatenated collection, with optional companion arrays.

    ``text`` is the concatenation ``T1 1 T2 1 ... Td 1 0``. Each separator is
    ranked below every other symbol and below every later separator, so equal
    suffixes of different texts are ordered by the texts' order.
    """

    text: tuple[int, ...]
    suffix_array: tuple[int, ...]
    document_array: tuple[int, ...] | None = None
    lcp_array: tuple[int, ...] | None = None

    @property
    def documents(self) -> int:
        """Number of texts in the collection."""
        return sum(1 for symbol in self.text if symbol == SEPARATOR)

    def __len__(self) -> int:
        return len(self.suffix_array)

    def suffix(self, rank: int) -> tuple[int, ...]:
        """Symbols of the suffix with the given rank."""
        return self.text[self.suffix_array[rank]:]


def _symbols(data: bytes | bytearray | memoryview | Sequence[int]) -> list[int]:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return list(bytes(data))
    return list(data)


def _validate(symbols: Sequence[int], k: int) -> None:
    if k < 2:
        raise ValueError(f"alphabet size must be at least 2, got {k}")
    if len(symbols) < 2:
        raise ValueError("the text must hold at least one separator and the sentinel")
    if symbols[-1] != SENTINEL:
        raise ValueError("the text must end with the sentinel symbol 0")
    if symbols[-2] != SEPARATOR:
        raise ValueError("the last text must be closed by the separator symbol 1")
    for index, symbol in enumerate(symbols[:-1]):
        if symbol == SENTINEL:
            raise ValueError(f"the sentinel symbol 0 appears before the end, at {index}")
        if not 0 < symbol < k:
            raise ValueError(f"symbol {symbol} at {index} is outside the alphabet 0..{k - 1}")


def _suffix_array(symbols: Sequence[int], k: int) -> list[int]:
    """Rank separators by position below all other symbols, then sort the suffixes."""
    separators = [index for index, symbol in enumerate(symbols) if symbol == SEPARATOR]
    count = len(separators)
    separator_rank = {position: rank for rank, position in enumerate(separators)}
    mapped = [
        SEPARATOR + separator_rank[index]
        if symbol == SEPARATOR
        else (symbol if symbol == SENTINEL else symbol + count - 1)
        for index, symbol in enumerate(symbols)
    ]
    return sacak_int(mapped, k + count - 1)


def _document_array(symbols: Sequence[int], suffix_array: Sequence[int]) -> list[int]:
    """Index of the text each suffix starts in; the sentinel belongs to the text after the last."""
    before = list(accumulate((symbol == SEPARATOR for symbol in symbols), initial=0))
    return [before[position] for position in suffix_array]


def gsacak_sa(
    data: bytes | bytearray | memoryview | Sequence[int], k: int = BYTE_ALPHABET
) -> list[int]:
    """Generalized suffix array of a concatenated collection over the alphabet ``0..k-1``."""
    symbols = _symbols(data)
    _validate(symbols, k)
    return _suffix_array(symbols, k)


def gsacak_da(
    data: bytes | bytearray | memoryview | Sequence[int], k: int = BYTE_ALPHABET
) -> GeneralizedSuffixArray:
    """Generalized suffix array together with the document array."""
    symbols = _symbols(data)
    _validate(symbols, k)
    suffix_array = _suffix_array(symbols, k)
    return GeneralizedSuffixArray(
        text=tuple(symbols),
        suffix_array=tuple(suffix_array),
        document_array=tuple(_document_array(symbols, suffix_array)),
    )