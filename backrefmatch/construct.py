"""Search over position edges for a decomposition of the text around captured groups."""

from __future__ import annotations

from collections.abc import Iterable, Sequence, Set

from .production import ProductionFA

PositionEdges = Sequence[Sequence[Set[int]]]


class ConstructMatcher:
    """Walks the position-edge graph built for a text and records whether it reaches the end.

    A node is identified by ``(first, second, third)``: the group index being
    left (``-1`` for the outermost level), the current position in the text,
    and the length of the captured group that is being repeated.
    """

    def __init__(self, text: str, production: ProductionFA) -> None:
        self.text = text
        self.text_length = len(text)
        self.refer_count = production.refer_count
        self.is_match = False
        self._visited: set[tuple[int, int, int]] = set()

    def check_match(
        self,
        position_edges: PositionEdges,
        first: int,
        second: int,
        third: int,
        groups: Iterable[int],
    ) -> None:
        """Explore from the given node; sets ``is_match`` when the whole text is covered."""
        if self.is_match:
            return
        key = (first + 1, second + 1, third)
        if key in self._visited:
            return
        self._visited.add(key)

        length = self.text_length
        outgoing = position_edges[first + 1]
        if first == 0:
            groups = tuple(groups)
            for group_len in groups:
                if second + group_len >= length:
                    continue
                for target, offsets in enumerate(outgoing):
                    for offset in offsets:
                        position = second + group_len + offset
                        if position > length:
                            continue
                        self.check_match(position_edges, target - 1, position, group_len, groups)
            return

        for target, offsets in enumerate(outgoing):
            for offset in offsets:
                position = second + third + offset
                if position > length:
                    continue
                if target == 0:
                    if position == length:
                        self.is_match = True
                    return
                if (target, position + 1, third) in self._visited:
                    continue
                self.check_match(position_edges, target - 1, position, third, groups)