"""
Color -> piece ids lookup used to prune candidates before face validation.
"""

from collections import defaultdict
from typing import Iterable, Sequence

from .board import Board
from .compass import Face
from .pieces import Kind, Piece


class ColorIndex:
    """Maps each color to the ids of the pieces showing it on any side.

    Zero (the boundary marker) never appears in piece colors, so it is never
    indexed.
    """

    def __init__(self, pieces: Sequence[Piece]):
        self._by_color: dict[int, set[int]] = defaultdict(set)
        self._by_kind: dict[Kind, list[int]] = {kind: [] for kind in Kind}
        for piece in pieces:
            for color in piece.colors:
                self._by_color[color].add(piece.id)
            self._by_kind[piece.kind].append(piece.id)

    @property
    def colors(self) -> list[int]:
        return sorted(self._by_color)

    def pieces_with(self, color: int) -> frozenset[int]:
        return frozenset(self._by_color.get(color, ()))

    def candidates(self, frontier: Iterable[Face], kind: Kind, board: Board) -> list[int]:
        """Unplaced pieces of ``kind`` that show every color the frontier asks for.

        This only prunes: a piece that has all the required colors may still
        fail to fit once rotations are taken into account. Returned in
        ascending id order.
        """
        ids: set[int] | None = None
        for face in frontier:
            if not face.is_color:
                continue
            having = self._by_color.get(face.color)
            if not having:
                return []
            ids = set(having) if ids is None else ids & having
            if not ids:
                return []

        return [pid for pid in self._by_kind[kind]
                if (ids is None or pid in ids) and not board.is_placed(pid)]
