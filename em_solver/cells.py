"""
Board cells.

Three variants with different payloads:
- CornerCell: two boundary directions, fixed orientation
- BorderCell: one boundary direction, fixed orientation
- FullCell: interior, stores an explicit rotation while occupied

Empty corner/border cells already show BOUNDARY on their boundary sides and
OPEN elsewhere; an empty full cell is OPEN all round.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from .compass import (
    BOUNDARY, OPEN, Compass, Face, Faces, border_offset, corner_offset, face_at,
)
from .errors import InvariantViolation
from .pieces import Kind, Piece


@dataclass
class CornerCell:
    boundaries: tuple[Compass, Compass]  # (north or south, east or west)
    piece: Piece | None = None

    kind: ClassVar[Kind] = Kind.CORNER

    @property
    def offset(self) -> Compass:
        return corner_offset(self.boundaries)

    def face(self, side: Compass) -> Face:
        if side in self.boundaries:
            return BOUNDARY
        if self.piece is None:
            return OPEN
        return face_at(self.piece.colors, self.offset, side)

    def faces(self) -> Faces:
        return tuple(self.face(d) for d in Compass)  # type: ignore[return-value]


@dataclass
class BorderCell:
    boundary: Compass
    piece: Piece | None = None

    kind: ClassVar[Kind] = Kind.BORDER

    @property
    def offset(self) -> Compass:
        return border_offset(self.boundary)

    def face(self, side: Compass) -> Face:
        if side == self.boundary:
            return BOUNDARY
        if self.piece is None:
            return OPEN
        return face_at(self.piece.colors, self.offset, side)

    def faces(self) -> Faces:
        return tuple(self.face(d) for d in Compass)  # type: ignore[return-value]


@dataclass
class FullCell:
    piece: Piece | None = None
    rotation: Compass | None = None

    kind: ClassVar[Kind] = Kind.FULL

    @property
    def offset(self) -> Compass | None:
        return self.rotation

    def face(self, side: Compass) -> Face:
        if self.piece is None:
            if self.rotation is not None:
                raise InvariantViolation("empty full cell has a rotation")
            return OPEN
        if self.rotation is None:
            raise InvariantViolation(f"full cell holds piece {self.piece.id} without rotation")
        return face_at(self.piece.colors, self.rotation, side)

    def faces(self) -> Faces:
        return tuple(self.face(d) for d in Compass)  # type: ignore[return-value]


Cell = Union[CornerCell, BorderCell, FullCell]


def cell_for(row: int, col: int, size: int) -> Cell:
    """Build the cell that belongs at (row, col) on a size x size board."""
    vertical = Compass.NORTH if row == 0 else Compass.SOUTH if row == size - 1 else None
    horizontal = Compass.WEST if col == 0 else Compass.EAST if col == size - 1 else None

    if vertical is not None and horizontal is not None:
        return CornerCell((vertical, horizontal))
    if vertical is not None:
        return BorderCell(vertical)
    if horizontal is not None:
        return BorderCell(horizontal)
    return FullCell()
