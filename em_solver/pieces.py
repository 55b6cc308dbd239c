"""
Puzzle pieces and the classifier that builds them from raw records.

A raw record is (top, right, bottom, left) as read from the puzzle file.
Zeros mark sides that must face the grid edge and always come first:

    (0, 0, b, l)  -> CornerPiece(b, l)
    (0, r, b, l)  -> BorderPiece(r, b, l)
    (t, r, b, l)  -> FullPiece(t, r, b, l)
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Sequence

from .compass import Compass, Faces, faces_at_compass
from .errors import ClassificationError


class Kind(Enum):
    """Shape of a piece, and of the board cell that can hold it."""
    CORNER = "corner"
    BORDER = "border"
    FULL = "full"


@dataclass(frozen=True)
class Piece:
    id: int
    colors: tuple[int, ...]

    kind: ClassVar[Kind]
    # direction the leading color faces in the raw record
    natural_offset: ClassVar[Compass]

    def faces(self, offset: Compass) -> Faces:
        """Faces (N, E, S, W) with the leading color facing ``offset``."""
        return faces_at_compass(self.colors, offset)

    def record(self) -> tuple[int, int, int, int]:
        """The raw (top, right, bottom, left) record this piece came from."""
        return tuple(0 if not f.is_color else f.color
                     for f in self.faces(self.natural_offset))  # type: ignore[return-value]


@dataclass(frozen=True)
class CornerPiece(Piece):
    kind: ClassVar[Kind] = Kind.CORNER
    natural_offset: ClassVar[Compass] = Compass.SOUTH


@dataclass(frozen=True)
class BorderPiece(Piece):
    kind: ClassVar[Kind] = Kind.BORDER
    natural_offset: ClassVar[Compass] = Compass.EAST


@dataclass(frozen=True)
class FullPiece(Piece):
    kind: ClassVar[Kind] = Kind.FULL
    natural_offset: ClassVar[Compass] = Compass.NORTH


def classify_piece(piece_id: int, record: Sequence[int]) -> Piece:
    """Turn a raw four-value record into a typed piece.

    Raises ClassificationError when the record is not four non-negative
    integers, the zeros are not a leading prefix of length 0-2, or a
    color that must be positive is zero.
    """
    values = tuple(record)
    if len(values) != 4:
        raise ClassificationError(piece_id, values, f"expected 4 values, got {len(values)}")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        raise ClassificationError(piece_id, values, "values must be integers")
    if any(v < 0 for v in values):
        raise ClassificationError(piece_id, values, "values must be non-negative")

    top, right, bottom, left = values
    if top == 0 and right == 0:
        cls, colors = CornerPiece, (bottom, left)
    elif top == 0:
        cls, colors = BorderPiece, (right, bottom, left)
    else:
        cls, colors = FullPiece, values

    if any(c == 0 for c in colors):
        raise ClassificationError(
            piece_id, values,
            f"{cls.kind.value} piece needs positive colors after the boundary prefix")
    return cls(piece_id, colors)


def classify_pieces(records: Sequence[Sequence[int]]) -> list[Piece]:
    """Classify records in order, assigning ids 0..len-1."""
    return [classify_piece(i, record) for i, record in enumerate(records)]
