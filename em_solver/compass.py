"""
Compass directions, faces and orientation arithmetic.

Directions are numbered clockwise: NORTH=0, EAST=1, SOUTH=2, WEST=3.
Positions are (row, col) with row 0 on the north edge, so NORTH is row - 1.

Every piece stores its colors in a canonical order. The first ("leading")
color faces some compass direction, called the offset; the following colors
face the next directions clockwise. Directions left over once the colors run
out are grid boundary:

    Full   (a, b, c, d)  4 colors, offset = the stored rotation
    Border (a, b, c)     3 colors, offset fixed by the border cell
    Corner (a, b)        2 colors, offset fixed by the corner cell

So the face seen at direction D is colors[(D - offset) % 4], or BOUNDARY when
that index is past the last color.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Sequence

from .errors import InvariantViolation


class Compass(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> "Compass":
        return Compass((self + 2) % 4)

    def rotate(self, quarter_turns: int = 1) -> "Compass":
        """Rotate clockwise by a number of quarter turns (negative = counter-clockwise)."""
        return Compass((self + quarter_turns) % 4)

    @property
    def delta(self) -> tuple[int, int]:
        """(row, col) step towards the neighbor in this direction."""
        return _DELTAS[self]

    @property
    def letter(self) -> str:
        return self.name[0]


_DELTAS = {
    Compass.NORTH: (-1, 0),
    Compass.EAST: (0, 1),
    Compass.SOUTH: (1, 0),
    Compass.WEST: (0, -1),
}


class FaceKind(Enum):
    BOUNDARY = "boundary"
    OPEN = "open"
    COLOR = "color"


@dataclass(frozen=True)
class Face:
    """What one side of a cell shows: the grid edge, nothing yet, or a color."""
    kind: FaceKind
    color: int = 0

    @classmethod
    def of(cls, color: int) -> "Face":
        return cls(FaceKind.COLOR, color)

    @property
    def is_color(self) -> bool:
        return self.kind is FaceKind.COLOR

    def __str__(self) -> str:
        if self.kind is FaceKind.BOUNDARY:
            return "#"
        if self.kind is FaceKind.OPEN:
            return "."
        return str(self.color)


BOUNDARY = Face(FaceKind.BOUNDARY)
OPEN = Face(FaceKind.OPEN)

# (t, r, b, l) / (N, E, S, W) four-tuples of faces
Faces = tuple[Face, Face, Face, Face]


def corner_offset(boundaries: Sequence[Compass]) -> Compass:
    """Direction the leading color of a corner piece faces in this corner.

    The two colored sides follow the boundary that comes second when walking
    clockwise, e.g. the north-west corner puts its colors on EAST then SOUTH.
    """
    first, second = boundaries
    if second == first.rotate(1):
        return second.rotate(1)
    if first == second.rotate(1):
        return first.rotate(1)
    raise InvariantViolation(f"not a corner: {first.name}/{second.name}")


def border_offset(boundary: Compass) -> Compass:
    """Direction the leading color of a border piece faces along this border."""
    return boundary.rotate(1)


def face_at(colors: Sequence[int], offset: Compass, direction: Compass) -> Face:
    index = (direction - offset) % 4
    if index < len(colors):
        return Face.of(colors[index])
    return BOUNDARY


def faces_at_compass(colors: Sequence[int], offset: Compass) -> Faces:
    """Faces in NORTH, EAST, SOUTH, WEST order for colors laid out from ``offset``."""
    return tuple(face_at(colors, offset, d) for d in Compass)  # type: ignore[return-value]


def rotate_sides(sides: Sequence, quarter_turns: int = 1) -> tuple:
    """Rotate a (top, right, bottom, left) tuple clockwise.

    After one turn the old top is on the right: (t, r, b, l) -> (l, t, r, b).
    """
    k = quarter_turns % 4
    if k == 0:
        return tuple(sides)
    return tuple(sides[-k:]) + tuple(sides[:-k])
