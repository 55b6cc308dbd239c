"""
Edge-matching board model.

Coordinate system:
- positions are (row, col), row 0 is the north edge, col 0 the west edge
- the outer ring holds corner and border cells, the interior holds full cells

Placement rules:
- a piece can only go into a cell of the same kind (corner/border/full)
- a cell holds at most one piece and a piece sits in at most one cell
- full pieces need an explicit rotation, corner/border pieces get theirs
  from the cell
- on every side, the piece must show what the neighbor shows back, unless
  the neighbor is still empty; sides facing the grid edge must be boundary
"""

import logging
from collections import Counter
from dataclasses import dataclass, replace
from typing import Iterator, Sequence

from .cells import Cell, FullCell, cell_for
from .compass import BOUNDARY, OPEN, Compass, Faces
from .errors import (
    InvariantViolation, PlacementError, PlacementFailure, PuzzleFormatError,
)
from .pieces import Kind, Piece, classify_pieces

logger = logging.getLogger(__name__)

Position = tuple[int, int]


def expected_kind_counts(size: int) -> dict[Kind, int]:
    """How many cells of each kind a size x size board has."""
    inner = size - 2
    return {Kind.CORNER: 4, Kind.BORDER: 4 * inner, Kind.FULL: inner * inner}


@dataclass
class Board:
    """A square board plus its piece inventory."""
    size: int
    cells: list[list[Cell]]
    pieces: list[Piece]  # Inventory, index == piece id (shared, immutable)
    placed: list[Position | None] | None = None  # piece id -> position

    def __post_init__(self):
        if self.placed is None:
            self.placed = [None] * len(self.pieces)

    @classmethod
    def empty(cls, size: int, pieces: Sequence[Piece]) -> "Board":
        if size < 2:
            raise PuzzleFormatError(f"board size must be at least 2, got {size}")
        cells = [[cell_for(row, col, size) for col in range(size)] for row in range(size)]
        return cls(size=size, cells=cells, pieces=list(pieces))

    @classmethod
    def from_records(cls, size: int, records: Sequence[Sequence[int]]) -> "Board":
        """Build an empty board and classify its size*size pieces.

        Raises PuzzleFormatError for a wrong record count or a piece set that
        cannot fill the board's corner/border/full cells, and
        ClassificationError for malformed records.
        """
        if size < 2:
            raise PuzzleFormatError(f"board size must be at least 2, got {size}")
        if len(records) != size * size:
            raise PuzzleFormatError(
                f"a {size}x{size} board needs {size * size} pieces, got {len(records)}")

        pieces = classify_pieces(records)
        counts = Counter(p.kind for p in pieces)
        for kind, expected in expected_kind_counts(size).items():
            if counts[kind] != expected:
                raise PuzzleFormatError(
                    f"a {size}x{size} board needs {expected} {kind.value} pieces, "
                    f"got {counts[kind]}")

        logger.debug("board %dx%d: %d corner, %d border, %d full pieces", size, size,
                     counts[Kind.CORNER], counts[Kind.BORDER], counts[Kind.FULL])
        return cls.empty(size, pieces)

    def copy(self) -> "Board":
        """Independent copy for another solve attempt - shares pieces, copies cells."""
        cells = [[replace(c) for c in row] for row in self.cells]
        return Board(size=self.size, cells=cells, pieces=self.pieces, placed=list(self.placed))

    def reset(self) -> None:
        """Empty every cell."""
        for pos in self.positions():
            if self.cell(pos).piece is not None:
                self.remove(pos)

    # -- lookups ---------------------------------------------------------

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, pos: Position) -> Cell:
        if not self.in_bounds(pos):
            raise InvariantViolation(f"position {pos} is outside the {self.size}x{self.size} board")
        row, col = pos
        return self.cells[row][col]

    def piece(self, piece_id: int) -> Piece:
        if not 0 <= piece_id < len(self.pieces):
            raise InvariantViolation(f"unknown piece id {piece_id}")
        return self.pieces[piece_id]

    def positions(self) -> Iterator[Position]:
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col)

    def is_placed(self, piece_id: int) -> bool:
        return self.placed[piece_id] is not None

    def position_of(self, piece_id: int) -> Position | None:
        return self.placed[piece_id]

    def unplaced_ids(self) -> list[int]:
        return [pid for pid, pos in enumerate(self.placed) if pos is None]

    def placements(self) -> dict[Position, tuple[int, Compass | None]]:
        """Occupied positions -> (piece id, rotation); rotation is None outside full cells."""
        out = {}
        for pos in self.positions():
            cell = self.cell(pos)
            if cell.piece is not None:
                rotation = cell.rotation if isinstance(cell, FullCell) else None
                out[pos] = (cell.piece.id, rotation)
        return out

    def is_solved(self) -> bool:
        """True if all cells are filled."""
        return all(pos is not None for pos in self.placed)

    def kind_counts(self) -> dict[Kind, int]:
        counts = Counter(p.kind for p in self.pieces)
        return {kind: counts[kind] for kind in Kind}

    # -- frontier --------------------------------------------------------

    def neighbor(self, pos: Position, direction: Compass) -> Position | None:
        drow, dcol = direction.delta
        other = (pos[0] + drow, pos[1] + dcol)
        return other if self.in_bounds(other) else None

    def frontier(self, pos: Position) -> Faces:
        """What the neighbors (or the grid edge) show towards ``pos``, in N, E, S, W order."""
        self.cell(pos)
        faces = []
        for direction in Compass:
            other = self.neighbor(pos, direction)
            if other is None:
                faces.append(BOUNDARY)
            else:
                faces.append(self.cell(other).face(direction.opposite))
        return tuple(faces)  # type: ignore[return-value]

    # -- placement -------------------------------------------------------

    def check_placement(self, piece_id: int, pos: Position,
                        rotation: Compass | None = None) -> PlacementFailure | None:
        """Return why the placement would fail, or None if it is valid. Never mutates."""
        piece = self.piece(piece_id)
        cell = self.cell(pos)

        if self.placed[piece_id] is not None:
            return PlacementFailure.ALREADY_PLACED
        if piece.kind is not cell.kind:
            return PlacementFailure.KIND_MISMATCH
        if isinstance(cell, FullCell):
            if rotation is None:
                return PlacementFailure.ORIENTATION_REQUIRED
            offset = rotation
        else:
            if rotation is not None:
                raise InvariantViolation(
                    f"{cell.kind.value} cell {pos} has a fixed orientation, got rotation {rotation.name}")
            offset = cell.offset
        if cell.piece is not None:
            return PlacementFailure.CELL_OCCUPIED

        if not _fits(piece.faces(offset), self.frontier(pos)):
            return PlacementFailure.FACE_MISMATCH
        return None

    def place(self, piece_id: int, pos: Position, rotation: Compass | None = None) -> None:
        """Validate and place a piece (mutates). Raises PlacementError if it does not fit."""
        failure = self.check_placement(piece_id, pos, rotation)
        if failure is not None:
            raise PlacementError(failure, piece_id, pos)

        cell = self.cell(pos)
        cell.piece = self.pieces[piece_id]
        if isinstance(cell, FullCell):
            cell.rotation = rotation
        self.placed[piece_id] = pos

    def remove(self, pos: Position) -> int:
        """Take the piece out of a cell and return its id."""
        cell = self.cell(pos)
        if cell.piece is None:
            raise InvariantViolation(f"cannot remove from empty cell {pos}")
        piece_id = cell.piece.id
        cell.piece = None
        if isinstance(cell, FullCell):
            cell.rotation = None
        self.placed[piece_id] = None
        return piece_id

    def set_rotation(self, pos: Position, rotation: Compass) -> None:
        """Turn the piece already sitting in a full cell.

        Raises PlacementError (and leaves the cell alone) if the piece does not
        fit its neighbors in the new rotation.
        """
        cell = self.cell(pos)
        if not isinstance(cell, FullCell):
            raise InvariantViolation(f"cannot rotate {cell.kind.value} cell {pos}")
        if cell.piece is None:
            raise InvariantViolation(f"cannot rotate empty cell {pos}")
        if not _fits(cell.piece.faces(rotation), self.frontier(pos)):
            raise PlacementError(PlacementFailure.FACE_MISMATCH, cell.piece.id, pos)
        cell.rotation = rotation

    # -- checking --------------------------------------------------------

    def conflicts(self) -> list[tuple[Position, Compass]]:
        """Sides of occupied cells that disagree with their neighbor or the grid edge.

        Only occupied cells are checked, so a partially filled board built
        through ``place`` always has no conflicts.
        """
        bad = []
        for pos in self.positions():
            cell = self.cell(pos)
            if cell.piece is None:
                continue
            frontier = self.frontier(pos)
            for direction, mine, theirs in zip(Compass, cell.faces(), frontier):
                if theirs == OPEN:
                    continue
                if mine != theirs:
                    bad.append((pos, direction))
        return bad


def _fits(faces: Faces, frontier: Faces) -> bool:
    return all(want == OPEN or have == want for have, want in zip(faces, frontier))

