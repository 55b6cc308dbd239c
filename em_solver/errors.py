"""
Exceptions raised by the edge-matching core.

- PuzzleFormatError / ClassificationError: bad input, no board is built
- PlacementError: a candidate does not fit, the solver just tries the next one
- InvariantViolation: a caller bug (empty-cell removal, bad position, ...)
"""

from enum import Enum


class PuzzleError(Exception):
    """Base class for errors caused by puzzle input."""


class PuzzleFormatError(PuzzleError, ValueError):
    """The puzzle description is structurally wrong (size, record count, tokens)."""

    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"line {line + 1}: {message}"
        super().__init__(message)
        self.line = line


class ClassificationError(PuzzleError, ValueError):
    """A raw (top, right, bottom, left) record is not a valid piece."""

    def __init__(self, piece_id: int, record, reason: str):
        super().__init__(f"piece {piece_id} {tuple(record)!r}: {reason}")
        self.piece_id = piece_id
        self.record = tuple(record)
        self.reason = reason


class PlacementFailure(Enum):
    ALREADY_PLACED = "piece already placed"
    KIND_MISMATCH = "piece kind does not match cell kind"
    ORIENTATION_REQUIRED = "orientation required"
    CELL_OCCUPIED = "cell already occupied"
    FACE_MISMATCH = "faces do not match neighbors"


class PlacementError(Exception):
    """A piece cannot go where it was asked to go."""

    def __init__(self, reason: PlacementFailure, piece_id: int, position: tuple[int, int]):
        super().__init__(f"cannot place piece {piece_id} at {position}: {reason.value}")
        self.reason = reason
        self.piece_id = piece_id
        self.position = position


class InvariantViolation(RuntimeError):
    """Programming error: the board was used in a way that can never be valid."""
