"""
Shared test fixtures for em_solver tests.

Provides the 4x4 sample board, its puzzle file, and tiny 2x2 boards.
"""

import pytest

from em_solver import Board, SAMPLE_4X4, sample_board
from em_solver.samples import SOLVABLE_2X2, UNSOLVABLE_2X2


@pytest.fixture
def sample() -> Board:
    """A fresh, empty 4x4 sample board."""
    return sample_board()


@pytest.fixture
def sample_path(tmp_path):
    """SAMPLE_4X4 written to a puzzle file."""
    path = tmp_path / "sample.txt"
    path.write_text(SAMPLE_4X4, encoding="utf-8")
    return path


@pytest.fixture
def solvable_2x2() -> Board:
    return Board.from_records(2, SOLVABLE_2X2)


@pytest.fixture
def unsolvable_2x2() -> Board:
    return Board.from_records(2, UNSOLVABLE_2X2)
