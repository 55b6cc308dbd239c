"""
em_solver - edge-matching puzzle solver package

Core components:
- Board: the square grid of corner/border/full cells and its piece inventory
- classify_piece: turns raw (top, right, bottom, left) records into pieces
- ColorIndex: color -> piece ids, for candidate pruning
- solve / solve_parallel: backtracking solver
"""

from .board import Board
from .cells import BorderCell, CornerCell, FullCell
from .color_index import ColorIndex
from .compass import BOUNDARY, OPEN, Compass, Face
from .crawler import Crawler
from .errors import (
    ClassificationError, InvariantViolation, PlacementError, PlacementFailure,
    PuzzleError, PuzzleFormatError,
)
from .loader import load_board, parse_puzzle
from .pieces import BorderPiece, CornerPiece, FullPiece, Kind, Piece, classify_piece
from .samples import SAMPLE_4X4, random_puzzle, sample_board
from .solver import Outcome, SolveResult, solve, solve_parallel
from .viz import display_board, render_svg

__version__ = "0.1.0"
