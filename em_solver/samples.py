"""
Sample puzzles and a random puzzle generator.

SAMPLE_4X4 is a solvable 4x4 puzzle: 4 corner, 8 border and 4 full pieces
using colors 1-5 (0 marks the boundary). Piece 0 is the corner (1, 1).
"""

import random

from .board import Board
from .compass import rotate_sides
from .loader import parse_puzzle

SAMPLE_4X4 = """\
4
0
0
0
0 0 1 1
0 2 3 1
0 1 4 2
0 0 2 1
0 1 5 2
3 5 4 5
5 4 3 5
0 2 4 1
3 5 4 4
3 3 5 4
0 2 3 2
0 2 4 2
0 0 1 2
0 2 5 1
0 1 3 2
0 0 2 2
"""

# 2x2 boards are all corners
SOLVABLE_2X2 = [(0, 0, 1, 1), (0, 0, 1, 1), (0, 0, 1, 1), (0, 0, 1, 1)]
UNSOLVABLE_2X2 = [(0, 0, 1, 1), (0, 0, 1, 1), (0, 0, 1, 1), (0, 0, 2, 2)]


def sample_records() -> tuple[int, list[tuple[int, int, int, int]]]:
    return parse_puzzle(SAMPLE_4X4.splitlines())


def sample_board() -> Board:
    """A fresh, empty board for SAMPLE_4X4."""
    size, records = sample_records()
    return Board.from_records(size, records)


def _canonical(sides: tuple, rng: random.Random) -> tuple:
    """Rotate a tile (t, r, b, l) into its file form: zeros first, full tiles at random."""
    zeros = sides.count(0)
    if zeros == 0:
        return rotate_sides(sides, rng.randrange(4))
    for turns in range(4):
        rotated = rotate_sides(sides, turns)
        if rotated[:zeros] == (0,) * zeros and 0 not in rotated[zeros:]:
            return rotated
    raise ValueError(f"tile {sides} has no canonical rotation")


def random_puzzle(size: int, border_colors: int | None = None, inner_colors: int | None = None,
                  seed: int | None = None) -> list[tuple[int, int, int, int]]:
    """Generate the records of a random solvable size x size puzzle.

    Edges running along the outer ring use colors 1..border_colors, all other
    edges use the next inner_colors colors. The solved layout is cut into
    tiles, each tile written in canonical form and the list shuffled.
    Left out, the palette grows with the board: size - 1 border colors (at
    least 2) and size + 1 inner colors.
    """
    if size < 2:
        raise ValueError(f"board size must be at least 2, got {size}")
    if border_colors is None:
        border_colors = max(2, size - 1)
    if inner_colors is None:
        inner_colors = size + 1
    if border_colors < 1 or inner_colors < 1:
        raise ValueError("need at least one border and one inner color")
    rng = random.Random(seed)

    def ring_edge(row_a, col_a, row_b, col_b):
        outer = (0, size - 1)
        return (row_a == row_b and row_a in outer) or (col_a == col_b and col_a in outer)

    def pick(is_ring):
        if is_ring:
            return rng.randint(1, border_colors)
        return rng.randint(border_colors + 1, border_colors + inner_colors)

    # horizontal[r][c]: edge between (r, c) and (r, c + 1)
    horizontal = [[pick(ring_edge(r, c, r, c + 1)) for c in range(size - 1)] for r in range(size)]
    # vertical[r][c]: edge between (r, c) and (r + 1, c)
    vertical = [[pick(ring_edge(r, c, r + 1, c)) for c in range(size)] for r in range(size - 1)]

    records = []
    for r in range(size):
        for c in range(size):
            top = vertical[r - 1][c] if r > 0 else 0
            right = horizontal[r][c] if c < size - 1 else 0
            bottom = vertical[r][c] if r < size - 1 else 0
            left = horizontal[r][c - 1] if c > 0 else 0
            records.append(_canonical((top, right, bottom, left), rng))
    rng.shuffle(records)
    return records
