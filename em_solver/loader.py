"""Read and write puzzle files.

Layout:
    line 0          board size N
    lines 1-3       reserved, ignored
    lines 4..4+N²-1 one piece per line: "top right bottom left"
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .board import Board
from .errors import PuzzleFormatError

logger = logging.getLogger(__name__)

HEADER_LINES = 4
_INT_TOKEN = re.compile(r"-?[0-9]+")
Record = Tuple[int, int, int, int]


def _parse_int(token: str, line: int) -> int:
    # plain ASCII digits only; int() would also take "+4", "0_4" or other scripts' digits
    if not _INT_TOKEN.fullmatch(token):
        raise PuzzleFormatError(f"not a number: {token!r}", line)
    return int(token)


def parse_puzzle(lines: Iterable[str]) -> Tuple[int, List[Record]]:
    """Return (size, records) from the lines of a puzzle file."""
    lines = [line.rstrip("\r\n") for line in lines]
    while lines and not lines[-1].strip():
        lines.pop()

    if not lines:
        raise PuzzleFormatError("empty puzzle file")
    first = lines[0].split()
    if len(first) != 1:
        raise PuzzleFormatError(f"expected the board size alone, got {lines[0]!r}", 0)
    size = _parse_int(first[0], 0)
    if size < 2:
        raise PuzzleFormatError(f"board size must be at least 2, got {size}", 0)

    body = lines[HEADER_LINES:]
    expected = size * size
    if len(body) != expected:
        raise PuzzleFormatError(
            f"a {size}x{size} puzzle needs {expected} piece lines, got {len(body)}")

    records: List[Record] = []
    for offset, text in enumerate(body):
        line = HEADER_LINES + offset
        tokens = text.split()
        if len(tokens) != 4:
            raise PuzzleFormatError(f"expected 4 values, got {len(tokens)}", line)
        values = tuple(_parse_int(tok, line) for tok in tokens)
        if any(v < 0 for v in values):
            raise PuzzleFormatError(f"negative value in {text.strip()!r}", line)
        records.append(values)  # type: ignore[arg-type]
    return size, records


def board_from_lines(lines: Iterable[str]) -> Board:
    size, records = parse_puzzle(lines)
    return Board.from_records(size, records)


def load_board(path: str | Path) -> Board:
    """Read a puzzle file and build its (empty) board."""
    path = Path(path)
    logger.info("loading puzzle %s", path)
    with open(path, "r", encoding="utf-8") as f:
        return board_from_lines(f)


def dump_puzzle(size: int, records: Sequence[Sequence[int]]) -> str:
    """Text of a puzzle file for these records (reserved lines written as 0)."""
    out = [str(size), "0", "0", "0"]
    out.extend(" ".join(str(v) for v in record) for record in records)
    return "\n".join(out) + "\n"


def board_records(board: Board) -> List[Record]:
    return [piece.record() for piece in board.pieces]


def write_puzzle(path: str | Path, size: int, records: Sequence[Sequence[int]]) -> Path:
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_puzzle(size, records))
    return path
