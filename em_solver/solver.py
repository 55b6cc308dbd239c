"""
Edge-matching solver using backtracking.
"""

import logging
import multiprocessing as mp
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .board import Board, Position
from .cells import FullCell
from .color_index import ColorIndex
from .compass import Compass
from .config import CFG
from .crawler import Crawler
from .errors import PlacementError

logger = logging.getLogger(__name__)

Option = tuple[int, Optional[Compass]]  # (piece id, rotation or None)


class Outcome(Enum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    CANCELLED = "cancelled"
    LIMIT_REACHED = "limit_reached"


@dataclass
class SolveStats:
    attempts: int = 0  # calls to Board.place
    backtracks: int = 0
    elapsed: float = 0.0


@dataclass
class SolveResult:
    outcome: Outcome
    board: Board
    stats: SolveStats = field(default_factory=SolveStats)

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SOLVED


@dataclass
class _Frame:
    """One level of the search stack: a position and what is left to try there."""
    position: Position
    options: list[Option]
    next: int = 0
    placed: bool = False


def candidate_options(board: Board, index: ColorIndex, pos: Position) -> list[Option]:
    """Every (piece id, rotation) worth trying at ``pos``, in search order.

    Pieces come in ascending id order; full cells try each piece in every
    rotation N, E, S, W. An option that would show the same faces as an
    earlier one (a duplicate piece, or a symmetric rotation) is dropped.
    """
    cell = board.cell(pos)
    ids = index.candidates(board.frontier(pos), cell.kind, board)
    rotations = list(Compass) if isinstance(cell, FullCell) else [None]
    options, seen = [], set()
    for pid in ids:
        piece = board.piece(pid)
        for rotation in rotations:
            faces = piece.faces(cell.offset if rotation is None else rotation)
            if faces in seen:
                continue
            seen.add(faces)
            options.append((pid, rotation))
    return options


def _filled(board: Board) -> set[Position]:
    return {pos for pos in board.positions() if board.cell(pos).piece is not None}


def free_positions(board: Board, order: str) -> list[Position]:
    """Traversal order restricted to the cells still empty (filled cells are hints)."""
    return list(Crawler(board.size, order, skip=_filled(board)))


def solve(
    board: Board,
    order: str | None = None,
    should_stop: Callable[[], bool] | None = None,
    node_limit: int | None = None,
    time_limit: float | None = None,
    index: ColorIndex | None = None,
) -> SolveResult:
    """
    Backtracking solver. Fills ``board`` in place and reports how it went.

    Strategy:
    - Walk the empty cells in traversal order (row_major or spiral)
    - At each cell, ask the neighbors what they show and keep only unplaced
      pieces of the right kind carrying those colors
    - Try them one by one (and every rotation for full cells), skipping any
      that would show the same faces as one already tried there; the first
      one that fits moves the search to the next cell
    - When nothing fits, take back the previous piece and try its next option

    The search is iterative, so board size is not limited by recursion depth.
    ``should_stop`` is polled between attempts. On any outcome other than
    SOLVED, every piece the search placed has been removed again.

    Args:
        order: traversal order name, defaults to CFG.ORDER
        should_stop: advisory cancellation callback
        node_limit: max placement attempts, <= 0 for no limit (CFG.NODE_LIMIT)
        time_limit: seconds before giving up, 0 for no limit (CFG.TIME_LIMIT)
    """
    order = order or CFG.ORDER
    node_limit = CFG.NODE_LIMIT if node_limit is None else node_limit
    time_limit = CFG.TIME_LIMIT if time_limit is None else time_limit
    index = index or ColorIndex(board.pieces)
    crawler = Crawler(board.size, order, skip=_filled(board))

    stats = SolveStats()
    start = time.monotonic()
    deadline = start + time_limit if time_limit and time_limit > 0 else None

    logger.info("solving %dx%d board: %d empty cells, order=%s",
                board.size, board.size, len(crawler), order)
    outcome = _search(board, index, crawler, stats, should_stop, node_limit, deadline)
    stats.elapsed = time.monotonic() - start
    logger.info("%s after %d attempts, %d backtracks, %.2fs",
                outcome.value, stats.attempts, stats.backtracks, stats.elapsed)
    return SolveResult(outcome, board, stats)


def _search(board, index, crawler, stats, should_stop, node_limit, deadline) -> Outcome:
    # frames[i] belongs to crawler[i]; the cursor sits on the top frame
    first = crawler.current()
    if first is None:
        return Outcome.SOLVED

    frames = [_Frame(first, candidate_options(board, index, first))]
    while frames:
        frame = frames[-1]
        if frame.placed:
            # Coming back to this cell: its piece led nowhere
            board.remove(frame.position)
            frame.placed = False

        while frame.next < len(frame.options):
            stop = _interrupted(stats, should_stop, node_limit, deadline)
            if stop is not None:
                _unwind(board, frames)
                return stop

            piece_id, rotation = frame.options[frame.next]
            frame.next += 1
            stats.attempts += 1
            if CFG.PROGRESS_EVERY > 0 and stats.attempts % CFG.PROGRESS_EVERY == 0:
                logger.debug("attempt %d: depth %d/%d, %d backtracks",
                             stats.attempts, len(frames), len(crawler), stats.backtracks)
            try:
                board.place(piece_id, frame.position, rotation)
            except PlacementError:
                continue
            frame.placed = True
            break

        if not frame.placed:
            frames.pop()
            crawler.previous()
            stats.backtracks += 1
            continue

        pos = crawler.next()
        if pos is None:
            return Outcome.SOLVED
        frames.append(_Frame(pos, candidate_options(board, index, pos)))

    return Outcome.UNSOLVABLE


def _interrupted(stats, should_stop, node_limit, deadline) -> Outcome | None:
    if should_stop is not None and should_stop():
        return Outcome.CANCELLED
    if deadline is not None and time.monotonic() >= deadline:
        return Outcome.CANCELLED
    if node_limit and node_limit > 0 and stats.attempts >= node_limit:
        return Outcome.LIMIT_REACHED
    return None


def _unwind(board: Board, frames: list[_Frame]) -> None:
    for frame in reversed(frames):
        if frame.placed:
            board.remove(frame.position)
            frame.placed = False


def _solve_branch(job):
    """Worker: fix one option at the first empty cell and search the rest."""
    board, first, option, order, node_limit, time_limit = job
    piece_id, rotation = option
    board.place(piece_id, first, rotation)
    result = solve(board, order=order, node_limit=node_limit, time_limit=time_limit)
    placements = board.placements() if result.solved else {}
    return result.outcome, placements, result.stats


def solve_parallel(
    board: Board,
    workers: int | None = None,
    order: str | None = None,
    node_limit: int | None = None,
    time_limit: float | None = None,
) -> SolveResult:
    """Split the search on the options of the first empty cell across processes.

    Every worker gets its own copy of the board with one option fixed. The
    first branch to come back solved is replayed onto ``board``. Limits apply
    per branch. With ``workers <= 1`` this is plain ``solve``.
    """
    workers = CFG.WORKERS if workers is None else workers
    order = order or CFG.ORDER
    if workers <= 1:
        return solve(board, order=order, node_limit=node_limit, time_limit=time_limit)

    free = free_positions(board, order)
    if not free:
        return solve(board, order=order, node_limit=node_limit, time_limit=time_limit)

    start = time.monotonic()
    index = ColorIndex(board.pieces)
    first = free[0]
    options = candidate_options(board, index, first)
    branches = [opt for opt in options if board.check_placement(opt[0], first, opt[1]) is None]
    stats = SolveStats(attempts=len(options))
    logger.info("solving %dx%d board on %d workers: %d branches at %s",
                board.size, board.size, workers, len(branches), first)

    outcome = Outcome.UNSOLVABLE
    if branches:
        jobs = [(board.copy(), first, opt, order, node_limit, time_limit) for opt in branches]
        ctx = mp.get_context("spawn")
        with ctx.Pool(processes=min(workers, len(branches))) as pool:
            for branch_outcome, placements, branch_stats in pool.imap_unordered(_solve_branch, jobs):
                stats.attempts += branch_stats.attempts
                stats.backtracks += branch_stats.backtracks
                if branch_outcome is Outcome.SOLVED:
                    _replay(board, free, placements)
                    outcome = Outcome.SOLVED
                    break
                if branch_outcome is not Outcome.UNSOLVABLE:
                    # an unfinished branch means unsolvability is not proven
                    outcome = branch_outcome

    stats.elapsed = time.monotonic() - start
    logger.info("%s after %d attempts, %d backtracks, %.2fs",
                outcome.value, stats.attempts, stats.backtracks, stats.elapsed)
    return SolveResult(outcome, board, stats)


def _replay(board: Board, free: list[Position], placements) -> None:
    for pos in free:
        piece_id, rotation = placements[pos]
        board.place(piece_id, pos, rotation)
