"""
Tests for the backtracking solver.

Covers outcomes (solved, unsolvable, cancelled, limit reached), board
state after each outcome, hints, traversal orders and the process pool.
"""

from types import SimpleNamespace

import pytest

from em_solver import Board, ColorIndex, random_puzzle
from em_solver import solver as solver_module
from em_solver.compass import Compass
from em_solver.solver import Outcome, candidate_options, free_positions, solve, solve_parallel

# every side color 1, so each cell has exactly one distinct option
UNIFORM_3X3 = [(0, 0, 1, 1)] * 4 + [(0, 1, 1, 1)] * 4 + [(1, 1, 1, 1)]


def assert_valid_solution(board):
    assert board.is_solved()
    assert board.conflicts() == []
    ids = sorted(pid for pid, _ in board.placements().values())
    assert ids == list(range(board.size * board.size))


class TestSolve:
    def test_sample(self, sample):
        result = solve(sample)
        assert result.outcome is Outcome.SOLVED
        assert result.solved
        assert result.board is sample
        assert_valid_solution(sample)
        assert 16 <= result.stats.attempts < 100_000

    def test_spiral_order(self, sample):
        assert solve(sample, order="spiral").solved
        assert_valid_solution(sample)

    def test_unknown_order(self, sample):
        with pytest.raises(ValueError):
            solve(sample, order="diagonal")

    def test_deterministic(self, sample):
        first = solve(sample).board.placements()
        again = Board.from_records(sample.size, [p.record() for p in sample.pieces])
        assert solve(again).board.placements() == first

    def test_solvable_2x2(self, solvable_2x2):
        assert solve(solvable_2x2).solved
        assert_valid_solution(solvable_2x2)

    def test_unsolvable_leaves_board_empty(self, unsolvable_2x2):
        result = solve(unsolvable_2x2)
        assert result.outcome is Outcome.UNSOLVABLE
        assert result.stats.backtracks > 0
        assert unsolvable_2x2.placements() == {}
        assert unsolvable_2x2.unplaced_ids() == [0, 1, 2, 3]

    def test_already_solved_board(self, sample):
        solve(sample)
        before = sample.placements()
        result = solve(sample)
        assert result.solved
        assert result.stats.attempts == 0
        assert sample.placements() == before

    @pytest.mark.parametrize("size,seed", [(2, 1), (3, 2), (4, 3), (5, 4)])
    def test_generated_puzzles(self, size, seed):
        board = Board.from_records(size, random_puzzle(size, seed=seed))
        assert solve(board).solved
        assert_valid_solution(board)

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_generated_5x5_stays_small(self, seed):
        board = Board.from_records(5, random_puzzle(5, seed=seed))
        result = solve(board)
        assert result.solved
        assert result.stats.attempts < 200_000


class TestStopping:
    def test_cancel_immediately(self, sample):
        result = solve(sample, should_stop=lambda: True)
        assert result.outcome is Outcome.CANCELLED
        assert result.stats.attempts == 0
        assert sample.placements() == {}

    def test_cancel_mid_search_unwinds(self, sample):
        calls = []

        def stop():
            calls.append(1)
            return len(calls) > 6

        result = solve(sample, should_stop=stop)
        assert result.outcome is Outcome.CANCELLED
        assert result.stats.attempts == 6
        assert sample.placements() == {}

    def test_node_limit(self, sample):
        result = solve(sample, node_limit=3)
        assert result.outcome is Outcome.LIMIT_REACHED
        assert result.stats.attempts == 3
        assert sample.placements() == {}

    def test_zero_node_limit_means_unlimited(self, sample):
        assert solve(sample, node_limit=0).solved

    def test_time_limit(self, sample, monkeypatch):
        ticks = iter(range(1000))
        monkeypatch.setattr(solver_module, "time", SimpleNamespace(monotonic=lambda: next(ticks)))
        result = solve(sample, time_limit=3)
        assert result.outcome is Outcome.CANCELLED
        assert sample.placements() == {}


class TestHints:
    def test_prefilled_cells_are_kept(self, sample):
        sample.place(0, (0, 0))
        assert (0, 0) not in free_positions(sample, "row_major")
        result = solve(sample)
        assert result.solved
        assert sample.placements()[(0, 0)] == (0, None)

    def test_hints_survive_failure(self, sample):
        sample.place(0, (0, 0))
        result = solve(sample, node_limit=2)
        assert result.outcome is Outcome.LIMIT_REACHED
        assert sample.placements() == {(0, 0): (0, None)}


class TestCandidateOptions:
    def test_corner_cell(self, sample):
        options = candidate_options(sample, ColorIndex(sample.pieces), (0, 0))
        assert options == [(0, None), (3, None), (12, None), (15, None)]

    def test_full_cell_tries_every_rotation(self, sample):
        options = candidate_options(sample, ColorIndex(sample.pieces), (1, 1))
        assert len(options) == 16
        assert options[:4] == [(5, r) for r in Compass]

    def test_pruned_by_neighbor_color(self, sample):
        sample.place(0, (0, 0))
        options = candidate_options(sample, ColorIndex(sample.pieces), (0, 1))
        assert [pid for pid, _ in options] == [1, 2, 4, 7, 13, 14]


class TestDuplicates:
    def test_identical_pieces_tried_once(self, solvable_2x2):
        result = solve(solvable_2x2)
        assert result.solved
        assert result.stats.attempts == 4
        assert result.stats.backtracks == 0

    def test_duplicate_options_dropped(self, unsolvable_2x2):
        options = candidate_options(unsolvable_2x2, ColorIndex(unsolvable_2x2.pieces), (0, 0))
        assert options == [(0, None), (3, None)]

    def test_symmetric_rotations_dropped(self):
        board = Board.from_records(3, UNIFORM_3X3)
        assert candidate_options(board, ColorIndex(board.pieces), (1, 1)) == [(8, Compass.NORTH)]
        result = solve(board)
        assert result.solved
        assert result.stats.attempts == 9


class TestParallel:
    def test_single_worker_is_plain_solve(self, sample):
        result = solve_parallel(sample, workers=1)
        assert result.solved
        assert_valid_solution(sample)

    def test_process_pool(self, sample):
        result = solve_parallel(sample, workers=2)
        assert result.outcome is Outcome.SOLVED
        assert_valid_solution(sample)

    def test_process_pool_unsolvable(self, unsolvable_2x2):
        result = solve_parallel(unsolvable_2x2, workers=2)
        assert result.outcome is Outcome.UNSOLVABLE
        assert unsolvable_2x2.placements() == {}
