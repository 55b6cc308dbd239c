"""Tests for the em-solver command line."""

import pytest

from em_solver import SAMPLE_4X4
from em_solver.cli import build_parser, main
from em_solver.loader import dump_puzzle
from em_solver.samples import UNSOLVABLE_2X2


def test_sample(capsys):
    assert main(["sample"]) == 0
    assert capsys.readouterr().out == SAMPLE_4X4


def test_check(sample_path, capsys):
    assert main(["check", str(sample_path)]) == 0
    assert "4 corner, 8 border, 4 full" in capsys.readouterr().out


def test_solve(sample_path, tmp_path, capsys):
    svg = tmp_path / "solution.svg"
    assert main(["solve", str(sample_path), "--order", "spiral", "--svg", str(svg)]) == 0
    out = capsys.readouterr().out
    assert "solved after" in out
    assert "Placed: 16/16" in out
    assert svg.exists()


def test_solve_unsolvable(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text(dump_puzzle(2, UNSOLVABLE_2X2))
    assert main(["solve", str(path)]) == 1
    assert "unsolvable" in capsys.readouterr().out


def test_solve_node_limit(sample_path, capsys):
    assert main(["solve", str(sample_path), "--node-limit", "2"]) == 1
    assert "limit_reached" in capsys.readouterr().out


def test_bad_input_exit_code(tmp_path, capsys):
    path = tmp_path / "broken.txt"
    path.write_text("4\n0\n0\n0\n0 0 1 1\n")
    assert main(["check", str(path)]) == 2
    assert "error:" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["solve", str(tmp_path / "missing.txt")]) == 2
    assert "error:" in capsys.readouterr().err


def test_generate_then_solve(tmp_path, capsys):
    path = tmp_path / "gen.txt"
    assert main(["generate", "4", "--seed", "3", "-o", str(path)]) == 0
    assert main(["solve", str(path)]) == 0


def test_generate_to_stdout(capsys):
    assert main(["generate", "3", "--seed", "1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "3"
    assert len(lines) == 4 + 9


def test_unknown_order_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["solve", "x.txt", "--order", "zigzag"])
