"""
Command line entry point: em-solver {solve,check,generate,sample}.
"""

import argparse
import logging
import sys

from .config import CFG
from .crawler import ORDERS
from .errors import PuzzleError
from .loader import dump_puzzle, load_board, write_puzzle
from .pieces import Kind
from .samples import SAMPLE_4X4, random_puzzle
from .solver import Outcome, solve_parallel
from .viz import display_board, render_svg


def cmd_solve(args) -> int:
    board = load_board(args.puzzle)
    result = solve_parallel(
        board,
        workers=args.workers,
        order=args.order,
        node_limit=args.node_limit,
        time_limit=args.time_limit,
    )
    display_board(board)
    stats = result.stats
    print(f"\n{result.outcome.value} after {stats.attempts} attempts, "
          f"{stats.backtracks} backtracks, {stats.elapsed:.2f}s")
    if args.svg and result.solved:
        print(f"SVG saved to: {render_svg(board, args.svg)}")
    return 0 if result.outcome is Outcome.SOLVED else 1


def cmd_check(args) -> int:
    board = load_board(args.puzzle)
    counts = board.kind_counts()
    print(f"size {board.size}x{board.size}, {len(board.pieces)} pieces: "
          f"{counts[Kind.CORNER]} corner, {counts[Kind.BORDER]} border, {counts[Kind.FULL]} full")
    return 0


def cmd_generate(args) -> int:
    records = random_puzzle(args.size, args.border_colors, args.inner_colors, seed=args.seed)
    if args.output:
        path = write_puzzle(args.output, args.size, records)
        print(f"Puzzle saved to: {path}")
    else:
        sys.stdout.write(dump_puzzle(args.size, records))
    return 0


def cmd_sample(args) -> int:
    sys.stdout.write(SAMPLE_4X4)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="em-solver", description="Edge-matching puzzle solver")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("solve", help="solve a puzzle file")
    p.add_argument("puzzle", help="puzzle file")
    p.add_argument("--order", choices=ORDERS, default=None, help="traversal order")
    p.add_argument("--workers", type=int, default=None, help="worker processes")
    p.add_argument("--node-limit", type=int, default=None, help="max placement attempts")
    p.add_argument("--time-limit", type=float, default=None, help="seconds before giving up")
    p.add_argument("--svg", default=None, help="write the solved board to this SVG file")
    p.set_defaults(func=cmd_solve)

    p = sub.add_parser("check", help="load a puzzle and show its piece split")
    p.add_argument("puzzle", help="puzzle file")
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("generate", help="write a random solvable puzzle")
    p.add_argument("size", type=int)
    p.add_argument("--border-colors", type=int, default=None, help="default: size - 1, at least 2")
    p.add_argument("--inner-colors", type=int, default=None, help="default: size + 1")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("-o", "--output", default=None, help="output file (default: stdout)")
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("sample", help="print the bundled 4x4 sample puzzle")
    p.set_defaults(func=cmd_sample)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else CFG.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (PuzzleError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
