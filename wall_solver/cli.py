from __future__ import annotations

import argparse
from pathlib import Path as FilePath
from typing import List, Optional, Sequence

from .config import SolverSettings
from .graph import Color
from .logging_config import setup_logging
from .puzzle import Puzzle
from .solver import SOLVER_CHOICES, NoPathFound, Path, SearchAborted, solve_puzzle


def format_path(path: Path) -> List[str]:
    """One `a ==(red)=> b` line per step."""
    return [f"{step.source} ==({step.color})=> {step.target}" for step in path.steps]


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = SolverSettings.from_env()

    parser = argparse.ArgumentParser(prog="wall_solver", description="Alternating-color path solver for wall puzzles")
    parser.add_argument("--log-level", type=str, default=settings.log_level, help="Logging level (DEBUG, INFO, ...)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_inspect = sub.add_parser("inspect", help="Summarize a puzzle file")
    p_inspect.add_argument("puzzle", type=str, help="Path to a wall puzzle (.txt or .json)")

    p_solve = sub.add_parser("solve", help="Find a shortest alternating path")
    p_solve.add_argument("puzzle", type=str, help="Path to a wall puzzle (.txt or .json)")
    p_solve.add_argument("start", nargs="?", default=None, help="Start room (defaults to the puzzle's '# start:')")
    p_solve.add_argument("end", nargs="?", default=None, help="End room (defaults to the puzzle's '# end:')")
    p_solve.add_argument("--solver", choices=SOLVER_CHOICES, default=settings.solver, help="Solver backend")
    p_solve.add_argument("--timeout-ms", type=int, default=settings.timeout_ms, help="z3 timeout in milliseconds")
    p_solve.add_argument(
        "--max-expansions",
        type=int,
        default=settings.max_expansions,
        help="Abort the Dijkstra search after this many expanded states",
    )
    p_solve.add_argument(
        "--initial-color",
        choices=[c.value for c in Color],
        default=None,
        help="Treat the start room as entered through this color",
    )

    args = parser.parse_args(list(argv) if argv is not None else None)
    setup_logging(args.log_level)

    puzzle_path = FilePath(args.puzzle)
    puzzle = Puzzle.from_file(puzzle_path)
    graph = puzzle.graph

    if args.cmd == "inspect":
        kind = "directed" if graph.directed else "undirected"
        print(f"{puzzle_path.name}: rooms={len(graph)}, pathways={graph.pathway_count()} ({kind})")
        print(f"  start={puzzle.start!r} end={puzzle.end!r}")
        return 0

    if args.cmd == "solve":
        res = solve_puzzle(
            puzzle,
            start=args.start,
            end=args.end,
            solver=args.solver,
            initial_color=Color.parse(args.initial_color) if args.initial_color else None,
            max_expansions=args.max_expansions,
            timeout_ms=args.timeout_ms,
        )
        if isinstance(res, NoPathFound):
            print("No solution found")
            return 1
        if isinstance(res, SearchAborted):
            print(f"Search aborted after {res.expanded} expansions: {res.reason}")
            return 1
        for line in format_path(res):
            print(line)
        print(f"Solved {puzzle_path.name}: steps={res.length}, cost={res.cost}")
        return 0

    raise AssertionError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
