from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..graph import Color, Graph, Room
from .dijkstra_solver import solve_with_dijkstra
from .types import NoPathFound, Path, SearchAborted, SearchResult, SearchState, SolverName, Step
from .z3_solver import solve_with_z3

if TYPE_CHECKING:
    from ..puzzle import Puzzle

SOLVER_CHOICES: tuple[SolverName, ...] = ("dijkstra", "z3")


def find_alternating_path(
    graph: Graph,
    start: Room,
    end: Room,
    *,
    initial_color: Optional[Color] = None,
    solver: SolverName = "dijkstra",
    max_expansions: Optional[int] = None,
    timeout_ms: int | None = 30_000,
) -> SearchResult:
    if solver == "dijkstra":
        return solve_with_dijkstra(graph, start, end, initial_color=initial_color, max_expansions=max_expansions)
    if solver == "z3":
        return solve_with_z3(graph, start, end, initial_color=initial_color, timeout_ms=timeout_ms)
    raise ValueError(f"Unknown solver {solver!r}. Choose one of: {', '.join(SOLVER_CHOICES)}")


def solve_puzzle(
    puzzle: "Puzzle",
    *,
    start: Optional[Room] = None,
    end: Optional[Room] = None,
    **kwargs,
) -> SearchResult:
    """Solve a loaded puzzle, defaulting to its declared start and end rooms."""
    start = puzzle.start if start is None else start
    end = puzzle.end if end is None else end
    if start is None or end is None:
        raise ValueError("Puzzle does not declare a start and end room; pass them explicitly")
    return find_alternating_path(puzzle.graph, start, end, **kwargs)


__all__ = [
    "NoPathFound",
    "Path",
    "SearchAborted",
    "SearchResult",
    "SearchState",
    "SolverName",
    "SOLVER_CHOICES",
    "Step",
    "find_alternating_path",
    "solve_puzzle",
    "solve_with_dijkstra",
    "solve_with_z3",
]
