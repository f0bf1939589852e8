from .graph import Color, Graph, InvalidGraphError, Pathway, Room, build_graph
from .puzzle import Puzzle, PuzzleParseError
from .solver import (
    SOLVER_CHOICES,
    NoPathFound,
    Path,
    SearchAborted,
    SearchResult,
    SearchState,
    Step,
    find_alternating_path,
    solve_puzzle,
)

__all__ = [
    "Color",
    "Graph",
    "InvalidGraphError",
    "NoPathFound",
    "Path",
    "Pathway",
    "Puzzle",
    "PuzzleParseError",
    "Room",
    "SOLVER_CHOICES",
    "SearchAborted",
    "SearchResult",
    "SearchState",
    "Step",
    "build_graph",
    "find_alternating_path",
    "solve_puzzle",
]
