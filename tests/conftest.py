"""
Shared fixtures and helpers for the wall solver tests.
"""

import logging
import math
import random
from pathlib import Path
from typing import Optional

import pytest

from wall_solver.graph import Color, Graph, Room, build_graph

logging.basicConfig(level=logging.INFO)

EXAMPLES_DIR = Path(__file__).resolve().parents[1] / "examples" / "puzzles"


@pytest.fixture
def sample_puzzle_path() -> Path:
    """The bundled puzzle whose only route runs through a self-loop."""
    return EXAMPLES_DIR / "wall-puzzle.txt"


@pytest.fixture
def four_rooms() -> Graph:
    """Rooms A, B, C, T joined by two-way pathways."""
    return build_graph(
        ["A", "B", "C", "T"],
        [
            ("A", "B", Color.BLUE),
            ("B", "C", Color.RED),
            ("C", "T", Color.BLUE),
            ("A", "C", Color.RED),
        ],
    )


def random_graph(seed: int) -> tuple:
    """A small random multigraph plus a start and end room."""
    rng = random.Random(seed)
    n = rng.randint(2, 4)
    rooms = list(range(n))
    pathways = [
        (rng.randrange(n), rng.randrange(n), rng.choice([Color.RED, Color.BLUE]), rng.randint(0, 3))
        for _ in range(rng.randint(1, 6))
    ]
    graph = build_graph(rooms, pathways, directed=rng.random() < 0.5)
    return graph, rng.randrange(n), rng.randrange(n)


def brute_force_min_cost(graph: Graph, start: Room, end: Room, initial_color: Optional[Color] = None) -> float:
    """Cheapest alternating walk, by trying every walk of up to 2 * rooms steps."""
    if start == end:
        return 0
    limit = 2 * len(graph)
    best = math.inf

    def walk(room: Room, last: Optional[Color], cost: float, depth: int) -> None:
        nonlocal best
        if room == end:
            best = min(best, cost)
            return
        if depth == limit:
            return
        for pathway, nb in graph.neighbors_of(room):
            if last is not None and pathway.color == last:
                continue
            walk(nb, pathway.color, cost + pathway.cost, depth + 1)

    walk(start, initial_color, 0, 0)
    return best


def assert_valid_walk(graph: Graph, path, start: Room, end: Room) -> None:
    """Steps are chained, use real pathways in a legal direction, and alternate."""
    assert path.start == start
    assert path.end == end
    cur = start
    for step in path.steps:
        assert step.source == cur
        assert step.pathway in graph.pathways
        assert (step.pathway, step.target) in graph.neighbors_of(step.source)
        cur = step.target
    assert path.is_alternating()
    assert path.cost == sum(s.cost for s in path.steps)
