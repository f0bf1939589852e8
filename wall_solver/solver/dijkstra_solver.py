from __future__ import annotations

import heapq
import itertools
import logging
from typing import Dict, List, Optional, Set, Tuple

from ..graph import Color, Graph, Room
from .types import NoPathFound, Path, SearchAborted, SearchResult, SearchState, Step

logger = logging.getLogger(__name__)


def solve_with_dijkstra(
    graph: Graph,
    start: Room,
    end: Room,
    *,
    initial_color: Optional[Color] = None,
    max_expansions: Optional[int] = None,
) -> SearchResult:
    """Uniform-cost search over (room, last color) states.

    A state can only leave through pathways whose color differs from the one
    used to enter it. `initial_color` plays the role of that color for the
    start room; `None` leaves the first move unconstrained. Reaching `end`
    with either color counts as success.

    Returns a `Path`, `NoPathFound` when the frontier runs dry, or
    `SearchAborted` once more than `max_expansions` states were expanded.
    """

    graph.require_room(start)
    graph.require_room(end)
    if initial_color is not None:
        initial_color = Color.parse(initial_color)
    if max_expansions is not None and max_expansions < 0:
        raise ValueError(f"max_expansions must be non-negative (got {max_expansions})")

    if start == end:
        return Path(start=start)

    origin = SearchState(start, initial_color)
    best: Dict[SearchState, float] = {origin: 0}
    parent: Dict[SearchState, Tuple[SearchState, Step]] = {}
    settled: Set[SearchState] = set()

    # (cost, insertion order, state); the counter keeps ties FIFO and avoids
    # ever comparing two states.
    counter = itertools.count()
    frontier: List[Tuple[float, int, SearchState]] = [(0, next(counter), origin)]
    expanded = 0

    logger.debug("Searching %r -> %r over %r", start, end, graph)

    while frontier:
        cost, _, state = heapq.heappop(frontier)
        if state in settled or cost > best[state]:
            continue
        settled.add(state)

        if state.room == end:
            path = _reconstruct(parent, origin, state, cost, expanded)
            logger.debug("Found path of %d steps (cost=%s) after %d expansions", path.length, cost, expanded)
            return path

        if max_expansions is not None and expanded >= max_expansions:
            logger.warning("Search %r -> %r aborted after %d expansions", start, end, expanded)
            return SearchAborted(
                start=start,
                end=end,
                expanded=expanded,
                reason=f"expansion budget of {max_expansions} exhausted",
            )
        expanded += 1

        for pathway, nb in graph.neighbors_of(state.room, excluding_color=state.last_color):
            nxt = SearchState(nb, pathway.color)
            if nxt in settled:
                continue
            new_cost = cost + pathway.cost
            if nxt not in best or new_cost < best[nxt]:
                best[nxt] = new_cost
                parent[nxt] = (state, Step(pathway=pathway, source=state.room, target=nb))
                heapq.heappush(frontier, (new_cost, next(counter), nxt))

    logger.debug("No alternating path %r -> %r (%d expansions)", start, end, expanded)
    return NoPathFound(start=start, end=end, expanded=expanded)


def _reconstruct(
    parent: Dict[SearchState, Tuple[SearchState, Step]],
    origin: SearchState,
    goal: SearchState,
    cost: float,
    expanded: int,
) -> Path:
    steps: List[Step] = []
    cur = goal
    while cur != origin:
        prev, step = parent[cur]
        steps.append(step)
        cur = prev
    steps.reverse()
    return Path(start=origin.room, steps=tuple(steps), cost=cost, expanded=expanded)
