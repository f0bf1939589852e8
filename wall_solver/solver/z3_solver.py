from __future__ import annotations

import logging
from fractions import Fraction
from typing import List, Optional, Tuple

from ..graph import Color, Graph, Pathway, Room
from .types import NoPathFound, Path, SearchAborted, SearchResult, Step

logger = logging.getLogger(__name__)

_COLOR_IDX = {Color.RED: 0, Color.BLUE: 1}


def solve_with_z3(
    graph: Graph,
    start: Room,
    end: Room,
    *,
    initial_color: Optional[Color] = None,
    timeout_ms: int | None = 30_000,
) -> SearchResult:
    """Solve using Z3's optimizer.

    The walk is unrolled for `2 * len(graph)` steps, which covers every walk
    that visits each (room, last color) state at most once; a minimum-cost
    alternating walk never needs to repeat a state since costs are
    non-negative. Each step either takes one arc or stops for good:
    - arc[i] in -1 (stopped) or 0..m-1 (index into the directed arc list)
    - pos[i] is the room index before step i
    - col[i] is the color of arc[i]; consecutive taken arcs must differ
    """

    try:
        import z3  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("z3-solver is required. Install with: pip install z3-solver") from e

    graph.require_room(start)
    graph.require_room(end)
    if initial_color is not None:
        initial_color = Color.parse(initial_color)

    if start == end:
        return Path(start=start)

    room_idx = {room: i for i, room in enumerate(graph.rooms)}
    arcs = _directed_arcs(graph)
    m = len(arcs)
    horizon = 2 * len(graph)

    pos = [z3.Int(f"pos_{i}") for i in range(horizon + 1)]
    arc = [z3.Int(f"arc_{i}") for i in range(horizon)]
    col = [z3.Int(f"col_{i}") for i in range(horizon)]
    step_cost = [z3.Real(f"cost_{i}") for i in range(horizon)]

    opt = z3.Optimize()
    if timeout_ms is not None:
        opt.set(timeout=timeout_ms)

    opt.add(pos[0] == room_idx[start])
    opt.add(pos[horizon] == room_idx[end])

    for i in range(horizon):
        opt.add(z3.And(arc[i] >= -1, arc[i] < m))
        # The walk ends the first time it enters the exit.
        opt.add(z3.Implies(pos[i] == room_idx[end], arc[i] == -1))

        # Stopping is permanent and keeps the walker in place.
        opt.add(z3.Implies(arc[i] == -1, z3.And(pos[i + 1] == pos[i], step_cost[i] == 0)))
        if i + 1 < horizon:
            opt.add(z3.Implies(arc[i] == -1, arc[i + 1] == -1))

        for j, (pathway, src, dst) in enumerate(arcs):
            opt.add(
                z3.Implies(
                    arc[i] == j,
                    z3.And(
                        pos[i] == room_idx[src],
                        pos[i + 1] == room_idx[dst],
                        col[i] == _COLOR_IDX[pathway.color],
                        step_cost[i] == _real(z3, pathway.cost),
                    ),
                )
            )

        if i == 0:
            if initial_color is not None:
                opt.add(z3.Implies(arc[0] >= 0, col[0] != _COLOR_IDX[initial_color]))
        else:
            opt.add(z3.Implies(z3.And(arc[i - 1] >= 0, arc[i] >= 0), col[i - 1] != col[i]))

    total = z3.Sum(step_cost) if step_cost else z3.RealVal(0)
    opt.minimize(total)

    logger.debug("z3: %d rooms, %d arcs, horizon=%d", len(graph), m, horizon)
    chk = opt.check()
    if chk == z3.unknown:
        reason = opt.reason_unknown()
        logger.warning("z3 search %r -> %r gave up: %s", start, end, reason)
        return SearchAborted(start=start, end=end, reason=f"Solver returned UNKNOWN: {reason}")
    if chk != z3.sat:
        return NoPathFound(start=start, end=end)

    model = opt.model()
    steps: List[Step] = []
    for i in range(horizon):
        j = model.eval(arc[i], model_completion=True).as_long()
        if j < 0:
            break
        pathway, src, dst = arcs[j]
        steps.append(Step(pathway=pathway, source=src, target=dst))

    return Path(start=start, steps=tuple(steps), cost=sum(s.cost for s in steps))


def _real(z3, value: float):
    frac = Fraction(value)
    return z3.Q(frac.numerator, frac.denominator)


def _directed_arcs(graph: Graph) -> List[Tuple[Pathway, Room, Room]]:
    """Expand pathways into one entry per traversal direction."""
    arcs: List[Tuple[Pathway, Room, Room]] = []
    for room in graph.rooms:
        for pathway, nb in graph.neighbors_of(room):
            arcs.append((pathway, room, nb))
    return arcs
