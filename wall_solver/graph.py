from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, Union

Room = Hashable


class InvalidGraphError(ValueError):
    pass


class Color(str, Enum):
    """The two pathway colors. Alternation only makes sense with exactly two."""

    RED = "red"
    BLUE = "blue"

    def opposite(self) -> "Color":
        return Color.BLUE if self is Color.RED else Color.RED

    @classmethod
    def parse(cls, value: Union[str, "Color"]) -> "Color":
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown color {value!r} (expected one of: {', '.join(c.value for c in cls)})")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Pathway:
    source: Room
    target: Room
    color: Color
    cost: float = 1


PathwayLike = Union[Pathway, Sequence[Any]]


class Graph:
    """An immutable colored multigraph of rooms and pathways.

    Use `build_graph` to construct one. Pathways are either one-way corridors
    (`directed=True`) or traversable both ways. Adjacency lists keep pathway
    declaration order so searches over the graph are reproducible.
    """

    def __init__(self, rooms: Iterable[Room], pathways: Iterable[PathwayLike], *, directed: bool = False) -> None:
        self._directed = bool(directed)
        self._adj: Dict[Room, List[Tuple[Pathway, Room]]] = {}
        for room in rooms:
            try:
                seen = room in self._adj
            except TypeError as e:
                raise InvalidGraphError(f"Room ids must be hashable (got {room!r})") from e
            if seen:
                raise InvalidGraphError(f"Duplicate room: {room!r}")
            self._adj[room] = []

        out: List[Pathway] = []
        for raw in pathways:
            pw = _coerce_pathway(raw)
            if pw.source not in self or pw.target not in self:
                raise InvalidGraphError(
                    f"Pathway references an unknown room (source={pw.source!r}, target={pw.target!r})"
                )
            out.append(pw)
            self._adj[pw.source].append((pw, pw.target))
            # A two-way self-loop is still a single transition.
            if not self._directed and pw.source != pw.target:
                self._adj[pw.target].append((pw, pw.source))

        self._rooms: Tuple[Room, ...] = tuple(self._adj)
        self._pathways: Tuple[Pathway, ...] = tuple(out)

    @property
    def rooms(self) -> Tuple[Room, ...]:
        return self._rooms

    @property
    def pathways(self) -> Tuple[Pathway, ...]:
        return self._pathways

    @property
    def directed(self) -> bool:
        return self._directed

    def neighbors_of(self, room: Room, excluding_color: Optional[Color] = None) -> List[Tuple[Pathway, Room]]:
        """Every pathway leaving `room`, paired with the room it leads to.

        Pathways of `excluding_color` are left out when one is given.
        """
        adj = self.require_room(room)
        if excluding_color is None:
            return list(adj)
        return [(pw, nb) for pw, nb in adj if pw.color != excluding_color]

    def degree(self, room: Room) -> int:
        return len(self.require_room(room))

    def pathway_count(self) -> int:
        return len(self._pathways)

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room: object) -> bool:
        try:
            return room in self._adj
        except TypeError:
            return False

    def require_room(self, room: Room) -> List[Tuple[Pathway, Room]]:
        try:
            return self._adj[room]
        except (KeyError, TypeError) as e:
            raise KeyError(f"Unknown room: {room!r}") from e

    def to_networkx(self):
        """Convert to a networkx multigraph for ad-hoc experimentation."""
        import networkx as nx

        g = nx.MultiDiGraph() if self._directed else nx.MultiGraph()
        g.add_nodes_from(self._rooms)
        for pw in self._pathways:
            g.add_edge(pw.source, pw.target, color=pw.color.value, cost=pw.cost)
        return g

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph(rooms={len(self._rooms)}, pathways={len(self._pathways)}, {kind})"


def build_graph(rooms: Iterable[Room], pathways: Iterable[PathwayLike], *, directed: bool = False) -> Graph:
    """Validate rooms and pathways and freeze them into a `Graph`.

    Raises `InvalidGraphError` on duplicate rooms, pathways touching unknown
    rooms, colors outside `Color`, or negative or non-finite costs.
    """
    return Graph(rooms, pathways, directed=directed)


def _coerce_pathway(raw: PathwayLike) -> Pathway:
    if isinstance(raw, Pathway):
        source, target, color, cost = raw.source, raw.target, raw.color, raw.cost
    else:
        try:
            items = tuple(raw)
        except TypeError as e:
            raise InvalidGraphError(f"Pathway must be a Pathway or a tuple, got {raw!r}") from e
        if len(items) == 3:
            source, target, color = items
            cost = 1
        elif len(items) == 4:
            source, target, color, cost = items
        else:
            raise InvalidGraphError(f"Pathway tuple must be (source, target, color[, cost]), got {raw!r}")

    try:
        color = Color.parse(color)
    except ValueError as e:
        raise InvalidGraphError(str(e)) from e

    if isinstance(cost, bool) or not isinstance(cost, Real):
        raise InvalidGraphError(f"Pathway cost must be a number (got {cost!r})")
    if not math.isfinite(cost):
        raise InvalidGraphError(f"Pathway cost must be finite (got {cost!r})")
    if cost < 0:
        raise InvalidGraphError(f"Pathway cost must be non-negative (got {cost!r})")

    return Pathway(source=source, target=target, color=color, cost=cost)
