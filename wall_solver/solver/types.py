from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple, Union

from ..graph import Color, Pathway, Room

SolverName = Literal["dijkstra", "z3"]


@dataclass(frozen=True)
class SearchState:
    room: Room
    last_color: Optional[Color]  # None => start state, no pathway taken yet


@dataclass(frozen=True)
class Step:
    """One traversal of `pathway`, from `source` to `target`.

    For two-way pathways the traversal direction can be the reverse of the
    pathway's declared direction.
    """

    pathway: Pathway
    source: Room
    target: Room

    @property
    def color(self) -> Color:
        return self.pathway.color

    @property
    def cost(self) -> float:
        return self.pathway.cost


@dataclass(frozen=True)
class Path:
    start: Room
    steps: Tuple[Step, ...] = ()
    cost: float = 0
    expanded: int = field(default=0, compare=False)

    @property
    def end(self) -> Room:
        return self.steps[-1].target if self.steps else self.start

    @property
    def rooms(self) -> List[Room]:
        return [self.start] + [s.target for s in self.steps]

    @property
    def colors(self) -> List[Color]:
        return [s.color for s in self.steps]

    def is_alternating(self) -> bool:
        return all(a.color != b.color for a, b in zip(self.steps, self.steps[1:]))

    @property
    def length(self) -> int:
        return len(self.steps)


@dataclass(frozen=True)
class NoPathFound:
    start: Room
    end: Room
    expanded: int = 0


@dataclass(frozen=True)
class SearchAborted:
    start: Room
    end: Room
    expanded: int = 0
    reason: str = ""


SearchResult = Union[Path, NoPathFound, SearchAborted]
