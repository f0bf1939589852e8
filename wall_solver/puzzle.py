from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .graph import Color, Graph, Room, build_graph

_TRUTHY = {"1", "true", "yes", "y", "on"}


class PuzzleParseError(ValueError):
    pass


@dataclass
class Puzzle:
    """A wall puzzle: the room graph plus (optionally) where to start and finish.

    - `graph` holds rooms and colored pathways.
    - `start` / `end` are the declared entrance and exit, if the source named them.
    - `meta` carries any other directives from the puzzle file.
    """

    graph: Graph
    start: Optional[Room] = None
    end: Optional[Room] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_file(path: str | Path) -> "Puzzle":
        path = Path(path)
        if path.suffix.lower() == ".json":
            return Puzzle.from_json(path.read_text(encoding="utf-8"))
        return Puzzle.from_text(path.read_text(encoding="utf-8"), source_name=str(path))

    @staticmethod
    def from_json(text: str) -> "Puzzle":
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as e:
            raise PuzzleParseError(f"Invalid JSON: {e}") from e
        if not isinstance(obj, dict):
            raise PuzzleParseError("JSON puzzle must be an object")

        rooms = obj.get("rooms")
        if not isinstance(rooms, list):
            raise PuzzleParseError("JSON puzzle needs a 'rooms' list")

        pathways: List[Tuple[Any, Any, Any, Any]] = []
        raw_pathways = obj.get("pathways", [])
        if not isinstance(raw_pathways, list):
            raise PuzzleParseError("'pathways' must be a list")
        directed = obj.get("directed", False)
        if not isinstance(directed, bool):
            raise PuzzleParseError(f"'directed' must be true or false (got {directed!r})")
        meta = obj.get("meta", {})
        if not isinstance(meta, dict):
            raise PuzzleParseError("'meta' must be an object")

        for i, pw in enumerate(raw_pathways):
            if not isinstance(pw, dict):
                raise PuzzleParseError(f"Pathway #{i} must be an object")
            try:
                pathways.append((pw["from"], pw["to"], pw["color"], pw.get("cost", 1)))
            except KeyError as e:
                raise PuzzleParseError(f"Pathway #{i} is missing {e.args[0]!r}") from e

        g = build_graph(rooms, pathways, directed=directed)
        return Puzzle(graph=g, start=obj.get("start"), end=obj.get("end"), meta=dict(meta))

    @staticmethod
    def from_text(text: str, *, source_name: str = "<text>") -> "Puzzle":
        """Parse the line-oriented wall format.

        Each line is `room color:target[:cost] ...`, listing the pathways that
        leave `room`. Lines like `# start: s` are directives; other `#` lines
        are comments.
        """
        meta: Dict[str, Any] = {"source": source_name}
        start: Optional[str] = None
        end: Optional[str] = None
        directed = True

        heads: List[str] = []
        pathways: List[Tuple[str, str, Color, float]] = []

        for lineno, ln in enumerate(text.splitlines(), start=1):
            raw = ln.strip()
            if not raw:
                continue
            if raw.startswith("#"):
                hdr = raw[1:].strip()
                if ":" in hdr:
                    k, v = [x.strip() for x in hdr.split(":", 1)]
                    key = k.lower()
                    if key == "start":
                        start = v
                    elif key == "end":
                        end = v
                    elif key == "directed":
                        directed = v.lower() in _TRUTHY
                    else:
                        meta[k] = v
                continue

            toks = raw.split()
            room = toks[0]
            if ":" in room:
                raise PuzzleParseError(f"{source_name}:{lineno}: expected a room name, got {room!r}")
            if len(toks) < 2:
                raise PuzzleParseError(f"{source_name}:{lineno}: room {room!r} lists no pathways")
            heads.append(room)
            for tok in toks[1:]:
                color, target, cost = _parse_edge_token(tok, where=f"{source_name}:{lineno}")
                pathways.append((room, target, color, cost))

        if not heads:
            raise PuzzleParseError(f"No rooms found in {source_name}")

        # Rooms that are only ever entered (e.g. the exit) get declared after the heads.
        rooms: List[str] = list(heads)
        declared = set(heads)
        for _, target, _, _ in pathways:
            if target not in declared:
                declared.add(target)
                rooms.append(target)

        g = build_graph(rooms, pathways, directed=directed)
        return Puzzle(graph=g, start=start, end=end, meta=meta)


def _parse_edge_token(tok: str, *, where: str) -> Tuple[Color, str, float]:
    parts = tok.split(":")
    if len(parts) not in (2, 3) or not all(parts):
        raise PuzzleParseError(f"{where}: expected 'color:room[:cost]', got {tok!r}")
    try:
        color = Color.parse(parts[0])
    except ValueError as e:
        raise PuzzleParseError(f"{where}: {e}") from e
    cost: float = 1
    if len(parts) == 3:
        try:
            cost = float(parts[2])
        except ValueError as e:
            raise PuzzleParseError(f"{where}: invalid cost in {tok!r}") from e
        if cost.is_integer():
            cost = int(cost)
    return color, parts[1], cost
