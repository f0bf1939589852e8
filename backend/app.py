from __future__ import annotations

import logging
import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

# Allow running `python backend/app.py` from repo root.
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from wall_solver.config import SolverSettings
from wall_solver.graph import Color, InvalidGraphError
from wall_solver.puzzle import Puzzle, PuzzleParseError
from wall_solver.solver import NoPathFound, SearchAborted, SolverName, solve_puzzle

MAX_TIMEOUT_MS = 1_000_000

logger = logging.getLogger(__name__)
settings = SolverSettings.from_env()


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _examples_dir() -> Path:
    return _repo_root() / "examples" / "puzzles"


def _parse_puzzle(text: str, *, name: str) -> Puzzle:
    if name.lower().endswith(".json"):
        return Puzzle.from_json(text)
    return Puzzle.from_text(text, source_name=name)


def _graph_payload(puzzle: Puzzle) -> Dict[str, Any]:
    g = puzzle.graph
    return {
        "directed": g.directed,
        "rooms": [str(r) for r in g.rooms],
        "pathways": [
            {"from": str(pw.source), "to": str(pw.target), "color": pw.color.value, "cost": pw.cost}
            for pw in g.pathways
        ],
    }


class ParseRequest(BaseModel):
    name: str = Field(default="puzzle.txt")
    text: str


class SolveRequest(ParseRequest):
    start: Optional[str] = None
    end: Optional[str] = None
    solver: SolverName = Field(default=settings.solver)
    initial_color: Optional[Color] = None
    max_expansions: Optional[int] = Field(default=settings.max_expansions, ge=0)
    timeout_ms: Optional[int] = Field(default=settings.timeout_ms, ge=1, le=MAX_TIMEOUT_MS)


app = FastAPI(title="Wall Solver API", version="0.1.0")

cors_raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
cors_list = [c.strip() for c in cors_raw.split(",") if c.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_list or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/puzzles")
def list_puzzles() -> Dict[str, Any]:
    base = _examples_dir()
    entries: List[Dict[str, Any]] = []
    if base.exists():
        for path in sorted(base.iterdir()):
            if path.suffix.lower() not in {".txt", ".json"}:
                continue
            try:
                puzzle = Puzzle.from_file(path)
            except ValueError as e:
                logger.warning("Skipping unreadable example %s: %s", path.name, e)
                continue
            entries.append(
                {
                    "name": path.name,
                    "text": path.read_text(encoding="utf-8"),
                    "rooms": len(puzzle.graph),
                    "pathways": puzzle.graph.pathway_count(),
                    "start": puzzle.start,
                    "end": puzzle.end,
                }
            )
    return {"puzzles": entries}


@app.post("/parse")
def parse_puzzle(req: ParseRequest) -> Dict[str, Any]:
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
    except (PuzzleParseError, InvalidGraphError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {
        "counts": {
            "rooms": len(puzzle.graph),
            "pathways": puzzle.graph.pathway_count(),
        },
        "directed": puzzle.graph.directed,
        "start": puzzle.start,
        "end": puzzle.end,
        "meta": {k: str(v) for k, v in puzzle.meta.items()},
    }


@app.post("/graph")
def build_graph(req: ParseRequest) -> Dict[str, Any]:
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
    except (PuzzleParseError, InvalidGraphError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"graph": _graph_payload(puzzle)}


@app.post("/solve")
def solve(req: SolveRequest) -> Dict[str, Any]:
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
        t0 = time.perf_counter()
        res = solve_puzzle(
            puzzle,
            start=req.start,
            end=req.end,
            solver=req.solver,
            initial_color=req.initial_color,
            max_expansions=req.max_expansions,
            timeout_ms=req.timeout_ms,
        )
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
    except KeyError as e:
        raise HTTPException(status_code=400, detail=str(e.args[0]) if e.args else str(e)) from e
    except ValueError as e:
        # PuzzleParseError, InvalidGraphError, missing start/end
        raise HTTPException(status_code=400, detail=str(e)) from e

    if isinstance(res, NoPathFound):
        return {"status": "no_path", "path": None, "cost": None, "expanded": res.expanded, "time_ms": elapsed_ms}
    if isinstance(res, SearchAborted):
        return {
            "status": "aborted",
            "path": None,
            "cost": None,
            "expanded": res.expanded,
            "reason": res.reason,
            "time_ms": elapsed_ms,
        }
    return {
        "status": "solved",
        "path": {
            "rooms": [str(r) for r in res.rooms],
            "steps": [
                {"from": str(s.source), "to": str(s.target), "color": s.color.value, "cost": s.cost}
                for s in res.steps
            ],
        },
        "cost": res.cost,
        "expanded": res.expanded,
        "time_ms": elapsed_ms,
    }
