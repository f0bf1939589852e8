from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field

from .solver.types import SolverName


class SolverSettings(BaseModel):
    """Defaults shared by the CLI and the HTTP API."""

    solver: SolverName = "dijkstra"
    max_expansions: Optional[int] = Field(default=None, ge=0)
    timeout_ms: Optional[int] = Field(default=30_000, ge=1)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "SolverSettings":
        """Create settings from WALL_* environment variables."""
        max_expansions = os.getenv("WALL_MAX_EXPANSIONS")
        timeout_ms = os.getenv("WALL_TIMEOUT_MS", "30000")
        return cls(
            solver=os.getenv("WALL_SOLVER", "dijkstra"),
            max_expansions=int(max_expansions) if max_expansions else None,
            timeout_ms=int(timeout_ms) if timeout_ms else None,
            log_level=os.getenv("WALL_LOG_LEVEL", "INFO"),
        )
