from __future__ import annotations

import os

import uvicorn

from wall_solver.config import SolverSettings
from wall_solver.logging_config import setup_logging

if __name__ == "__main__":
    settings = SolverSettings.from_env()
    setup_logging(settings.log_level)
    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8000"))
    reload = os.environ.get("RELOAD", "0").lower() in {"1", "true", "yes", "y", "on"}
    uvicorn.run("backend.app:app", host=host, port=port, reload=reload, log_config=None)
