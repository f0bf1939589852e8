"""
Logging setup for the wall solver CLI and API.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO", use_rich: bool = True) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        use_rich: Use Rich's colored handler instead of a plain stream handler
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_rich:
        handler = RichHandler(
            console=Console(file=sys.stderr),
            level=numeric_level,
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
            log_time_format="[%H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)-5s %(name)s: %(message)s", datefmt="%H:%M:%S")
        )

    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)

    logging.getLogger(__name__).debug("Logging configured: level=%s, rich=%s", level, use_rich)
