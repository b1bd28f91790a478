"""Console logging for indexserve.

Installs a single Rich handler on the root logger so our own loggers and
uvicorn's (started with ``log_config=None``) share one output format.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# uvicorn's access log duplicates the server's own access-log middleware
_QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging with a Rich console handler."""
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
