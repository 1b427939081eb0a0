"""Mini README: Shared logging helpers for the expense tracker.

Structure:
    * configure_root_logger - attaches the console handler once per process.
    * get_logger - module-level logger factory used across the package.

Usage:
    Modules declare ``LOGGER = get_logger(__name__)`` and log ledger actions
    (additions, deletions, imports) through it. Entry points such as the CLI
    call ``configure_root_logger`` with the level from settings so that the
    web server and command line share one log format.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False
_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"


def _coerce_level(level: Union[int, str]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(str(level).strip().upper())
    if isinstance(numeric, int):
        return numeric
    raise ValueError(f"Unknown log level: {level}")


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Attach the console handler to the root logger exactly once.

    Later calls only adjust the level so the CLI can raise verbosity after
    modules have already requested their loggers.
    """

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(_coerce_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a named logger; handlers are owned by ``configure_root_logger``."""

    return logging.getLogger(name)
