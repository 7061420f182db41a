from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV_VAR = "DELVE_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: Optional[int] = None, default_level: int = logging.INFO) -> int:
    """An explicit level wins, then DELVE_LOG_LEVEL, then ``default_level``."""
    if level is not None:
        return level
    level_name = os.getenv(LOG_LEVEL_ENV_VAR)
    if level_name:
        return getattr(logging, level_name.upper(), default_level)
    return default_level


def configure_logging(level: Optional[int] = None, default_level: int = logging.INFO) -> None:
    """Install a single stderr handler on the root logger.

    stdout is left to command output (the CLI prints JSON there). Existing
    handlers are replaced so repeated calls do not duplicate lines.
    """
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(resolve_level(level, default_level))
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)


__all__ = ["configure_logging", "resolve_level", "LOG_LEVEL_ENV_VAR"]
