"""Configuration management for the Budgie allocation engine.

This module centralizes paths, engine constants, environment variable
overrides and the logging setup used by the command-line scripts.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

# Base project root - assumes this file is in budgie/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGIE_DATA_DIR", _PROJECT_ROOT / "data"))
BUDGETS_DIR = DATA_DIR / "budgets"

# User preferences (rounding, buffer, pay schedule)
SETTINGS_PATH = Path(
    os.getenv("BUDGIE_SETTINGS_PATH", DATA_DIR / "settings.json")
).resolve()

LOG_LEVEL = os.getenv("BUDGIE_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Engine constants
PAY_PERIODS_PER_YEAR = 26
MONTHS_PER_YEAR = 12
PAYCHECK_COUNT = 26
MAX_ADVANCE_STEPS = 100
BIWEEKLY_STEP_DAYS = 14
DEFAULT_STEP_DAYS = 30

PRIORITY_ACTIVE = "active"
PRIORITY_PAUSED = "paused"
PRIORITY_COMPLETE = "complete"
INACTIVE_PRIORITY_STATES = frozenset({PRIORITY_PAUSED, PRIORITY_COMPLETE})


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, BUDGETS_DIR]:
        directory.mkdir(parents=True, exist_ok=True)


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Configure root logging for scripts.

    The library modules only create loggers; handlers are installed here so
    importing ``budgie`` never changes the host application's logging.
    """
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
