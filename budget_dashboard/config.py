"""Configuration management for the budget dashboard.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

# Base project root - assumes this file is in budget_dashboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGET_DASHBOARD_DATA_DIR", _PROJECT_ROOT / "data"))
EXPENSES_DIR = DATA_DIR / "expenses"

# Salary persistence
SALARY_FILE = Path(
    os.getenv("BUDGET_DASHBOARD_SALARY_FILE", DATA_DIR / "salaries.json")
).resolve()
DB_PATH = Path(
    os.getenv("BUDGET_DASHBOARD_DB_PATH", DATA_DIR / "budget.db")
).resolve()

# Carry-forward never looks further back than one year
CARRY_FORWARD_LOOKBACK = 12

LOG_LEVEL = os.getenv("BUDGET_DASHBOARD_LOG_LEVEL", "WARNING")


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, EXPENSES_DIR, SALARY_FILE.parent, DB_PATH.parent]:
        directory.mkdir(parents=True, exist_ok=True)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Set the package log level and attach a stream handler once.

    Args:
        level: Level name such as ``"INFO"``. Defaults to
            ``BUDGET_DASHBOARD_LOG_LEVEL`` (``WARNING`` if unset).

    Returns:
        The ``budget_dashboard`` package logger
    """
    logger = logging.getLogger("budget_dashboard")
    logger.setLevel((level or LOG_LEVEL).upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
    return logger
