"""Salary persistence and carry-forward resolution.

Salaries are stored as one positive scalar per period behind a small
repository interface. :class:`SalaryStore` adds validation and the
carry-forward rule: a period with no saved salary inherits the most recent
salary from up to twelve prior periods, and that value is written back so
the period becomes anchored.

Backends:

* :class:`InMemorySalaryRepository` - a dict, for tests and previews
* :class:`JsonSalaryRepository` - one JSON file keyed by ``YYYY-MM``
* :class:`SqliteSalaryRepository` - a ``salaries`` table in SQLite
"""

from __future__ import annotations

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .config import CARRY_FORWARD_LOOKBACK, DB_PATH, SALARY_FILE
from .errors import InvalidAmount
from .periods import Period, PeriodLike, as_period

logger = logging.getLogger(__name__)


class SalaryRepository(ABC):
    """Key-value storage of salaries by period."""

    @abstractmethod
    def get(self, period: Period) -> Optional[float]:
        """Return the salary saved for ``period`` or ``None``."""

    @abstractmethod
    def put(self, period: Period, value: float) -> None:
        """Save ``value`` for ``period``, replacing any existing value."""

    @abstractmethod
    def put_if_absent(self, period: Period, value: float) -> bool:
        """Save ``value`` only if ``period`` has no salary yet.

        Returns:
            True if the value was written, False if one already existed
        """

    @abstractmethod
    def list_periods(self) -> List[Period]:
        """Return every period with a saved salary, oldest first."""


class InMemorySalaryRepository(SalaryRepository):
    """Dictionary-backed repository."""

    def __init__(self, initial: Optional[Mapping[PeriodLike, float]] = None):
        self._values: Dict[Period, float] = {}
        for period, value in (initial or {}).items():
            self._values[as_period(period)] = float(value)

    def get(self, period: Period) -> Optional[float]:
        return self._values.get(period)

    def put(self, period: Period, value: float) -> None:
        self._values[period] = float(value)

    def put_if_absent(self, period: Period, value: float) -> bool:
        if period in self._values:
            return False
        self._values[period] = float(value)
        return True

    def list_periods(self) -> List[Period]:
        return sorted(self._values)


class JsonSalaryRepository(SalaryRepository):
    """Salaries stored in a single JSON document.

    The file layout is::

        {"salaries": {"2024-01": 50000.0, ...}, "saved_at": "...", "version": 1}

    A missing file is an empty store. A corrupt file is logged and read as
    empty, but writes refuse to replace it so earlier salaries are kept.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else SALARY_FILE

    def _load(self, for_write: bool = False) -> Dict[Period, float]:
        """Read the stored salaries.

        Args:
            for_write: Raise instead of returning an empty store when the
                file exists but cannot be read

        Raises:
            OSError: If ``for_write`` is set and the file is unreadable
        """
        if not self.path.exists():
            return {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as e:
            if for_write:
                raise OSError(f"Refusing to overwrite unreadable salary file {self.path}: {e}") from e
            logger.warning("Could not read salary file %s: %s", self.path, e)
            return {}

        entries = data.get('salaries') if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            if for_write:
                raise OSError(f"Refusing to overwrite salary file {self.path}: no 'salaries' mapping")
            return {}

        salaries: Dict[Period, float] = {}
        for key, value in entries.items():
            try:
                period = Period.parse(key)
                amount = float(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid salary entry %r=%r in %s", key, value, self.path)
                continue
            if amount > 0:
                salaries[period] = amount
        return salaries

    def _save(self, salaries: Mapping[Period, float]) -> None:
        payload = {
            'salaries': {period.key: float(value) for period, value in sorted(salaries.items())},
            'saved_at': datetime.now(timezone.utc).isoformat(),
            'version': 1,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self.path.open('w', encoding='utf-8') as handle:
                json.dump(payload, handle, indent=2, sort_keys=True)
        except OSError as e:
            raise OSError(f"Failed to save salaries to {self.path}: {e}") from e

    def get(self, period: Period) -> Optional[float]:
        return self._load().get(period)

    def put(self, period: Period, value: float) -> None:
        salaries = self._load(for_write=True)
        salaries[period] = float(value)
        self._save(salaries)

    def put_if_absent(self, period: Period, value: float) -> bool:
        salaries = self._load(for_write=True)
        if period in salaries:
            return False
        salaries[period] = float(value)
        self._save(salaries)
        return True

    def list_periods(self) -> List[Period]:
        return sorted(self._load())


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS salaries (
    period TEXT PRIMARY KEY,
    amount REAL NOT NULL CHECK (amount > 0),
    updated_at TEXT
);
"""


class SqliteSalaryRepository(SalaryRepository):
    """Salaries stored in a SQLite table keyed by ``YYYY-MM``."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path is not None else DB_PATH
        self.init_db()

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        with self.connect() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    def get(self, period: Period) -> Optional[float]:
        with self.connect() as conn:
            row = conn.execute(
                "SELECT amount FROM salaries WHERE period = ?", (period.key,)
            ).fetchone()
        return float(row[0]) if row else None

    def put(self, period: Period, value: float) -> None:
        with self.connect() as conn:
            conn.execute(
                "INSERT INTO salaries (period, amount, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(period) DO UPDATE SET amount = excluded.amount, "
                "updated_at = excluded.updated_at",
                (period.key, float(value), datetime.now(timezone.utc).isoformat()),
            )
            conn.commit()

    def put_if_absent(self, period: Period, value: float) -> bool:
        with self.connect() as conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO salaries (period, amount, updated_at) VALUES (?, ?, ?)",
                (period.key, float(value), datetime.now(timezone.utc).isoformat()),
            )
            conn.commit()
            return cursor.rowcount == 1

    def list_periods(self) -> List[Period]:
        with self.connect() as conn:
            rows = conn.execute("SELECT period FROM salaries ORDER BY period").fetchall()
        periods: List[Period] = []
        for (key,) in rows:
            try:
                periods.append(Period.parse(key))
            except ValueError:
                logger.warning("Ignoring salary row with invalid period %r", key)
        return sorted(periods)


@dataclass(frozen=True)
class SalaryResolution:
    """Salary for a period and whether it came from an earlier period."""

    period: Period
    value: Optional[float]
    was_carried_forward: bool = False
    source: Optional[Period] = None

    @property
    def is_absent(self) -> bool:
        return self.value is None


class SalaryStore:
    """Validated salary access with bounded carry-forward.

    Args:
        repository: Backend holding the salaries
        max_lookback: How many prior periods ``resolve`` may inspect
    """

    def __init__(self, repository: SalaryRepository, max_lookback: int = CARRY_FORWARD_LOOKBACK):
        self.repository = repository
        self.max_lookback = max_lookback

    def get(self, period: PeriodLike) -> Optional[float]:
        return self.repository.get(as_period(period))

    def set(self, period: PeriodLike, value: Any) -> None:
        """Save a salary for ``period``; an explicit save is authoritative.

        Raises:
            InvalidAmount: If ``value`` is not a number greater than zero
            OSError: If the backend cannot be written without losing data
        """
        try:
            amount = float(value)
        except (TypeError, ValueError):
            raise InvalidAmount(value) from None
        if not amount > 0 or amount == float('inf'):
            raise InvalidAmount(value)
        target = as_period(period)
        self.repository.put(target, amount)
        logger.debug("Saved salary %.2f for %s", amount, target)

    def resolve(self, period: PeriodLike) -> SalaryResolution:
        """Return the salary for ``period``, carrying forward if needed.

        A saved value is returned unchanged. Otherwise the nearest prior
        period with a salary (at most ``max_lookback`` steps back) supplies
        the value, which is written under ``period`` only if the period is
        still empty.

        Example:
            >>> store = SalaryStore(InMemorySalaryRepository({(2024, 1): 50000}))
            >>> store.resolve((2024, 2)).was_carried_forward
            True
            >>> store.get((2024, 2))
            50000.0
        """
        target = as_period(period)
        current = self.repository.get(target)
        if current is not None:
            return SalaryResolution(target, current)

        candidate = target
        for _ in range(self.max_lookback):
            candidate = candidate.previous()
            prior = self.repository.get(candidate)
            if prior is None:
                continue
            if self.repository.put_if_absent(target, prior):
                logger.info("Carried salary %.2f forward from %s to %s", prior, candidate, target)
                return SalaryResolution(target, prior, True, candidate)
            # Another writer anchored the period first; its value wins.
            return SalaryResolution(target, self.repository.get(target))

        logger.debug("No salary within %d periods before %s", self.max_lookback, target)
        return SalaryResolution(target, None)

    def list_periods(self) -> List[Period]:
        return self.repository.list_periods()

    def all_salaries(self) -> Dict[Period, float]:
        """Every saved salary keyed by period."""
        salaries: Dict[Period, float] = {}
        for period in self.repository.list_periods():
            value = self.repository.get(period)
            if value is not None:
                salaries[period] = value
        return salaries
