"""Reporting periods and the clock that supplies the current one.

A period is a calendar ``(year, month)`` pair. Periods order by calendar
time, hash as map keys, and serialise to ``"YYYY-MM"`` for storage.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import NamedTuple, Protocol, Tuple, Union

import pandas as pd


class Period(NamedTuple):
    """One billing/reporting month."""

    year: int
    month: int

    @property
    def key(self) -> str:
        """Storage key, e.g. ``'2024-01'``."""
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def label(self) -> str:
        """Display label, e.g. ``'January 2024'``."""
        return f"{calendar.month_name[self.month]} {self.year}"

    @classmethod
    def parse(cls, key: str) -> "Period":
        """Parse a ``YYYY-MM`` storage key.

        Raises:
            ValueError: If the key is not a valid year-month string
        """
        year_text, _, month_text = str(key).strip().partition("-")
        year, month = int(year_text), int(month_text)
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month in period key {key!r}")
        return cls(year, month)

    def previous(self) -> "Period":
        return previous_period(self.year, self.month)

    def next(self) -> "Period":
        return next_period(self.year, self.month)

    def __str__(self) -> str:
        return self.key


def period_key(year: int, month: int) -> Period:
    """Map a calendar (year, month) to its period."""
    return Period(int(year), int(month))


def previous_period(year: int, month: int) -> Period:
    """Return the period before (year, month), wrapping January to December."""
    if month == 1:
        return Period(year - 1, 12)
    return Period(year, month - 1)


def next_period(year: int, month: int) -> Period:
    if month == 12:
        return Period(year + 1, 1)
    return Period(year, month + 1)


PeriodLike = Union[Period, Tuple[int, int], str]


def as_period(value: PeriodLike) -> Period:
    """Coerce a ``Period``, ``(year, month)`` tuple or ``YYYY-MM`` key."""
    if isinstance(value, Period):
        return value
    if isinstance(value, str):
        return Period.parse(value)
    year, month = value
    return Period(int(year), int(month))


def period_of(timestamp: Union[datetime, date, pd.Timestamp, str]) -> Period:
    """Return the period a timestamp falls in.

    Example:
        >>> period_of("2024-01-31T23:00:00Z")
        Period(year=2024, month=1)
    """
    ts = pd.Timestamp(timestamp)
    return Period(int(ts.year), int(ts.month))


class Clock(Protocol):
    """Source of "today" for period resolution."""

    def today(self) -> date:
        ...

    def current_period(self) -> Period:
        ...


class SystemClock:
    """Clock backed by the local wall clock."""

    def today(self) -> date:
        return date.today()

    def current_period(self) -> Period:
        today = self.today()
        return Period(today.year, today.month)


class FixedClock:
    """Clock pinned to a given date, for tests and replays."""

    def __init__(self, year: int, month: int, day: int = 1):
        self._today = date(year, month, day)

    def today(self) -> date:
        return self._today

    def current_period(self) -> Period:
        return Period(self._today.year, self._today.month)
