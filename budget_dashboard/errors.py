"""Error types and boundary validation results.

Aggregation never raises for well-typed input. Invalid user-entered amounts
are rejected before they reach the engine, either by ``InvalidAmount`` from
the salary store or by a ``ValidationResult`` returned to the form layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class BudgetError(Exception):
    """Base class for budget dashboard errors."""


class InvalidAmount(BudgetError, ValueError):
    """A salary or expense amount that is missing, non-numeric or not positive."""

    def __init__(self, value: object, message: Optional[str] = None):
        self.value = value
        super().__init__(message or f"Invalid amount: {value!r} (must be greater than 0)")


@dataclass(frozen=True)
class TaxonomyMismatch:
    """An expense whose (category, subcategory) pair is not in the taxonomy."""

    expense_id: str
    category: str
    subcategory: str

    def describe(self) -> str:
        return (
            f"expense {self.expense_id!r}: subcategory {self.subcategory!r} "
            f"is not listed under category {self.category!r}"
        )


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating user input at the form boundary."""

    ok: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, message: str = "") -> "ValidationResult":
        return cls(True, message)

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(False, message)
