"""Expense category taxonomy.

The taxonomy is static reference data: an ordered list of categories, each
with an ordered list of subcategories. A subcategory name may appear under
more than one category ("Transportation" is both a fixed and a variable
expense), so membership is always checked on the (category, subcategory)
pair rather than on the subcategory name alone.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

FIXED_EXPENSES = 'Fixed Expenses'
VARIABLE_EXPENSES = 'Variable Expenses'
PERIODIC_EXPENSES = 'Periodic and Occasional Expenses'

EXPENSE_CATEGORIES: Dict[str, List[str]] = {
    FIXED_EXPENSES: [
        'Housing',
        'Transportation',
        'Insurance',
        'Debt payments',
        'Childcare and education',
        'Subscriptions and memberships',
    ],
    VARIABLE_EXPENSES: [
        'Food',
        'Utilities',
        'Transportation',
        'Household supplies',
        'Personal care',
        'Entertainment',
        'Clothing',
        'Pet care',
    ],
    PERIODIC_EXPENSES: [
        'Home maintenance and repairs',
        'Medical and dental',
        'Gifts and donations',
        'Travel and vacations',
        'Annual and seasonal expenses',
        'Large purchases',
    ],
}


class CategoryTaxonomy:
    """Read-only category → subcategories table."""

    def __init__(self, categories: Mapping[str, Sequence[str]]):
        self._categories: Dict[str, Tuple[str, ...]] = {
            str(name): tuple(str(sub) for sub in subs)
            for name, subs in categories.items()
        }
        self._pairs = frozenset(
            (name, sub) for name, subs in self._categories.items() for sub in subs
        )

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    def subcategories(self, category: str) -> Tuple[str, ...]:
        """Return the subcategories of ``category`` (empty if unknown)."""
        return self._categories.get(category, ())

    def pairs(self) -> List[Tuple[str, str]]:
        """All (category, subcategory) pairs in display order."""
        return [(name, sub) for name, subs in self._categories.items() for sub in subs]

    def contains(self, category: Optional[str], subcategory: Optional[str]) -> bool:
        return (category, subcategory) in self._pairs

    def categories_for(self, subcategory: str) -> List[str]:
        """Every category listing ``subcategory``.

        Example:
            >>> DEFAULT_TAXONOMY.categories_for('Transportation')
            ['Fixed Expenses', 'Variable Expenses']
        """
        return [name for name, subs in self._categories.items() if subcategory in subs]

    def infer_category(self, subcategory: Optional[str]) -> Optional[str]:
        """Return the single category owning ``subcategory``.

        Returns ``None`` when the subcategory is unknown or listed under
        more than one category.
        """
        if not subcategory:
            return None
        owners = self.categories_for(subcategory)
        return owners[0] if len(owners) == 1 else None

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, category: object) -> bool:
        return category in self._categories

    def __repr__(self) -> str:
        return f"CategoryTaxonomy({list(self._categories)!r})"


DEFAULT_TAXONOMY = CategoryTaxonomy(EXPENSE_CATEGORIES)
