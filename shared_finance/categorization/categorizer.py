"""Keyword categorizer: substring matching against an ordered category table.

Matching is case-insensitive and deterministic. Categories are scanned in table order and
the first category with any keyword contained in the description wins, regardless of where
that keyword sits in its own list. Nothing here raises: unmatched descriptions get the
fallback category and non-positive amounts without an income keyword are expenses.
"""

from shared_finance.categorization.base import BaseCategorizer
from shared_finance.categorization.categories import DEFAULT_CATEGORY_TABLE, Category, CategoryTable


class KeywordCategorizer(BaseCategorizer):
    """Categorizer backed by an injected, read-only ``CategoryTable``."""

    def __init__(self, table: CategoryTable = DEFAULT_CATEGORY_TABLE) -> None:
        """Initialize the categorizer with a category table."""
        self.table = table

    def categorize(self, description: str) -> Category:
        """Return the first category in table order with a keyword inside the description."""
        text = description.lower()
        for category in self.table.scan_order:
            if any(keyword.lower() in text for keyword in category.keywords):
                return category
        return self.table.fallback

    def is_income(self, description: str, amount: float) -> bool:
        """Positive amounts are income; otherwise only an income keyword makes it income."""
        if amount > 0:
            return True
        text = description.lower()
        return any(keyword in text for keyword in self.table.income_keywords)


_default = KeywordCategorizer()


def categorize(description: str, table: CategoryTable | None = None) -> Category:
    """Categorize a description with the given table, or the default one."""
    categorizer = _default if table is None else KeywordCategorizer(table)
    return categorizer.categorize(description)


def is_income(description: str, amount: float, table: CategoryTable | None = None) -> bool:
    """Decide income polarity with the given table, or the default one."""
    categorizer = _default if table is None else KeywordCategorizer(table)
    return categorizer.is_income(description, amount)
