"""Base categorizer abstraction.

This module defines the abstract base class for transaction categorizers, enforcing a
standard interface for assigning a category and an income/expense polarity to a description.
"""

from abc import ABC, abstractmethod

from shared_finance.categorization.categories import Category
from shared_finance.core.models import TransactionType


class BaseCategorizer(ABC):
    """Abstract base class for all categorizers."""

    @abstractmethod
    def categorize(self, description: str) -> Category:
        """Return the category of a transaction description."""

    @abstractmethod
    def is_income(self, description: str, amount: float) -> bool:
        """Decide whether a transaction is income from its description and signed amount."""

    def polarity(self, description: str, amount: float) -> TransactionType:
        """Return ``"income"`` or ``"expense"`` for a transaction."""
        return "income" if self.is_income(description, amount) else "expense"
