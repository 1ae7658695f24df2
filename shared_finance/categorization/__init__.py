"""Categorization package: category table, categorizer interface, and keyword categorizer."""

from .base import BaseCategorizer  # noqa: F401
from .categories import DEFAULT_CATEGORY_TABLE, Category, CategoryTable  # noqa: F401
from .categorizer import KeywordCategorizer, categorize, is_income  # noqa: F401
