"""Category table used by the keyword categorizer.

Categories are static configuration. The order of ``DEFAULT_CATEGORIES`` is the match
priority: when a description contains keywords of several categories, the one listed first
wins. The single category without keywords is the fallback and is never matched by a scan.
"""

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict


class Category(BaseModel):
    """An immutable spending category with its lowercase keyword substrings."""

    model_config = ConfigDict(frozen=True)

    name: str
    keywords: tuple[str, ...] = ()
    color: str
    glyph: str


class CategoryTable:
    """Ordered, validated set of categories injected into a categorizer."""

    def __init__(self, categories: Iterable[Category], income_category: str = "Income") -> None:
        """Validate the categories and index them by name."""
        self.categories: tuple[Category, ...] = tuple(categories)
        names = [category.name for category in self.categories]
        if len(set(names)) != len(names):
            msg = f"Category names must be unique: {names}"
            raise ValueError(msg)
        fallbacks = [category for category in self.categories if not category.keywords]
        if len(fallbacks) != 1:
            msg = f"Expected exactly one category without keywords, found {len(fallbacks)}"
            raise ValueError(msg)
        self.fallback = fallbacks[0]
        self.scan_order: tuple[Category, ...] = tuple(c for c in self.categories if c is not self.fallback)
        self._by_name = {category.name: category for category in self.categories}
        income = self._by_name.get(income_category)
        self.income_keywords: tuple[str, ...] = tuple(k.lower() for k in income.keywords) if income else ()

    def get(self, name: str) -> Category:
        """Look up a category by name, returning the fallback for unknown names."""
        return self._by_name.get(name, self.fallback)

    def __iter__(self) -> Iterator[Category]:
        """Iterate categories in priority order."""
        return iter(self.categories)

    def __len__(self) -> int:
        """Return the number of categories, fallback included."""
        return len(self.categories)


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(
        name="Food & Dining",
        keywords=(
            "restaurant", "cafe", "coffee", "starbucks", "mcdonald", "kfc", "pizza",
            "grocery", "supermarket", "food", "dining", "lunch", "dinner", "breakfast",
            "dominos", "subway", "burger", "taco", "chipotle", "wendy", "dunkin",
            "walmart", "target", "kroger", "safeway", "whole foods", "trader joe",
        ),
        color="#ef4444",
        glyph="🍽️",
    ),
    Category(
        name="Transportation",
        keywords=(
            "gas", "fuel", "shell", "exxon", "bp", "chevron", "uber", "lyft",
            "taxi", "metro", "bus", "train", "parking", "toll", "car wash",
            "vehicle", "automotive", "repair", "maintenance", "insurance",
            "dmv", "registration", "license",
        ),
        color="#3b82f6",
        glyph="🚗",
    ),
    Category(
        name="Entertainment",
        keywords=(
            "netflix", "spotify", "apple music", "hulu", "disney", "amazon prime",
            "movie", "cinema", "theater", "concert", "ticket", "event", "game",
            "steam", "playstation", "xbox", "nintendo", "entertainment", "streaming",
            "cable", "satellite", "youtube", "twitch",
        ),
        color="#8b5cf6",
        glyph="🎬",
    ),
    Category(
        name="Bills & Utilities",
        keywords=(
            "electric", "electricity", "gas bill", "water", "sewer", "internet",
            "phone", "mobile", "verizon", "att", "sprint", "tmobile", "comcast",
            "utility", "bill", "insurance", "rent", "mortgage", "loan", "credit card",
            "payment", "bank fee", "overdraft",
        ),
        color="#f59e0b",
        glyph="🧾",
    ),
    Category(
        name="Shopping",
        keywords=(
            "amazon", "target", "walmart", "costco", "home depot", "lowes", "best buy",
            "apple store", "clothing", "shoes", "electronics", "furniture", "decor",
            "shopping", "retail", "store", "mall", "outlet", "online", "ebay",
            "etsy", "shopify",
        ),
        color="#10b981",
        glyph="🛍️",
    ),
    Category(
        name="Healthcare",
        keywords=(
            "pharmacy", "cvs", "walgreens", "rite aid", "doctor", "hospital",
            "medical", "dental", "dentist", "clinic", "health", "prescription",
            "medicine", "treatment", "therapy", "specialist", "urgent care",
            "emergency", "lab", "x-ray", "mri",
        ),
        color="#06b6d4",
        glyph="🏥",
    ),
    Category(
        name="Income",
        keywords=(
            "salary", "paycheck", "deposit", "direct deposit", "income", "wage",
            "freelance", "consulting", "contract", "bonus", "commission", "refund",
            "reimbursement", "cashback", "dividend", "interest", "transfer in",
            "payment received",
        ),
        color="#22c55e",
        glyph="💰",
    ),
    Category(
        name="Personal Care",
        keywords=(
            "salon", "barbershop", "spa", "massage", "beauty", "cosmetics", "skincare",
            "haircut", "manicure", "pedicure", "gym", "fitness", "yoga", "pilates",
            "personal trainer", "subscription", "membership",
        ),
        color="#f472b6",
        glyph="💅",
    ),
    Category(
        name="Education",
        keywords=(
            "school", "university", "college", "tuition", "books", "education",
            "course", "training", "certification", "workshop", "seminar", "learning",
            "udemy", "coursera", "masterclass",
        ),
        color="#a855f7",
        glyph="📚",
    ),
    Category(name="Other", keywords=(), color="#6b7280", glyph="📝"),
)

DEFAULT_CATEGORY_TABLE = CategoryTable(DEFAULT_CATEGORIES)
