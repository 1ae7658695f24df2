"""Unit tests for the keyword categorizer and the category table."""

import pytest

from shared_finance.categorization import (
    DEFAULT_CATEGORY_TABLE,
    Category,
    CategoryTable,
    KeywordCategorizer,
    categorize,
    is_income,
)


def _table(*categories: Category) -> CategoryTable:
    return CategoryTable(categories)


FALLBACK = Category(name="Misc", keywords=(), color="#000000", glyph="?")


def test_starbucks_is_food_and_dining() -> None:
    """A coffee purchase lands in Food & Dining."""
    category = categorize("Starbucks Coffee")
    if category.name != "Food & Dining":
        msg = f"Expected 'Food & Dining', got {category.name!r}"
        raise AssertionError(msg)


def test_payroll_deposit_is_income() -> None:
    """A payroll deposit lands in Income."""
    category = categorize("Direct Deposit Payroll")
    if category.name != "Income":
        msg = f"Expected 'Income', got {category.name!r}"
        raise AssertionError(msg)


def test_matching_is_case_insensitive() -> None:
    """Upper-case descriptions match lower-case keywords."""
    category = categorize("NETFLIX.COM MONTHLY")
    if category.name != "Entertainment":
        msg = f"Expected 'Entertainment', got {category.name!r}"
        raise AssertionError(msg)


@pytest.mark.parametrize("description", ["", "zzqx 0042", "Wire to J. Smith"])
def test_unmatched_description_falls_back_to_other(description: str) -> None:
    """Descriptions without any keyword get the fallback category."""
    category = categorize(description)
    if category.name != "Other":
        msg = f"Expected 'Other' for {description!r}, got {category.name!r}"
        raise AssertionError(msg)


def test_earlier_category_wins_on_shared_keyword() -> None:
    """'target' is listed under Food & Dining and Shopping; the earlier category wins."""
    category = categorize("TARGET T-1234")
    if category.name != "Food & Dining":
        msg = f"Expected 'Food & Dining', got {category.name!r}"
        raise AssertionError(msg)


def test_gas_bill_matches_transportation_first() -> None:
    """'gas' in Transportation is scanned before 'gas bill' in Bills & Utilities."""
    category = categorize("City gas bill")
    if category.name != "Transportation":
        msg = f"Expected 'Transportation', got {category.name!r}"
        raise AssertionError(msg)


def test_priority_ignores_keyword_position_within_category() -> None:
    """Category order decides, not where the keyword sits in its own list."""
    first = Category(name="First", keywords=("zeta", "alpha"), color="#111111", glyph="1")
    second = Category(name="Second", keywords=("alpha",), color="#222222", glyph="2")
    categorizer = KeywordCategorizer(_table(first, second, FALLBACK))
    category = categorizer.categorize("alpha and omega")
    if category.name != "First":
        msg = f"Expected 'First', got {category.name!r}"
        raise AssertionError(msg)


def test_fallback_is_never_matched_by_scan() -> None:
    """The fallback is excluded from the scan even when it appears first in the table."""
    other = Category(name="Food", keywords=("bread",), color="#111111", glyph="b")
    categorizer = KeywordCategorizer(_table(FALLBACK, other))
    if categorizer.categorize("fresh bread").name != "Food":
        msg = "Expected the keyword category to win over a leading fallback"
        raise AssertionError(msg)
    if categorizer.categorize("nothing here") is not FALLBACK:
        msg = "Expected the fallback category when nothing matches"
        raise AssertionError(msg)


def test_categorize_is_deterministic() -> None:
    """Repeated calls return the same category object."""
    results = {categorize("Uber trip downtown").name for _ in range(25)}
    if results != {"Transportation"}:
        msg = f"Expected a single stable result, got {results}"
        raise AssertionError(msg)


def test_positive_amount_is_always_income() -> None:
    """The sign wins over the description when the amount is positive."""
    if not is_income("Starbucks Coffee", 4.5):
        msg = "Expected a positive amount to be income"
        raise AssertionError(msg)


@pytest.mark.parametrize(
    ("description", "amount", "expected"),
    [
        ("Amazon refund", -12.0, True),
        ("PAYROLL DIRECT DEPOSIT", -2500.0, True),
        ("Starbucks Coffee", -4.5, False),
        ("Starbucks Coffee", 0.0, False),
        ("Interest paid", 0.0, True),
    ],
)
def test_non_positive_amount_needs_income_keyword(
    description: str,
    amount: float,
    expected: bool,  # noqa: FBT001
) -> None:
    """For amounts <= 0, only an Income keyword makes the transaction income."""
    result = is_income(description, amount)
    if result is not expected:
        msg = f"is_income({description!r}, {amount}) returned {result}, expected {expected}"
        raise AssertionError(msg)


def test_polarity_labels() -> None:
    """Polarity is the string form of the income decision."""
    categorizer = KeywordCategorizer()
    if categorizer.polarity("Salary March", -1.0) != "income":
        msg = "Expected 'income' polarity for a salary keyword"
        raise AssertionError(msg)
    if categorizer.polarity("Shell Oil 5531", -40.0) != "expense":
        msg = "Expected 'expense' polarity for a fuel purchase"
        raise AssertionError(msg)


def test_table_without_income_category_has_no_income_keywords() -> None:
    """A custom table lacking an Income category only uses the sign."""
    pay = Category(name="Pay", keywords=("salary",), color="#1", glyph="$")
    categorizer = KeywordCategorizer(_table(pay, FALLBACK))
    if categorizer.is_income("salary", -100.0):
        msg = "Expected no keyword-based income without an Income category"
        raise AssertionError(msg)


def test_table_rejects_multiple_fallbacks() -> None:
    """Exactly one keyword-less category is allowed."""
    second_fallback = Category(name="Also Misc", keywords=(), color="#ffffff", glyph="!")
    with pytest.raises(ValueError, match="exactly one"):
        _table(FALLBACK, second_fallback)


def test_table_rejects_duplicate_names() -> None:
    """Category names are unique."""
    food = Category(name="Food", keywords=("bread",), color="#111111", glyph="b")
    with pytest.raises(ValueError, match="unique"):
        _table(food, food, FALLBACK)


def test_default_table_order_and_lookup() -> None:
    """The default table keeps the reference order and resolves unknown names to the fallback."""
    names = [category.name for category in DEFAULT_CATEGORY_TABLE]
    if names[0] != "Food & Dining" or names[-1] != "Other" or len(names) != 10:  # noqa: PLR2004
        msg = f"Unexpected default category order: {names}"
        raise AssertionError(msg)
    if DEFAULT_CATEGORY_TABLE.get("Nope").name != "Other":
        msg = "Expected unknown category names to resolve to 'Other'"
        raise AssertionError(msg)
    if DEFAULT_CATEGORY_TABLE.get("Healthcare").glyph != "🏥":
        msg = "Expected Healthcare glyph lookup to succeed"
        raise AssertionError(msg)
