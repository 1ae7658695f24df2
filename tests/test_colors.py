"""Unit tests for contributor colors and currency formatting.

Reference values were produced by the browser client's ``getUserColor`` for the same inputs.
"""

import pytest

from shared_finance.services.colors import PALETTE, color_for, format_currency, rolling_hash


@pytest.mark.parametrize(
    ("identifier", "expected_hash", "expected_color"),
    [
        ("alice", 92903040, "#3b82f6"),
        ("bob", 97717, "#a855f7"),
        ("", 0, "#3b82f6"),
        ("a", 97, "#a855f7"),
        ("session-7f3a9c2e-1b4d-4e8a-9f00-123456789abc", -15267515126, "#f472b6"),
        ("z" * 40, 1577242880, "#3b82f6"),
        ("user_😀", -145363369, "#f97316"),
    ],
)
def test_matches_reference_client(identifier: str, expected_hash: int, expected_color: str) -> None:
    """Hash and palette index agree with the reference implementation, including non-BMP text."""
    if rolling_hash(identifier) != expected_hash:
        msg = f"rolling_hash({identifier!r}) = {rolling_hash(identifier)}, expected {expected_hash}"
        raise AssertionError(msg)
    if color_for(identifier) != expected_color:
        msg = f"color_for({identifier!r}) = {color_for(identifier)}, expected {expected_color}"
        raise AssertionError(msg)


def test_color_is_stable_and_from_palette() -> None:
    """Repeated calls agree and always pick a palette entry."""
    for identifier in ("x", "session-1", "another session"):
        colors = {color_for(identifier) for _ in range(10)}
        if len(colors) != 1 or colors.pop() not in PALETTE:
            msg = f"Unstable or unknown color for {identifier!r}"
            raise AssertionError(msg)


def test_custom_palette() -> None:
    """The palette can be swapped; indexing uses its own length."""
    palette = ("red", "green", "blue")
    if color_for("bob", palette) != palette[97717 % 3]:
        msg = "Expected the index to be taken modulo the custom palette length"
        raise AssertionError(msg)


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(1234.5, "$1,234.50"), (-4.5, "$4.50"), (0, "$0.00"), (1000000, "$1,000,000.00")],
)
def test_format_currency(amount: float, expected: str) -> None:
    """Magnitudes render as US dollars with two decimals."""
    if format_currency(amount) != expected:
        msg = f"format_currency({amount}) = {format_currency(amount)!r}, expected {expected!r}"
        raise AssertionError(msg)
