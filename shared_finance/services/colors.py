"""Deterministic contributor colors and currency display.

There is no identity store, so a contributor's color is derived from the session identifier
alone. The rolling hash reproduces the browser client's arithmetic bit for bit: the
identifier is walked as UTF-16 code units, only the left shift wraps to a signed 32-bit
integer, and the subtraction and addition are carried out without wrapping.
"""

from collections.abc import Sequence

PALETTE: tuple[str, ...] = (
    "#3b82f6",
    "#ef4444",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#06b6d4",
    "#f472b6",
    "#a855f7",
    "#22c55e",
    "#f97316",
)

_UINT32 = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _to_int32(value: int) -> int:
    value &= _UINT32
    return value - (1 << 32) if value & _INT32_SIGN else value


def _utf16_units(text: str) -> list[int]:
    raw = text.encode("utf-16-le")
    return [int.from_bytes(raw[i : i + 2], "little") for i in range(0, len(raw), 2)]


def rolling_hash(identifier: str) -> int:
    """Compute ``hash = unit + ((hash << 5) - hash)`` over the identifier."""
    value = 0
    for unit in _utf16_units(identifier):
        value = unit + (_to_int32(_to_int32(value) << 5) - value)
    return value


def color_for(identifier: str, palette: Sequence[str] = PALETTE) -> str:
    """Return the palette color assigned to an identifier."""
    return palette[abs(rolling_hash(identifier)) % len(palette)]


def format_currency(amount: float) -> str:
    """Format the magnitude of an amount as US dollars, e.g. ``$1,234.50``."""
    return f"${abs(amount):,.2f}"
