"""Bank statement CSV parsing.

The first row of the file is the header. ``Date``, ``Description`` and ``Amount`` are looked
up case-insensitively; rows missing any of them are skipped rather than failing the file.
A file that cannot be read as a table at all raises ``ParseError`` and yields nothing.
"""

import io
import math
from collections.abc import Iterator
from pathlib import Path
from typing import IO

import pandas as pd

from shared_finance.core.errors import ParseError
from shared_finance.core.models import RawRecord
from shared_finance.core.utils import get_logger, safe_cast

logger = get_logger("shared-finance.parser")

DATE_FIELD = "date"
DESCRIPTION_FIELD = "description"
AMOUNT_FIELD = "amount"

StatementSource = bytes | str | Path | IO[bytes] | IO[str]


def parse_amount(text: str) -> float:
    """Parse an amount, coercing unparsable or non-finite values to ``0.0``.

    No currency symbols or thousands separators are removed, so ``"$1,200.00"`` is ``0.0``.
    """
    value = safe_cast(text.strip(), float, 0.0)
    return value if math.isfinite(value) else 0.0


def _field(value: object) -> str | None:
    # Whitespace-only cells count as missing; kept values are returned unstripped.
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def _read_frame(source: StatementSource) -> pd.DataFrame:
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    elif isinstance(source, str) and "\n" in source:
        source = io.StringIO(source)
    try:
        return pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as exc:
        msg = f"Could not read statement as CSV: {exc}"
        raise ParseError(msg, source=str(getattr(source, "name", "")) or None) from exc


class StatementParser:
    """Reads a statement eagerly and yields its valid rows lazily, once."""

    def __init__(self, source: StatementSource) -> None:
        """Load the CSV table, raising ``ParseError`` on malformed input."""
        self.frame = _read_frame(source)
        self.columns: dict[str, str] = {}
        for column in self.frame.columns:
            self.columns.setdefault(str(column).strip().lower(), column)
        self.skipped = 0
        self._consumed = False

    def records(self) -> Iterator[RawRecord]:
        """Yield one ``RawRecord`` per row that has a date, a description and an amount."""
        if self._consumed:
            msg = "Statement records can only be iterated once"
            raise RuntimeError(msg)
        self._consumed = True
        return self._iter_records()

    def _iter_records(self) -> Iterator[RawRecord]:
        names = [self.columns.get(name) for name in (DATE_FIELD, DESCRIPTION_FIELD, AMOUNT_FIELD)]
        for row in self.frame.to_dict(orient="records"):
            date, description, amount = (_field(row.get(name)) if name is not None else None for name in names)
            if date is None or description is None or amount is None:
                self.skipped += 1
                continue
            yield RawRecord(date=date, description=description, amount=parse_amount(amount))
        logger.info(f"Parsed {len(self.frame)} rows, skipped {self.skipped}")


def parse_statement(source: StatementSource) -> Iterator[RawRecord]:
    """Parse a statement into a lazy, non-restartable sequence of raw records."""
    return StatementParser(source).records()
