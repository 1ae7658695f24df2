"""Tabular views over stored transactions: recent listing and CSV export."""

from collections.abc import Sequence

import pandas as pd

from shared_finance.core.models import Transaction

EXPORT_COLUMNS = ["date", "description", "amount", "category", "type", "uploaded_by"]


def sort_recent(transactions: Sequence[Transaction], limit: int | None = None) -> list[Transaction]:
    """Sort by statement date, newest first; dates that do not parse go last in store order."""
    if not transactions:
        return []
    frame = pd.DataFrame({"position": range(len(transactions)), "date": [t.date for t in transactions]})
    frame["parsed"] = pd.to_datetime(frame["date"], errors="coerce", format="mixed")
    frame = frame.sort_values("parsed", ascending=False, na_position="last", kind="stable")
    ordered = [transactions[position] for position in frame["position"]]
    return ordered if limit is None else ordered[:limit]


def export_csv(transactions: Sequence[Transaction]) -> str:
    """Render transactions as CSV text with a fixed column order."""
    frame = pd.DataFrame([t.model_dump(include=set(EXPORT_COLUMNS)) for t in transactions], columns=EXPORT_COLUMNS)
    return frame.to_csv(index=False)
