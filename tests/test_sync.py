"""Tests for the sync controller."""

from sqlalchemy.orm import sessionmaker

from shared_finance.core.db import Base, WorkspaceItem
from shared_finance.core.models import Contributor, FinanceSummary, RawRecord
from shared_finance.services.normalizer import normalize_statement
from shared_finance.services.store import TransactionStore
from shared_finance.services.sync import SyncController


def _upload(store: TransactionStore, author: str, rows: list[tuple[str, float]]) -> None:
    records = [RawRecord(date="2024-05-01", description=description, amount=amount) for description, amount in rows]
    store.insert_items(normalize_statement(records, "ws-1", author))


def test_summary_includes_presence_and_viewer(store: TransactionStore) -> None:
    """Connected contributors and the viewer are seeded before transactions are folded in."""
    controller = SyncController(store, presence=lambda _ws: [Contributor(id="bob", display_name="Bob")])
    _upload(store, "alice", [("Starbucks Coffee", -4.5)])
    summary = controller.summary("ws-1", viewer=Contributor(id="carol"))
    if summary is None or set(summary.contributors) != {"bob", "carol", "alice"}:
        msg = f"Unexpected contributors: {summary}"
        raise AssertionError(msg)
    if summary.contributors["alice"].name != "Unknown User" or summary.contributors["carol"].name != "Anonymous":
        msg = f"Unexpected names: {summary.contributors}"
        raise AssertionError(msg)


def test_every_change_republishes_full_summary(store: TransactionStore) -> None:
    """Appends from any contributor trigger a recomputation over the whole workspace."""
    controller = SyncController(store)
    published: list[FinanceSummary | None] = []
    controller.subscribe("ws-1", published.append)
    _upload(store, "alice", [("Amazon order", -20.0)])
    _upload(store, "bob", [("Paycheck", 100.0)])
    if len(published) != 2:  # noqa: PLR2004
        msg = f"Expected two publications, got {len(published)}"
        raise AssertionError(msg)
    latest = published[-1]
    if latest is None or latest.total_balance != 80.0 or latest.monthly_expenses.count != 1:  # noqa: PLR2004
        msg = f"Unexpected latest summary: {latest}"
        raise AssertionError(msg)


def test_unsubscribed_listener_is_not_called(store: TransactionStore) -> None:
    """Unsubscribing detaches the listener from the store."""
    controller = SyncController(store)
    published: list[FinanceSummary | None] = []
    unsubscribe = controller.subscribe("ws-1", published.append)
    unsubscribe()
    _upload(store, "alice", [("Coffee", -3.0)])
    if published:
        msg = "Expected no publication after unsubscribe"
        raise AssertionError(msg)


def test_read_failure_degrades_to_no_data(store: TransactionStore, session_factory: sessionmaker) -> None:
    """An unreadable workspace yields None instead of raising."""
    controller = SyncController(store)
    Base.metadata.drop_all(session_factory.kw["bind"], tables=[WorkspaceItem.__table__])
    if controller.summary("ws-1") is not None:
        msg = "Expected None when transactions cannot be read"
        raise AssertionError(msg)
