"""SQLAlchemy-backed workspace item store with change notification.

The store is append-only from the engine's point of view. Each ``insert_items`` call is one
commit, so a failed call leaves earlier calls durable. After a commit that appended
transaction items, every subscriber of the affected workspace is called with no arguments;
subscribers are expected to re-read the whole workspace.
"""

import threading
from collections import defaultdict
from collections.abc import Callable, Sequence

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from shared_finance.core.db import WorkspaceItem
from shared_finance.core.errors import AggregationError, StoreWriteError
from shared_finance.core.models import TRANSACTION_ITEM_TYPE, Transaction, WorkspaceItemPayload
from shared_finance.core.utils import get_logger, utcnow_iso

logger = get_logger("shared-finance.store")

ChangeCallback = Callable[[], None]


class TransactionStore:
    """Workspace item persistence plus per-workspace change subscriptions."""

    def __init__(self, session_factory: sessionmaker) -> None:
        """Initialize the store with a SQLAlchemy session factory."""
        self.session_factory = session_factory
        self._subscribers: dict[str, list[ChangeCallback]] = defaultdict(list)
        self._lock = threading.Lock()

    def insert_items(self, items: Sequence[WorkspaceItemPayload]) -> list[int]:
        """Append items in a single commit and return their store-assigned identifiers."""
        if not items:
            return []
        created_at = utcnow_iso()
        rows = [
            WorkspaceItem(
                workspace_id=item.workspace_id,
                item_type=item.item_type,
                uploaded_by=item.uploaded_by,
                transaction_data=item.transaction_data.model_dump(),
                content=item.content,
                created_at=created_at,
            )
            for item in items
        ]
        session = self.session_factory()
        try:
            session.add_all(rows)
            session.commit()
            ids = [row.id for row in rows]
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception(f"Failed to write {len(rows)} workspace items")
            msg = f"Failed to write {len(rows)} workspace items: {exc}"
            raise StoreWriteError(msg) from exc
        finally:
            session.close()
        changed = {item.workspace_id for item in items if item.item_type == TRANSACTION_ITEM_TYPE}
        for workspace_id in sorted(changed):
            self.notify(workspace_id)
        return ids

    def list_transactions(self, workspace_id: str) -> list[Transaction]:
        """Return all transactions of a workspace, newest first."""
        stmt = (
            select(WorkspaceItem)
            .where(WorkspaceItem.workspace_id == workspace_id)
            .where(WorkspaceItem.item_type == TRANSACTION_ITEM_TYPE)
            .order_by(WorkspaceItem.created_at.desc(), WorkspaceItem.id.desc())
        )
        try:
            with self.session_factory() as session:
                rows = session.execute(stmt).scalars().all()
                return [_to_transaction(row) for row in rows]
        except (SQLAlchemyError, ValidationError) as exc:
            msg = f"Failed to read transactions for workspace {workspace_id}: {exc}"
            raise AggregationError(msg, workspace_id=workspace_id) from exc

    def subscribe(self, workspace_id: str, callback: ChangeCallback) -> Callable[[], None]:
        """Call ``callback`` after every transaction insert into the workspace."""
        with self._lock:
            self._subscribers[workspace_id].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(workspace_id, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    def notify(self, workspace_id: str) -> None:
        """Invoke the change callbacks of a workspace; a failing callback does not stop the rest."""
        with self._lock:
            callbacks = list(self._subscribers.get(workspace_id, []))
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception(f"Change subscriber failed for workspace {workspace_id}")


def _to_transaction(row: WorkspaceItem) -> Transaction:
    data = row.transaction_data or {}
    return Transaction(
        id=row.id,
        workspace_id=row.workspace_id,
        date=data.get("date", ""),
        description=data.get("description", ""),
        amount=data.get("amount", 0.0),
        category=data.get("category", ""),
        type=data.get("type", "expense"),
        uploaded_by=row.uploaded_by,
        user_color=data.get("user_color"),
        created_at=row.created_at,
    )
