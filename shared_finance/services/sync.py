"""Sync controller: recompute and republish workspace summaries on every store change.

Notifications carry no payload. Each one triggers a full re-read of the workspace and a
fresh aggregation, so a missed notification is corrected by the next one. Read failures
degrade to "no data" (``None``) instead of propagating to the summary view.
"""

from collections.abc import Callable, Iterable

from shared_finance.core.errors import AggregationError
from shared_finance.core.models import Contributor, FinanceSummary
from shared_finance.core.utils import get_logger
from shared_finance.services.aggregator import aggregate
from shared_finance.services.store import TransactionStore

logger = get_logger("shared-finance.sync")

PresenceSource = Callable[[str], Iterable[Contributor]]
SummaryListener = Callable[[FinanceSummary | None], None]


def no_presence(workspace_id: str) -> list[Contributor]:
    """Presence source used when no presence tracker is wired in."""
    _ = workspace_id
    return []


class SyncController:
    """Bridges store change notifications to summary listeners."""

    def __init__(self, store: TransactionStore, presence: PresenceSource | None = None) -> None:
        """Initialize the controller with a store and an optional presence source."""
        self.store = store
        self.presence = presence or no_presence

    def known_contributors(self, workspace_id: str, viewer: Contributor | None = None) -> list[Contributor]:
        """Connected contributors followed by the viewing session, if any."""
        known = list(self.presence(workspace_id))
        if viewer is not None:
            known.append(viewer)
        return known

    def summary(self, workspace_id: str, viewer: Contributor | None = None) -> FinanceSummary | None:
        """Aggregate the current transaction set, or return ``None`` when it cannot be read."""
        try:
            transactions = self.store.list_transactions(workspace_id)
        except AggregationError:
            logger.exception(f"Could not load transactions for workspace {workspace_id}; reporting no data")
            return None
        return aggregate(transactions, self.known_contributors(workspace_id, viewer))

    def subscribe(
        self,
        workspace_id: str,
        listener: SummaryListener,
        viewer: Contributor | None = None,
    ) -> Callable[[], None]:
        """Publish a freshly computed summary to ``listener`` after every change."""

        def on_change() -> None:
            listener(self.summary(workspace_id, viewer))

        logger.info(f"Subscribed summary listener to workspace {workspace_id}")
        return self.store.subscribe(workspace_id, on_change)
