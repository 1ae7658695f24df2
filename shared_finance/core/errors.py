"""Exception hierarchy for the ingestion, storage and aggregation pipeline.

Only structural failures are errors here. Rows with missing fields are skipped by the
parser, and categorization always falls back to a value, so neither raises.
"""


class FinanceEngineError(Exception):
    """Base class for all Shared Finance errors."""


class ParseError(FinanceEngineError):
    """Raised when an uploaded statement cannot be read as a CSV table."""

    def __init__(self, message: str, source: str | None = None) -> None:
        """Initialize the error with a message and an optional source label."""
        self.source = source
        super().__init__(message)


class StoreWriteError(FinanceEngineError):
    """Raised when a chunk of workspace items could not be written.

    ``uploaded`` counts the records durably persisted before the failing chunk. Earlier
    chunks are never rolled back, so a retry should resume from that offset.
    """

    def __init__(self, message: str, uploaded: int = 0, total: int = 0) -> None:
        """Initialize the error with the durable prefix length and the batch size."""
        self.uploaded = uploaded
        self.total = total
        super().__init__(message)


class AggregationError(FinanceEngineError):
    """Raised when the transaction set of a workspace cannot be read."""

    def __init__(self, message: str, workspace_id: str | None = None) -> None:
        """Initialize the error with the workspace that failed to load."""
        self.workspace_id = workspace_id
        super().__init__(message)
