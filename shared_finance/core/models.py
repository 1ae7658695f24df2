"""Pydantic models for Shared Finance.

This module defines the records that flow through the pipeline: the transient ``RawRecord``
produced by the parser, the ``TransactionData`` payload written to the store, the persisted
``Transaction``, the presence-derived ``Contributor``, and the ``FinanceSummary`` returned by
the aggregator. It also holds the ``JobStatus`` model used to report background uploads.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TransactionType = Literal["income", "expense"]
TRANSACTION_ITEM_TYPE = "transaction"


class RawRecord(BaseModel):
    """Pydantic model representing one parsed statement row before categorization."""

    model_config = ConfigDict(frozen=True)

    date: str
    description: str
    amount: float


class TransactionData(BaseModel):
    """Normalized transaction fields as stored under ``transaction_data``."""

    date: str
    description: str
    amount: float = Field(ge=0)
    category: str
    type: TransactionType
    auto_categorized: bool = True
    user_color: str


class WorkspaceItemPayload(BaseModel):
    """Shape of one workspace item written to the store."""

    workspace_id: str
    item_type: str = TRANSACTION_ITEM_TYPE
    uploaded_by: str
    transaction_data: TransactionData
    content: dict[str, str]


class Transaction(BaseModel):
    """Pydantic model representing a persisted transaction as read back from the store."""

    model_config = ConfigDict(frozen=True)

    id: int
    workspace_id: str
    date: str
    description: str
    amount: float = Field(ge=0)
    category: str
    type: TransactionType
    uploaded_by: str
    user_color: str | None = None
    created_at: str


class Contributor(BaseModel):
    """A session known from presence: an identifier and an optional display name."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str | None = None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContributorSummary(_CamelModel):
    """Per-contributor slice of the summary."""

    name: str
    color: str
    income: float = 0.0
    expenses: float = 0.0


class AmountCount(_CamelModel):
    """A running total together with the number of transactions behind it."""

    amount: float = 0.0
    count: int = 0


class FinanceSummary(_CamelModel):
    """Workspace-wide balance, income and expense totals, broken down per contributor."""

    total_balance: float
    monthly_income: AmountCount
    monthly_expenses: AmountCount
    contributors: dict[str, ContributorSummary]


class PreviewResponse(BaseModel):
    """Parsed and categorized records echoed back before anything is stored."""

    count: int
    skipped: int
    transactions: list[TransactionData]


class UploadAccepted(BaseModel):
    """Response returned when a background upload job has been scheduled."""

    job_id: str
    total: int
    skipped: int


class JobStatus(BaseModel):
    """Pydantic model representing the status of an upload job."""

    status: str
    workspace_id: str
    uploaded_by: str
    total: int
    uploaded: int
    progress: float
    created_at: str
    completed_at: str | None = None
    error: str | None = None
