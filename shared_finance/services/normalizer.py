"""Turn parsed statement rows into workspace items ready for the store."""

from collections.abc import Iterable

from shared_finance.categorization import BaseCategorizer, KeywordCategorizer
from shared_finance.core.models import RawRecord, TransactionData, WorkspaceItemPayload
from shared_finance.services.colors import color_for


def normalize_record(
    record: RawRecord,
    contributor_id: str,
    categorizer: BaseCategorizer | None = None,
    user_color: str | None = None,
) -> TransactionData:
    """Categorize a raw record and store its amount as a magnitude; polarity carries the sign."""
    categorizer = categorizer or KeywordCategorizer()
    category = categorizer.categorize(record.description)
    return TransactionData(
        date=record.date,
        description=record.description,
        amount=abs(record.amount),
        category=category.name,
        type=categorizer.polarity(record.description, record.amount),
        auto_categorized=True,
        user_color=user_color or color_for(contributor_id),
    )


def build_workspace_item(workspace_id: str, contributor_id: str, data: TransactionData) -> WorkspaceItemPayload:
    """Wrap normalized transaction data in the persisted workspace item shape."""
    return WorkspaceItemPayload(
        workspace_id=workspace_id,
        uploaded_by=contributor_id,
        transaction_data=data,
        content={"summary": f"{data.type} - {data.description}"},
    )


def normalize_statement(
    records: Iterable[RawRecord],
    workspace_id: str,
    contributor_id: str,
    categorizer: BaseCategorizer | None = None,
) -> list[WorkspaceItemPayload]:
    """Normalize every record of a statement, preserving input order."""
    categorizer = categorizer or KeywordCategorizer()
    user_color = color_for(contributor_id)
    return [
        build_workspace_item(
            workspace_id, contributor_id, normalize_record(record, contributor_id, categorizer, user_color)
        )
        for record in records
    ]
