"""Workspace aggregation: balance, income and expense totals per contributor.

The summary is always recomputed from the full transaction set; nothing is patched
incrementally. Contributors are seeded from presence so connected users without
transactions still show up with zero totals, and authors who are not connected are
synthesized as ``"Unknown User"``. Colors always come from ``color_for``.
"""

from collections.abc import Iterable

from shared_finance.core.models import AmountCount, Contributor, ContributorSummary, FinanceSummary, Transaction
from shared_finance.services.colors import color_for

ANONYMOUS_NAME = "Anonymous"
UNKNOWN_USER_NAME = "Unknown User"


def seed_contributors(known: Iterable[Contributor]) -> dict[str, ContributorSummary]:
    """Build the contributor map from presence, keeping the first entry per identifier."""
    contributors: dict[str, ContributorSummary] = {}
    for contributor in known:
        if not contributor.id or contributor.id in contributors:
            continue
        contributors[contributor.id] = ContributorSummary(
            name=contributor.display_name or ANONYMOUS_NAME,
            color=color_for(contributor.id),
        )
    return contributors


def resolve_contributor(contributor_id: str, contributors: dict[str, ContributorSummary]) -> ContributorSummary:
    """Return the seeded entry for an identifier, or add an ``Unknown User`` entry for it."""
    entry = contributors.get(contributor_id)
    if entry is None:
        entry = ContributorSummary(name=UNKNOWN_USER_NAME, color=color_for(contributor_id))
        contributors[contributor_id] = entry
    return entry


def aggregate(transactions: Iterable[Transaction], known: Iterable[Contributor] = ()) -> FinanceSummary:
    """Fold transactions into a fresh ``FinanceSummary``; inputs are not mutated."""
    contributors = seed_contributors(known)
    income = AmountCount()
    expenses = AmountCount()
    for transaction in transactions:
        contributor = resolve_contributor(transaction.uploaded_by, contributors)
        if transaction.type == "income":
            income.amount += transaction.amount
            income.count += 1
            contributor.income += transaction.amount
        else:
            expenses.amount += transaction.amount
            expenses.count += 1
            contributor.expenses += transaction.amount
    return FinanceSummary(
        total_balance=income.amount - expenses.amount,
        monthly_income=income,
        monthly_expenses=expenses,
        contributors=contributors,
    )
