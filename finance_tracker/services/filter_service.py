"""Filtering and ordering of transactions for the list view."""

from dataclasses import dataclass
from typing import Iterable

from finance_tracker.models import Transaction

ALL = "all"


@dataclass(frozen=True)
class TransactionFilter:
    """Criteria from the transactions view; ``all`` disables a filter."""

    search: str = ""
    type: str = ALL
    category: str = ALL

    def matches(self, transaction: Transaction) -> bool:
        """Check the search text, type and category criteria together."""
        return (
            self._matches_search(transaction)
            and (self.type == ALL or transaction.type == self.type)
            and (self.category == ALL or transaction.category == self.category)
        )

    def _matches_search(self, transaction: Transaction) -> bool:
        needle = self.search.lower()
        if not needle:
            return True
        if transaction.description and needle in transaction.description.lower():
            return True
        return needle in transaction.category.lower()


def sort_by_date(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Newest date first; equal dates keep their incoming order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: TransactionFilter = TransactionFilter(),
) -> list[Transaction]:
    """
    Apply the list-view criteria and order the result.

    Returns:
        Matching transactions sorted by date descending
    """
    return sort_by_date(t for t in transactions if criteria.matches(t))


def category_options(transactions: Iterable[Transaction]) -> list[str]:
    """Distinct categories of the unfiltered transactions, first-seen order."""
    return list(dict.fromkeys(t.category for t in transactions))
