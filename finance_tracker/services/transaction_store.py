"""In-memory transaction store for the signed-in session."""

import logging
from typing import Iterable, Iterator, Optional

from finance_tracker.models import Transaction

logger = logging.getLogger(__name__)


class TransactionStore:
    """Ordered collection of the session's transactions.

    Insertion order is kept for storage only; every view re-derives its own
    presentation order. Ids are unique within the store.
    """

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._transactions: list[Transaction] = []
        # Bumped on clear; results of remote calls started in an older
        # generation must not be applied
        self.generation = 0
        if transactions is not None:
            self.replace(transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def __contains__(self, transaction_id: object) -> bool:
        return any(t.id == transaction_id for t in self._transactions)

    @property
    def transactions(self) -> list[Transaction]:
        """Snapshot of the current contents in store order."""
        return list(self._transactions)

    def replace(self, transactions: Iterable[Transaction]) -> None:
        """Replace all contents, keeping the first occurrence of each id."""
        seen: set[str] = set()
        contents = []
        for txn in transactions:
            if txn.id in seen:
                logger.warning("Dropping duplicate transaction id %s", txn.id)
                continue
            seen.add(txn.id)
            contents.append(txn)
        self._transactions = contents

    def insert(self, transaction: Transaction) -> None:
        """Insert a transaction at the head of the store."""
        if transaction.id in self:
            raise ValueError(f"Transaction {transaction.id} is already stored")
        self._transactions.insert(0, transaction)

    def remove(self, transaction_id: str) -> bool:
        """
        Remove the transaction with the given id.

        Returns:
            True if removed, False if no transaction had that id
        """
        remaining = [t for t in self._transactions if t.id != transaction_id]
        removed = len(remaining) != len(self._transactions)
        self._transactions = remaining
        return removed

    def clear(self) -> None:
        """Discard all contents and start a new generation."""
        self._transactions = []
        self.generation += 1
