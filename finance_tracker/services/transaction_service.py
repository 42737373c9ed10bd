"""Load, add and delete flows for the session's transactions."""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Collection, Optional

from finance_tracker.config import settings
from finance_tracker.exceptions import RemoteUnavailable
from finance_tracker.models import Transaction, TransactionCreate, TransactionType
from finance_tracker.services.remote_sync import RemoteSyncAdapter
from finance_tracker.services.sample_data import sample_transactions
from finance_tracker.services.transaction_store import TransactionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncNotice:
    """User-facing outcome of a mutation."""

    title: str
    message: str
    local_only: bool = False


def generate_transaction_id(
    store: TransactionStore,
    now: Optional[float] = None,
    reserved: Collection[str] = (),
) -> str:
    """Generate a ``txn_<milliseconds>`` id not yet in the store or reserved."""
    stamp = int((time.time() if now is None else now) * 1000)
    while f"txn_{stamp}" in store or f"txn_{stamp}" in reserved:
        stamp += 1
    return f"txn_{stamp}"


def build_transaction(
    data: TransactionCreate,
    user_id: str,
    store: TransactionStore,
    now: Optional[datetime] = None,
    reserved: Collection[str] = (),
) -> Transaction:
    """Create the record for a new transaction with a fresh local id."""
    now = now or datetime.now()
    return Transaction(
        id=generate_transaction_id(store, now.timestamp(), reserved),
        user_id=user_id,
        type=TransactionType(data.type).value,
        amount=data.amount,
        category=data.category,
        description=data.description,
        date=data.date,
        created_at=now,
        updated_at=now,
    )


def apply_add(store: TransactionStore, transaction: Transaction) -> None:
    """Apply an add to the store. Never depends on the remote outcome."""
    store.insert(transaction)


def apply_delete(store: TransactionStore, transaction_id: str) -> bool:
    """Apply a delete to the store. Never depends on the remote outcome."""
    return store.remove(transaction_id)


def _added_notice(transaction: Transaction, local_only: bool) -> SyncNotice:
    kind = "Income" if transaction.is_income else "Expense"
    if local_only:
        return SyncNotice(
            title="Transaction added (locally)",
            message=f"{kind} of ${transaction.amount:,.2f} has been recorded locally.",
            local_only=True,
        )
    return SyncNotice(
        title="Transaction added",
        message=f"{kind} of ${transaction.amount:,.2f} has been recorded.",
    )


def _deleted_notice(local_only: bool) -> SyncNotice:
    if local_only:
        return SyncNotice(
            title="Transaction deleted (locally)",
            message="Transaction has been removed locally.",
            local_only=True,
        )
    return SyncNotice(
        title="Transaction deleted",
        message="Transaction has been removed successfully.",
    )


class TransactionService:
    """Optimistic mutation flows over the store and the remote adapter.

    The remote call is attempted once per action and its result only selects
    the notice; the store is updated the same way on success and failure.
    """

    def __init__(
        self,
        store: TransactionStore,
        adapter: Optional[RemoteSyncAdapter] = None,
        sample_fallback: Optional[bool] = None,
    ):
        self.store = store
        self.adapter = adapter or RemoteSyncAdapter()
        self._pending_ids: set[str] = set()
        self.sample_fallback = (
            settings.sample_data_fallback if sample_fallback is None else sample_fallback
        )

    async def load(self, user_id: str, now: Optional[datetime] = None) -> bool:
        """
        Populate the store with the user's transactions.

        Returns:
            True if loaded from the remote collection, False if it fell back
            or the store was cleared while the call was in flight
        """
        generation = self.store.generation
        try:
            transactions = await self.adapter.list(user_id)
        except RemoteUnavailable as exc:
            logger.warning("Failed to load transactions for %s: %s", user_id, exc.__cause__ or exc)
            transactions = None

        if self.store.generation != generation:
            logger.info("Discarding stale transaction list for %s", user_id)
            return False

        if transactions is None:
            if self.sample_fallback:
                self.store.replace(sample_transactions(user_id, now))
                logger.info("Seeded %d sample transactions", len(self.store))
            else:
                self.store.replace([])
            return False

        self.store.replace(transactions)
        logger.info("Loaded %d transactions for %s", len(self.store), user_id)
        return True

    async def add_transaction(
        self,
        data: TransactionCreate,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> tuple[Transaction, SyncNotice]:
        """Record a new transaction; it is kept locally even if saving fails."""
        transaction = build_transaction(data, user_id, self.store, now, self._pending_ids)
        generation = self.store.generation

        # Ids of adds still waiting on the remote call are not in the store yet
        self._pending_ids.add(transaction.id)
        local_only = False
        try:
            await self.adapter.create(transaction)
        except RemoteUnavailable as exc:
            logger.warning("Failed to save transaction %s: %s", transaction.id, exc.__cause__ or exc)
            local_only = True
        finally:
            self._pending_ids.discard(transaction.id)

        # The session was torn down while saving; its store must stay empty
        if self.store.generation != generation:
            logger.info("Not adding %s to a cleared store", transaction.id)
        else:
            apply_add(self.store, transaction)
        return transaction, _added_notice(transaction, local_only)

    async def delete_transaction(self, transaction_id: str) -> SyncNotice:
        """Delete a transaction; it is removed locally even if the remote call fails."""
        local_only = False
        try:
            await self.adapter.delete(transaction_id)
        except RemoteUnavailable as exc:
            logger.warning("Failed to delete transaction %s: %s", transaction_id, exc.__cause__ or exc)
            local_only = True

        apply_delete(self.store, transaction_id)
        return _deleted_notice(local_only)
