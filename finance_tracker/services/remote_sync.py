"""Remote transactions collection and the adapter that wraps it."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol

from sqlalchemy.engine import Engine
from sqlmodel import select

from finance_tracker.config import settings
from finance_tracker.database import get_session
from finance_tracker.exceptions import RemoteUnavailable
from finance_tracker.models import Transaction

logger = logging.getLogger(__name__)


class TransactionCollection(Protocol):
    """Contract of the external ``transactions`` collection."""

    async def list(
        self,
        where: dict[str, Any],
        order_by: dict[str, str],
        limit: int,
    ) -> list[Transaction]: ...

    async def create(self, transaction: Transaction) -> Optional[Transaction]: ...

    async def delete(self, transaction_id: str) -> None: ...


class SQLTransactionCollection:
    """``transactions`` collection backed by SQLModel."""

    ORDERABLE_FIELDS = ("date", "created_at", "amount", "category")

    def __init__(self, bind: Optional[Engine] = None):
        """Initialize the collection on the given engine (default: app engine)."""
        self._bind = bind

    async def list(
        self,
        where: dict[str, Any],
        order_by: dict[str, str],
        limit: int,
    ) -> list[Transaction]:
        return await asyncio.to_thread(self._list, where, order_by, limit)

    async def create(self, transaction: Transaction) -> Optional[Transaction]:
        return await asyncio.to_thread(self._create, transaction)

    async def delete(self, transaction_id: str) -> None:
        await asyncio.to_thread(self._delete, transaction_id)

    def _list(
        self,
        where: dict[str, Any],
        order_by: dict[str, str],
        limit: int,
    ) -> list[Transaction]:
        with get_session(self._bind) as session:
            query = select(Transaction)

            # Apply filters
            for field, value in where.items():
                query = query.where(getattr(Transaction, field) == value)

            # Sort
            for field, direction in order_by.items():
                if field not in self.ORDERABLE_FIELDS:
                    raise ValueError(f"Cannot order transactions by {field}")
                column = getattr(Transaction, field)
                query = query.order_by(
                    column.desc() if direction.lower() == "desc" else column.asc()
                )

            query = query.limit(limit)
            rows = session.exec(query).all()

            # Detach copies so callers never touch session state
            return [Transaction(**row.model_dump()) for row in rows]

    def _create(self, transaction: Transaction) -> Transaction:
        with get_session(self._bind) as session:
            session.add(Transaction(**transaction.model_dump()))
            session.commit()
        return transaction

    def _delete(self, transaction_id: str) -> None:
        with get_session(self._bind) as session:
            transaction = session.get(Transaction, transaction_id)
            if transaction:
                session.delete(transaction)
                session.commit()


class RemoteSyncAdapter:
    """Boundary around the remote collection.

    Every failure of the collection surfaces as ``RemoteUnavailable``; callers
    decide how to fall back. Each call is attempted exactly once.
    """

    def __init__(
        self,
        collection: Optional[TransactionCollection] = None,
        list_limit: Optional[int] = None,
    ):
        self.collection = collection or SQLTransactionCollection()
        self.list_limit = list_limit or settings.remote_list_limit

    async def list(self, user_id: str) -> list[Transaction]:
        """Fetch the user's most recent transactions, newest date first."""
        try:
            return list(
                await self.collection.list(
                    where={"user_id": user_id},
                    order_by={"date": "desc", "created_at": "desc"},
                    limit=self.list_limit,
                )
            )
        except Exception as exc:
            raise RemoteUnavailable("list") from exc

    async def create(self, transaction: Transaction) -> Optional[Transaction]:
        try:
            return await self.collection.create(transaction)
        except Exception as exc:
            raise RemoteUnavailable("create") from exc

    async def delete(self, transaction_id: str) -> None:
        try:
            await self.collection.delete(transaction_id)
        except Exception as exc:
            raise RemoteUnavailable("delete") from exc
