"""Shared fixtures for the finance tracker tests."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

import pytest

from finance_tracker.database import IN_MEMORY_URL, init_db, make_engine
from finance_tracker.models import Transaction

NOW = datetime(2026, 10, 18, 12, 0, 0)


def make_transaction(
    txn_id: str,
    type: str,
    amount: float,
    category: str,
    days_ago: int = 0,
    description: str | None = None,
    user_id: str = "user_1",
    now: datetime = NOW,
) -> Transaction:
    return Transaction(
        id=txn_id,
        user_id=user_id,
        type=type,
        amount=amount,
        category=category,
        description=description,
        date=now - timedelta(days=days_ago),
        created_at=now,
        updated_at=now,
    )


class FailingCollection:
    """Collection whose every call raises, like an unreachable backend."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def list(self, where, order_by, limit):
        self.calls.append("list")
        raise ConnectionError("backend unreachable")

    async def create(self, transaction):
        self.calls.append("create")
        raise ConnectionError("backend unreachable")

    async def delete(self, transaction_id):
        self.calls.append("delete")
        raise ConnectionError("backend unreachable")


class MemoryCollection:
    """Collection that keeps documents in a dict."""

    def __init__(self, transactions: list[Transaction] | None = None) -> None:
        self.documents = {t.id: t for t in transactions or []}
        self.list_calls: list[dict] = []

    async def list(self, where, order_by, limit):
        self.list_calls.append({"where": where, "order_by": order_by, "limit": limit})
        rows = [t for t in self.documents.values() if t.user_id == where["user_id"]]
        rows.sort(key=lambda t: t.date, reverse=True)
        return rows[:limit]

    async def create(self, transaction):
        self.documents[transaction.id] = transaction
        return transaction

    async def delete(self, transaction_id):
        self.documents.pop(transaction_id, None)


@pytest.fixture
def scenario_transactions() -> list[Transaction]:
    return [
        make_transaction("1", "income", 5000, "Salary", 0, "Monthly salary"),
        make_transaction("2", "expense", 1200, "Housing", 1, "Monthly rent"),
        make_transaction("3", "expense", 300, "Food", 2, "Groceries"),
        make_transaction("4", "expense", 150, "Transportation", 3, "Gas and parking"),
    ]


@pytest.fixture
def memory_engine():
    engine = make_engine(IN_MEMORY_URL)
    init_db(engine)
    return engine


@pytest.fixture
def empty_engine():
    """Engine without the transactions table."""
    return make_engine(IN_MEMORY_URL)


class HeldCollection(MemoryCollection):
    """Memory collection whose calls wait until the test releases them."""

    def __init__(self, transactions: list[Transaction] | None = None) -> None:
        super().__init__(transactions)
        self.gates: dict[str, asyncio.Event] = {}

    def hold(self, key: str) -> asyncio.Event:
        return self.gates.setdefault(key, asyncio.Event())

    async def list(self, where, order_by, limit):
        await self.hold(f"list:{where['user_id']}").wait()
        return await super().list(where, order_by, limit)

    async def create(self, transaction):
        await self.hold("create").wait()
        return await super().create(transaction)
