"""Tests for the optimistic load, add and delete flows."""

from __future__ import annotations

import asyncio
from datetime import datetime

import pytest
from conftest import NOW, FailingCollection, HeldCollection, MemoryCollection, make_transaction
from pydantic import ValidationError

from finance_tracker.models import TransactionCreate, TransactionType
from finance_tracker.services import (
    AnalyticsService,
    RemoteSyncAdapter,
    TransactionService,
    TransactionStore,
)
from finance_tracker.services.transaction_service import generate_transaction_id


def _service(collection, store=None, sample_fallback=True) -> TransactionService:
    return TransactionService(
        store if store is not None else TransactionStore(),
        RemoteSyncAdapter(collection),
        sample_fallback=sample_fallback,
    )


def test_load_replaces_store_with_remote_transactions(scenario_transactions) -> None:
    collection = MemoryCollection(scenario_transactions)
    service = _service(collection)

    assert asyncio.run(service.load("user_1")) is True
    assert [t.id for t in service.store] == ["1", "2", "3", "4"]
    assert collection.list_calls[0]["where"] == {"user_id": "user_1"}
    assert collection.list_calls[0]["limit"] == 100


def test_load_failure_seeds_sample_transactions() -> None:
    service = _service(FailingCollection())

    assert asyncio.run(service.load("user_1", now=NOW)) is False

    store = service.store.transactions
    assert len(store) == 4
    assert [t.type for t in store] == ["income", "expense", "expense", "expense"]
    assert [(NOW - t.date).days for t in store] == [0, 1, 2, 3]
    assert all(t.user_id == "user_1" for t in store)

    summary = AnalyticsService().get_summary(store, now=NOW)
    assert summary.total_income == 5000
    assert summary.total_expenses == 1650
    assert summary.balance == 3350
    assert summary.expenses_by_category == {"Housing": 1200, "Food": 300, "Transportation": 150}


def test_load_failure_without_fallback_leaves_store_empty(scenario_transactions) -> None:
    service = _service(FailingCollection(), TransactionStore(scenario_transactions), sample_fallback=False)

    asyncio.run(service.load("user_1"))

    assert len(service.store) == 0


def test_add_when_remote_fails_is_kept_locally(scenario_transactions) -> None:
    service = _service(FailingCollection(), TransactionStore(scenario_transactions))
    data = TransactionCreate(type="expense", amount=75, category="Entertainment", date=NOW)

    transaction, notice = asyncio.run(service.add_transaction(data, "user_1", now=NOW))

    assert len(service.store) == 5
    assert service.store.transactions[0] is transaction
    assert transaction.category == "Entertainment"
    assert transaction.amount == 75
    assert transaction.type == TransactionType.EXPENSE
    assert transaction.date == NOW
    assert transaction.user_id == "user_1"
    assert notice.local_only is True
    assert notice.title == "Transaction added (locally)"
    assert notice.message == "Expense of $75.00 has been recorded locally."


def test_add_when_remote_succeeds_persists_and_inserts() -> None:
    collection = MemoryCollection()
    service = _service(collection)
    data = TransactionCreate(
        type="income", amount=1234.5, category="Freelance", description="Invoice #7", date=NOW
    )

    transaction, notice = asyncio.run(service.add_transaction(data, "user_1", now=NOW))

    assert transaction.id == f"txn_{int(NOW.timestamp() * 1000)}"
    assert transaction.description == "Invoice #7"
    assert transaction.created_at == transaction.updated_at == NOW
    assert transaction.id in collection.documents
    assert transaction.id in service.store
    assert notice.local_only is False
    assert notice.message == "Income of $1,234.50 has been recorded."


def test_add_generates_unique_ids_within_same_millisecond() -> None:
    service = _service(MemoryCollection())
    data = TransactionCreate(type="expense", amount=1, category="Food", date=NOW)

    async def scenario():
        return await asyncio.gather(
            service.add_transaction(data, "user_1", now=NOW),
            service.add_transaction(data, "user_1", now=NOW),
        )

    results = asyncio.run(scenario())

    ids = {transaction.id for transaction, _ in results}
    assert len(ids) == 2
    assert len(service.store) == 2


def test_generate_transaction_id_skips_taken_ids(scenario_transactions) -> None:
    store = TransactionStore(scenario_transactions)

    assert generate_transaction_id(store, now=1.0) == "txn_1000"
    assert generate_transaction_id(store, now=1.0, reserved={"txn_1000"}) == "txn_1001"


def test_delete_when_remote_fails_still_removes(scenario_transactions) -> None:
    service = _service(FailingCollection(), TransactionStore(scenario_transactions))

    notice = asyncio.run(service.delete_transaction("3"))

    assert [t.id for t in service.store] == ["1", "2", "4"]
    assert notice.local_only is True
    assert notice.title == "Transaction deleted (locally)"


def test_delete_when_remote_succeeds(scenario_transactions) -> None:
    collection = MemoryCollection(scenario_transactions)
    service = _service(collection, TransactionStore(scenario_transactions))

    notice = asyncio.run(service.delete_transaction("1"))

    assert "1" not in collection.documents
    assert [t.id for t in service.store] == ["2", "3", "4"]
    assert notice.title == "Transaction deleted"
    assert notice.message == "Transaction has been removed successfully."


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "expense", "amount": -5, "category": "Food"},
        {"type": "expense", "amount": 5, "category": ""},
        {"type": "transfer", "amount": 5, "category": "Food"},
    ],
)
def test_invalid_input_is_rejected(payload) -> None:
    with pytest.raises(ValidationError):
        TransactionCreate(date=datetime(2026, 10, 1), **payload)


def test_load_ignores_list_returned_after_store_was_cleared() -> None:
    collection = HeldCollection([make_transaction("1", "expense", 10, "Food")])
    service = _service(collection)

    async def scenario():
        loading = asyncio.create_task(service.load("user_1"))
        await asyncio.sleep(0)
        service.store.clear()
        collection.hold("list:user_1").set()
        return await loading

    assert asyncio.run(scenario()) is False
    assert len(service.store) == 0


def test_add_is_dropped_when_store_was_cleared_during_save() -> None:
    collection = HeldCollection()
    service = _service(collection)
    data = TransactionCreate(type="expense", amount=75, category="Entertainment", date=NOW)

    async def scenario():
        adding = asyncio.create_task(service.add_transaction(data, "user_1", now=NOW))
        await asyncio.sleep(0)
        service.store.clear()
        collection.hold("create").set()
        return await adding

    transaction, _ = asyncio.run(scenario())

    assert len(service.store) == 0
    assert transaction.id in collection.documents
