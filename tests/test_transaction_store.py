"""Tests for the in-memory transaction store."""

from __future__ import annotations

import pytest
from conftest import make_transaction

from finance_tracker.services import TransactionStore


def test_insert_places_new_transaction_at_head(scenario_transactions) -> None:
    store = TransactionStore(scenario_transactions)
    new = make_transaction("txn_5", "expense", 75, "Entertainment")

    store.insert(new)

    assert len(store) == 5
    assert store.transactions[0] is new
    assert [t.id for t in store][1:] == ["1", "2", "3", "4"]


def test_insert_rejects_duplicate_id(scenario_transactions) -> None:
    store = TransactionStore(scenario_transactions)

    with pytest.raises(ValueError):
        store.insert(make_transaction("2", "expense", 10, "Food"))
    assert len(store) == 4


def test_remove_deletes_exactly_one_and_keeps_order(scenario_transactions) -> None:
    store = TransactionStore(scenario_transactions)

    assert store.remove("2") is True
    assert [t.id for t in store] == ["1", "3", "4"]


def test_remove_unknown_id_is_a_no_op(scenario_transactions) -> None:
    store = TransactionStore(scenario_transactions)

    assert store.remove("missing") is False
    assert [t.id for t in store] == ["1", "2", "3", "4"]


def test_replace_drops_duplicate_ids() -> None:
    first = make_transaction("a", "income", 1, "Salary")
    duplicate = make_transaction("a", "expense", 2, "Food")
    store = TransactionStore([first, duplicate, make_transaction("b", "expense", 3, "Food")])

    assert [t.id for t in store] == ["a", "b"]
    assert store.transactions[0] is first


def test_clear_starts_new_generation(scenario_transactions) -> None:
    store = TransactionStore(scenario_transactions)
    before = store.generation

    store.replace([])
    store.insert(make_transaction("5", "expense", 20, "Food"))
    assert store.generation == before

    store.clear()
    assert store.generation == before + 1


def test_clear_empties_store(scenario_transactions) -> None:
    store = TransactionStore(scenario_transactions)
    store.clear()

    assert len(store) == 0
    assert "1" not in store
