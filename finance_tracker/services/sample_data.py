"""Illustrative transactions shown when the remote collection is unreachable."""

from datetime import datetime, timedelta
from typing import Optional

from finance_tracker.models import Transaction, TransactionType

# (type, amount, category, description, days before now)
SAMPLE_ROWS = [
    (TransactionType.INCOME, 5000.0, "Salary", "Monthly salary", 0),
    (TransactionType.EXPENSE, 1200.0, "Housing", "Monthly rent", 1),
    (TransactionType.EXPENSE, 300.0, "Food", "Groceries", 2),
    (TransactionType.EXPENSE, 150.0, "Transportation", "Gas and parking", 3),
]


def sample_transactions(user_id: str, now: Optional[datetime] = None) -> list[Transaction]:
    """Build the fixed four-entry sample set for a user, dated relative to now."""
    now = now or datetime.now()
    return [
        Transaction(
            id=str(index),
            user_id=user_id,
            type=txn_type.value,
            amount=amount,
            category=category,
            description=description,
            date=now - timedelta(days=days_ago),
            created_at=now,
            updated_at=now,
        )
        for index, (txn_type, amount, category, description, days_ago) in enumerate(
            SAMPLE_ROWS, start=1
        )
    ]
