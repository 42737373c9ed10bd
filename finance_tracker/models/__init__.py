"""Models package for the finance tracker."""

from finance_tracker.models.transaction import (
    Transaction,
    TransactionCreate,
    TransactionType,
)
from finance_tracker.models.user import Budget, Category, Goal, User

__all__ = [
    "Budget",
    "Category",
    "Goal",
    "Transaction",
    "TransactionCreate",
    "TransactionType",
    "User",
]
