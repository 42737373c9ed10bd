"""Service for dashboard analytics over the session's transactions."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from finance_tracker.config import settings
from finance_tracker.models import Transaction, TransactionType


@dataclass(frozen=True)
class DashboardSummary:
    """Totals shown on the dashboard for the current calendar month."""

    total_income: float = 0.0
    total_expenses: float = 0.0
    expenses_by_category: dict[str, float] = field(default_factory=dict)
    goals_progress: int = 0

    @property
    def balance(self) -> float:
        """Income minus expenses; negative when spending exceeds income."""
        return self.total_income - self.total_expenses


class AnalyticsService:
    """Service for dashboard analytics.

    Everything is recomputed from the transactions passed in; nothing is cached.
    """

    def current_month(
        self,
        transactions: Iterable[Transaction],
        now: Optional[datetime] = None,
    ) -> list[Transaction]:
        """Transactions dated in the same calendar month and year as now."""
        now = now or datetime.now()
        return [
            t for t in transactions
            if t.date.month == now.month and t.date.year == now.year
        ]

    def get_total_income(self, transactions: Iterable[Transaction]) -> float:
        """Sum of income amounts."""
        return sum(
            (t.amount for t in transactions if t.type == TransactionType.INCOME), 0.0
        )

    def get_total_expenses(self, transactions: Iterable[Transaction]) -> float:
        """Sum of expense amounts."""
        return sum(
            (t.amount for t in transactions if t.type == TransactionType.EXPENSE), 0.0
        )

    def get_expenses_by_category(
        self, transactions: Iterable[Transaction]
    ) -> dict[str, float]:
        """
        Sum expense amounts per category.

        Returns:
            Mapping of category to total, ordered by first appearance
        """
        totals: dict[str, float] = defaultdict(float)
        for t in transactions:
            if t.type == TransactionType.EXPENSE:
                totals[t.category] += t.amount
        return dict(totals)

    def get_summary(
        self,
        transactions: Iterable[Transaction],
        now: Optional[datetime] = None,
    ) -> DashboardSummary:
        """Build the dashboard totals from the current-month partition."""
        monthly = self.current_month(transactions, now)
        return DashboardSummary(
            total_income=self.get_total_income(monthly),
            total_expenses=self.get_total_expenses(monthly),
            expenses_by_category=self.get_expenses_by_category(monthly),
            goals_progress=settings.goals_progress_placeholder,
        )

    def get_recent_transactions(
        self,
        transactions: Iterable[Transaction],
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """First entries in store order, newest additions first."""
        if limit is None:
            limit = settings.recent_transactions_limit
        return list(transactions)[:limit]
