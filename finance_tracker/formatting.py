"""Presentation helpers shared by the dashboard and transactions views."""

from datetime import datetime

from finance_tracker.models import Transaction

CATEGORY_PALETTE = [
    "#10B981", "#3B82F6", "#8B5CF6", "#F59E0B", "#EF4444",
    "#06B6D4", "#84CC16", "#F97316", "#EC4899", "#6366F1",
]

EMPTY_STORE_MESSAGE = "No transactions yet. Add your first transaction to get started!"
NO_MATCHES_MESSAGE = "No transactions match your current filters."


def category_color(position: int) -> str:
    """Color for the category at the given first-seen position."""
    return CATEGORY_PALETTE[position % len(CATEGORY_PALETTE)]


def category_colors(categories: list[str]) -> dict[str, str]:
    return {category: category_color(i) for i, category in enumerate(categories)}


def format_money(amount: float) -> str:
    return f"${amount:,.2f}"


def format_signed_amount(transaction: Transaction) -> str:
    """Amount prefixed with + for income and - for expenses."""
    sign = "+" if transaction.is_income else "-"
    return f"{sign}{format_money(transaction.amount)}"


def format_balance(balance: float) -> str:
    if balance < 0:
        return f"-{format_money(-balance)}"
    return format_money(balance)


def long_date(value: datetime) -> str:
    """E.g. ``Sunday, October 18, 2026``."""
    return value.strftime("%A, %B %d, %Y")


def short_date(value: datetime) -> str:
    """E.g. ``Oct 18, 2026``."""
    return value.strftime("%b %d, %Y")


def empty_list_message(store_size: int) -> str:
    """Message for a list view that has nothing to show."""
    return EMPTY_STORE_MESSAGE if store_size == 0 else NO_MATCHES_MESSAGE
