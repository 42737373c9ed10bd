"""Services package for the finance tracker."""

from finance_tracker.services.analytics_service import AnalyticsService, DashboardSummary
from finance_tracker.services.auth_service import AuthState, LocalAuthProvider
from finance_tracker.services.filter_service import (
    TransactionFilter,
    category_options,
    filter_transactions,
)
from finance_tracker.services.remote_sync import RemoteSyncAdapter, SQLTransactionCollection
from finance_tracker.services.session_gate import SessionGate, SessionStatus
from finance_tracker.services.transaction_service import SyncNotice, TransactionService
from finance_tracker.services.transaction_store import TransactionStore

__all__ = [
    "AnalyticsService",
    "AuthState",
    "DashboardSummary",
    "LocalAuthProvider",
    "RemoteSyncAdapter",
    "SQLTransactionCollection",
    "SessionGate",
    "SessionStatus",
    "SyncNotice",
    "TransactionFilter",
    "TransactionService",
    "TransactionStore",
    "category_options",
    "filter_transactions",
]
