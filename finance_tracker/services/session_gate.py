"""Session gate deciding which view renders for the current identity."""

import logging
from enum import Enum
from typing import Callable, Optional

from finance_tracker.models import User
from finance_tracker.services.auth_service import AuthState, LocalAuthProvider
from finance_tracker.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class SessionGate:
    """State machine over auth notifications.

    Entering ``authenticated`` populates the store through the transaction
    service; leaving it clears the store. The gate cycles for the lifetime
    of the process.
    """

    def __init__(
        self,
        auth: LocalAuthProvider,
        transaction_service: TransactionService,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.auth = auth
        self.transaction_service = transaction_service
        self.on_change = on_change
        self.status = SessionStatus.LOADING
        self.user: Optional[User] = None
        self.transactions_loading = False
        self._loaded_user_id: Optional[str] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def store(self):
        return self.transaction_service.store

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED

    async def start(self) -> None:
        """Subscribe to the auth provider and process its startup notification."""
        if self._unsubscribe is None:
            self._unsubscribe = self.auth.on_auth_state_changed(self.handle_auth_state)
        await self.auth.initialize()

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def handle_auth_state(self, state: AuthState) -> None:
        """Apply one auth notification."""
        if state.is_loading:
            self.status = SessionStatus.LOADING
        elif state.user is None:
            self.status = SessionStatus.UNAUTHENTICATED
        else:
            self.status = SessionStatus.AUTHENTICATED
        self.user = state.user

        logger.info(
            "Session %s%s",
            self.status.value,
            f" as {self.user.email}" if self.user else "",
        )

        if self._loaded_user_id is not None:
            signed_out = self.status == SessionStatus.UNAUTHENTICATED
            switched = self.user is not None and self.user.id != self._loaded_user_id
            if signed_out or switched:
                self._teardown()

        self._changed()

        # Same identity re-announced: keep the store as it is
        if self.is_authenticated and self._loaded_user_id != self.user.id:
            await self._populate()

    async def _populate(self) -> None:
        user_id = self.user.id
        self._loaded_user_id = user_id
        generation = self.store.generation
        self.transactions_loading = True
        self._changed()
        try:
            await self.transaction_service.load(user_id)
        finally:
            # After a teardown the flag belongs to the newer session
            current = self.store.generation == generation
            if current:
                self.transactions_loading = False
        if current:
            self._changed()

    def _teardown(self) -> None:
        """Discard the store and derived state on sign-out or identity change."""
        self.store.clear()
        self._loaded_user_id = None
        self.transactions_loading = False
        logger.info("Cleared session transactions")

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
