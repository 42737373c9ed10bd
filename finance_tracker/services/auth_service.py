"""Authentication provider used to sign users in and out."""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from finance_tracker.config import settings
from finance_tracker.models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthState:
    """Snapshot delivered to auth-state listeners."""

    user: Optional[User]
    is_loading: bool = False


AuthListener = Callable[[AuthState], Awaitable[None]]


class LocalAuthProvider:
    """Auth provider that signs in a single configured identity.

    Listeners are notified once by ``initialize()`` on startup and again on
    every ``login()`` and ``logout()``.
    """

    def __init__(self, user: Optional[User] = None, auto_sign_in: Optional[bool] = None):
        """Initialize the provider."""
        self.identity = user or User(
            id=settings.demo_user_id,
            email=settings.demo_user_email,
            display_name=settings.demo_user_display_name,
        )
        self.auto_sign_in = settings.auto_sign_in if auto_sign_in is None else auto_sign_in
        self._listeners: list[AuthListener] = []
        self._state = AuthState(user=None, is_loading=True)

    @property
    def state(self) -> AuthState:
        return self._state

    def on_auth_state_changed(self, listener: AuthListener) -> Callable[[], None]:
        """
        Register a listener for auth-state changes.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def initialize(self) -> None:
        """Emit the startup state, restoring the identity when auto sign-in is on."""
        await self._emit(AuthState(user=None, is_loading=True))
        await self._emit(
            AuthState(user=self.identity if self.auto_sign_in else None)
        )

    async def login(self) -> None:
        logger.info("Signing in %s", self.identity.email)
        await self._emit(AuthState(user=self.identity))

    async def logout(self) -> None:
        logger.info("Signing out")
        await self._emit(AuthState(user=None))

    async def _emit(self, state: AuthState) -> None:
        self._state = state
        for listener in list(self._listeners):
            await listener(state)
