"""Errors raised at the boundary with the remote transactions collection."""

from typing import Optional


class RemoteUnavailable(Exception):
    """The remote collection could not complete a call.

    Network failures, a missing backing table and malformed responses all
    collapse into this one error, since callers handle them identically.
    """

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        super().__init__(message or f"Remote '{operation}' call failed")
