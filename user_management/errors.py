from __future__ import annotations

from typing import Optional


class UserStoreError(Exception):
    """Base class for the declared outcomes of a user store operation."""

    status_code = 500

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidInput(UserStoreError):
    """A caller-supplied field failed the required/injection/format checks."""

    status_code = 400

    def __init__(self, field: str, reason: str):
        super().__init__(reason, field=field)


class Conflict(UserStoreError):
    """Another live record already owns this username or email."""

    status_code = 400

    def __init__(self, field: str, reason: str):
        super().__init__(reason, field=field)


class NotFound(UserStoreError):
    status_code = 404

    def __init__(self, user_id: str):
        super().__init__("User not found")
        self.user_id = user_id


class IdentifierExhausted(UserStoreError):
    # Internal failure: never surfaced to callers with detail.
    status_code = 500
