from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

from user_management.errors import Conflict, IdentifierExhausted, NotFound
from user_management.validation import validate_user_fields

logger = logging.getLogger("user_management.store")

_MAX_ID_ATTEMPTS = 8


@dataclass(frozen=True)
class User:
    id: str
    name: str
    username: str
    email: str


class InMemoryUserStore:
    """Thread-safe in-memory user store.

    Storage semantics:
    - Stored only in the API process memory (cleared on restart).
    - Not shared across multiple API instances.
    - Identifiers are random uuid4 strings; a draw that hits a live id is redrawn.

    Every read and every check-then-write runs under one lock, so uniqueness
    of ``username`` and ``email`` (case-insensitive) is re-verified at the
    moment of mutation. Records are frozen dataclasses; callers get values,
    never a handle into the store's dicts.
    """

    def __init__(self, *, id_factory: Optional[Callable[[], str]] = None):
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}
        # Lower-cased username/email -> user id.
        self._by_username: Dict[str, str] = {}
        self._by_email: Dict[str, str] = {}
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

    def list(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def get(self, user_id: str) -> User:
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise NotFound(user_id)
        return user

    def create(self, *, name: Optional[str], username: Optional[str], email: Optional[str]) -> User:
        name, username, email = validate_user_fields(name=name, username=username, email=email)

        with self._lock:
            self._check_unique(username=username, email=email, exclude_id=None)
            user = User(id=self._new_id(), name=name, username=username, email=email)
            self._users[user.id] = user
            self._index(user)

        logger.info("Created user %s", user.id)
        return user

    def update(
        self,
        user_id: str,
        *,
        name: Optional[str],
        username: Optional[str],
        email: Optional[str],
    ) -> User:
        with self._lock:
            if user_id not in self._users:
                raise NotFound(user_id)

        name, username, email = validate_user_fields(name=name, username=username, email=email)

        with self._lock:
            # The user may have been deleted while we were validating.
            current = self._users.get(user_id)
            if current is None:
                raise NotFound(user_id)
            self._check_unique(username=username, email=email, exclude_id=user_id)

            updated = replace(current, name=name, username=username, email=email)
            self._unindex(current)
            self._users[user_id] = updated
            self._index(updated)

        logger.info("Updated user %s", user_id)
        return updated

    def delete(self, user_id: str) -> None:
        with self._lock:
            user = self._users.pop(user_id, None)
            if user is None:
                raise NotFound(user_id)
            self._unindex(user)

        logger.info("Deleted user %s", user_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    # --- helpers below assume self._lock is held ---

    def _check_unique(self, *, username: str, email: str, exclude_id: Optional[str]) -> None:
        owner = self._by_username.get(username.lower())
        if owner is not None and owner != exclude_id:
            logger.info("Rejected duplicate username for user %s", exclude_id or "<new>")
            raise Conflict("username", "Username already exists")

        owner = self._by_email.get(email.lower())
        if owner is not None and owner != exclude_id:
            logger.info("Rejected duplicate email for user %s", exclude_id or "<new>")
            raise Conflict("email", "Email already exists")

    def _new_id(self) -> str:
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate and candidate not in self._users:
                return candidate
            logger.warning("Identifier collision, drawing a new id")
        raise IdentifierExhausted("Could not generate a unique user id")

    def _index(self, user: User) -> None:
        self._by_username[user.username.lower()] = user.id
        self._by_email[user.email.lower()] = user.id

    def _unindex(self, user: User) -> None:
        self._by_username.pop(user.username.lower(), None)
        self._by_email.pop(user.email.lower(), None)
