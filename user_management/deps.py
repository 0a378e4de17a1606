from __future__ import annotations

from user_management.settings import Settings, get_settings
from user_management.user_store import InMemoryUserStore


def get_settings_dep() -> Settings:
    """FastAPI dependency for settings.

    Delegates to user_management.settings.get_settings (canonical constructor).
    """
    return get_settings()


# One store per process; it starts empty on every restart.
_USER_STORE = InMemoryUserStore()


def get_user_store() -> InMemoryUserStore:
    # Tests override this dependency with a fresh store per test.
    return _USER_STORE
