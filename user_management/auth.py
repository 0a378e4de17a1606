from __future__ import annotations

import hmac
import logging
from typing import Optional

from fastapi import Depends, Header, Request

from user_management.deps import get_settings_dep
from user_management.settings import Settings

logger = logging.getLogger("user_management.auth")

API_KEY_HEADER = "api-key"


class ApiKeyError(Exception):
    """Raised when the shared-secret header is missing or wrong."""

    status_code = 401

    def __init__(self, message: str = "Invalid or missing API key"):
        super().__init__(message)
        self.message = message


def api_key_matches(*, provided: Optional[str], expected: str) -> bool:
    # An unconfigured key never matches, so a blank API_KEY locks the API.
    if not expected or provided is None:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def require_api_key(
    request: Request,
    api_key: Optional[str] = Header(default=None, alias=API_KEY_HEADER),
    settings: Settings = Depends(get_settings_dep),
) -> None:
    """FastAPI dependency guarding routes behind the `api-key` header."""
    if api_key is None:
        logger.warning("API key missing from request to %s", request.url.path)
        raise ApiKeyError()

    if not api_key_matches(provided=api_key, expected=settings.api_key):
        logger.warning("Invalid API key attempt for %s", request.url.path)
        raise ApiKeyError()
