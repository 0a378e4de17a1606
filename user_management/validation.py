from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from user_management.errors import InvalidInput

_NAME_RE = re.compile(r"^[A-Za-z\s]{2,50}$")
_USERNAME_RE = re.compile(r"^[A-Za-z0-9_-]{3,20}$")
_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

# Matched case-insensitively as plain substrings.
DANGEROUS_PATTERNS: tuple[str, ...] = (
    "<script",
    "</script>",
    "<iframe",
    "</iframe>",
    "<object",
    "</object>",
    "<embed",
    "</embed>",
    "javascript:",
    "onerror=",
    "onload=",
    "onclick=",
    "onmouseover=",
)


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    value: str = ""
    error: str = ""


def contains_html_or_script(text: str) -> bool:
    lowered = text.lower()
    return any(p in lowered for p in DANGEROUS_PATTERNS)


def _validate(raw: Optional[str], *, label: str, pattern: re.Pattern[str], format_error: str) -> ValidationResult:
    if raw is None or not raw.strip():
        return ValidationResult(False, error=f"{label} is required")

    value = raw.strip()

    if contains_html_or_script(value):
        return ValidationResult(False, error=f"{label} contains invalid content")

    if not pattern.fullmatch(value):
        return ValidationResult(False, error=format_error)

    return ValidationResult(True, value=value)


def validate_name(name: Optional[str]) -> ValidationResult:
    return _validate(
        name,
        label="Name",
        pattern=_NAME_RE,
        format_error="Name must be 2-50 characters and contain only letters and spaces",
    )


def validate_username(username: Optional[str]) -> ValidationResult:
    return _validate(
        username,
        label="Username",
        pattern=_USERNAME_RE,
        format_error=(
            "Username must be 3-20 characters and contain only letters, numbers, hyphens, and underscores"
        ),
    )


def validate_email(email: Optional[str]) -> ValidationResult:
    return _validate(
        email,
        label="Email",
        pattern=_EMAIL_RE,
        format_error="Email must be in a valid format",
    )


def validate_user_fields(
    *, name: Optional[str], username: Optional[str], email: Optional[str]
) -> tuple[str, str, str]:
    """Validate the three user fields in order and return their canonical values.

    Fields are checked name -> username -> email; the first failure is raised
    as :class:`InvalidInput` carrying the field name and the rejection reason.
    """
    out: list[str] = []
    for field, raw, check in (
        ("name", name, validate_name),
        ("username", username, validate_username),
        ("email", email, validate_email),
    ):
        result = check(raw)
        if not result.is_valid:
            raise InvalidInput(field, result.error)
        out.append(result.value)
    return out[0], out[1], out[2]
