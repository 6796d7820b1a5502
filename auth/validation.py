"""
auth/validation.py -- Ordered field checks for new-account registration.

Each check is a named predicate over the raw request payload. validate_registration()
runs them in order and raises ValidationFailed for the first one that fails,
with the check's name as the error code. Duplicate detection is not here --
it needs the store and belongs to the route.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from auth.errors import ValidationFailed

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6

# Applied with fullmatch() so a trailing newline is rejected.
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

REQUIRED_FIELDS = ("username", "email", "password")


@dataclass(frozen=True)
class Check:
    name: str
    message: str
    passes: Callable[[dict], bool]


def _has_required_fields(payload: dict) -> bool:
    return all(isinstance(payload.get(f), str) and payload[f] for f in REQUIRED_FIELDS)


REGISTRATION_CHECKS: tuple[Check, ...] = (
    Check(
        name="missing_fields",
        message="Username, email and password are required.",
        passes=_has_required_fields,
    ),
    Check(
        name="username_too_short",
        message=f"Username must be at least {MIN_USERNAME_LENGTH} characters.",
        passes=lambda p: len(p["username"]) >= MIN_USERNAME_LENGTH,
    ),
    Check(
        name="password_too_short",
        message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
        passes=lambda p: len(p["password"]) >= MIN_PASSWORD_LENGTH,
    ),
    Check(
        name="invalid_email",
        message="Email address is not valid.",
        passes=lambda p: EMAIL_PATTERN.fullmatch(p["email"]) is not None,
    ),
)


def validate_registration(payload: dict) -> None:
    """Raise ValidationFailed for the first failing check, in declaration order.

    Later checks assume earlier ones passed (e.g. the length checks index
    fields that missing_fields has already guaranteed are non-empty strings).
    """
    for check in REGISTRATION_CHECKS:
        if not check.passes(payload):
            raise ValidationFailed(check.message, code=check.name)
