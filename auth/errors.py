"""
auth/errors.py -- Domain exceptions raised by the auth handlers.

Each exception carries the HTTP status and a machine-readable code so the
exception handler in api/main.py can render every failure into the same
ErrorResponse envelope without a per-route mapping table.

Layer rule: no imports from api/ or fastapi. Status codes are plain ints.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for expected, client-visible auth failures."""

    status_code: int = 400
    code: str = "auth_error"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationFailed(AuthError):
    status_code = 400
    code = "validation_error"


class InvalidCredentials(AuthError):
    """Login failed. Deliberately says nothing about which check failed."""

    status_code = 401
    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid username or password.")


class Unauthorized(AuthError):
    """Bearer token missing, malformed, badly signed, or expired."""

    status_code = 401
    code = "unauthorized"

    def __init__(self) -> None:
        super().__init__("Missing or invalid access token.")


class Conflict(AuthError):
    status_code = 409
    code = "conflict"


class UserNotFound(AuthError):
    status_code = 404
    code = "user_not_found"

    def __init__(self) -> None:
        super().__init__("User not found.")
