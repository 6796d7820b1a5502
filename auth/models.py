"""
auth/models.py -- Domain dataclass for the user record.

Pattern: Data class (pure data container, zero logic). The store owns
persistence and the route layer owns the HTTP shape.

Layer rule: no imports from api/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered account.

    id is an opaque UUID4 string assigned at creation and never changed.
    hashed_password holds a bcrypt hash; the plaintext is never stored and the
    hash is never sent back to a caller (see api.models.PublicUser).

    updated_at is stamped at creation only. last_login is None until the first
    successful login.
    """

    username: str
    email: str
    hashed_password: str
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    last_login: str | None = None
