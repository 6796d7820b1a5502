"""Unit tests for core/config.py -- JWT_SECRET policy and defaults."""

import pytest
from pydantic import ValidationError

from core.config import Settings


def test_production_requires_secret():
    with pytest.raises(ValidationError, match="JWT_SECRET is required"):
        Settings(debug=False, jwt_secret="")


def test_short_secret_rejected():
    with pytest.raises(ValidationError, match="at least 32 characters"):
        Settings(debug=False, jwt_secret="short")


def test_debug_generates_secret():
    settings = Settings(debug=True, jwt_secret="")
    assert len(settings.jwt_secret) >= 32


def test_defaults():
    settings = Settings(debug=False, jwt_secret="s" * 32, bcrypt_rounds=10)
    assert settings.token_expire_seconds == 24 * 60 * 60
    assert settings.bcrypt_rounds == 10


def test_bcrypt_rounds_bounds():
    with pytest.raises(ValidationError):
        Settings(debug=True, bcrypt_rounds=3)
