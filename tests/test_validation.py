"""Unit tests for auth/validation.py -- ordered registration checks."""

import pytest

from auth.errors import ValidationFailed
from auth.validation import EMAIL_PATTERN, REGISTRATION_CHECKS, validate_registration

VALID = {"username": "alice01", "email": "alice@example.com", "password": "secret1"}


def _code(payload: dict) -> str:
    with pytest.raises(ValidationFailed) as exc_info:
        validate_registration(payload)
    return exc_info.value.code


def test_valid_payload_passes():
    validate_registration(VALID)


def test_checks_are_declared_in_order():
    assert [c.name for c in REGISTRATION_CHECKS] == [
        "missing_fields",
        "username_too_short",
        "password_too_short",
        "invalid_email",
    ]


@pytest.mark.parametrize("field", ["username", "email", "password"])
def test_missing_field(field):
    payload = {k: v for k, v in VALID.items() if k != field}
    assert _code(payload) == "missing_fields"


def test_boundary_lengths_pass():
    validate_registration({**VALID, "username": "abc", "password": "123456"})


def test_first_failure_wins():
    assert _code({**VALID, "password": "1", "email": "nope"}) == "password_too_short"


def test_failure_is_400():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_registration({})
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("email", ["a@b.co", "first.last+tag@sub.example.org"])
def test_email_pattern_accepts(email):
    assert EMAIL_PATTERN.fullmatch(email)


@pytest.mark.parametrize(
    "email",
    ["plain", "a@b", "@example.com", "a@@example.com", "a @example.com", "alice@example.com\n"],
)
def test_email_pattern_rejects(email):
    assert EMAIL_PATTERN.fullmatch(email) is None


def test_trailing_newline_email_rejected():
    assert _code({**VALID, "email": "alice@example.com\n"}) == "invalid_email"
