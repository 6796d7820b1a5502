"""Unit tests for auth/tokens.py -- hashing, JWT round trip, bearer parsing, authenticate_user()."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from auth.models import User
from auth.store import UserStore
from auth.tokens import (
    authenticate_user,
    bearer_token,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from core.config import get_settings


@pytest.fixture
def alice(user_store: UserStore) -> User:
    user = User(username="alice01", email="alice@example.com", hashed_password=hash_password("secret1"))
    user_store.create_user(user)
    return user


class TestPasswords:
    def test_hash_is_salted(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_verify_matches(self):
        hashed = hash_password("secret1")
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)

    def test_verify_garbage_hash_is_false(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False

    def test_cost_factor_from_settings(self):
        rounds = get_settings().bcrypt_rounds
        assert hash_password("secret1").split("$")[2] == f"{rounds:02d}"


class TestJwt:
    def test_round_trip(self, alice: User):
        payload = decode_access_token(create_access_token(alice))
        assert payload is not None
        assert payload["sub"] == alice.id
        assert payload["username"] == "alice01"

    def test_custom_expiry(self, alice: User):
        claims = jwt.get_unverified_claims(create_access_token(alice, expire_seconds=60))
        assert claims["exp"] - claims["iat"] == 60

    def test_expired_token_rejected(self, alice: User):
        past = datetime.now(timezone.utc) - timedelta(seconds=5)
        token = jwt.encode({"sub": alice.id, "exp": past}, get_settings().jwt_secret, algorithm="HS256")
        assert decode_access_token(token) is None

    def test_wrong_secret_rejected(self, alice: User):
        token = jwt.encode({"sub": alice.id}, "y" * 40, algorithm="HS256")
        assert decode_access_token(token) is None

    def test_missing_subject_rejected(self):
        token = jwt.encode({"username": "alice01"}, get_settings().jwt_secret, algorithm="HS256")
        assert decode_access_token(token) is None


class TestBearer:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc.def.ghi", "abc.def.ghi"),
            ("Bearer   abc ", "abc"),
            (None, None),
            ("", None),
            ("Bearer ", None),
            ("bearer abc", None),
            ("Token abc", None),
        ],
    )
    def test_bearer_token(self, header, expected):
        assert bearer_token(header) == expected


class TestAuthenticateUser:
    def test_by_username(self, user_store: UserStore, alice: User):
        assert authenticate_user(user_store, "alice01", "secret1").id == alice.id

    def test_by_email(self, user_store: UserStore, alice: User):
        assert authenticate_user(user_store, "alice@example.com", "secret1").id == alice.id

    def test_wrong_password(self, user_store: UserStore, alice: User):
        assert authenticate_user(user_store, "alice01", "nope-nope") is None

    def test_unknown_user(self, user_store: UserStore):
        assert authenticate_user(user_store, "nouser", "x") is None
