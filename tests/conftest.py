"""
tests/conftest.py -- Shared test fixtures for AuthGate.

This module provides:
  - user_store: an isolated in-memory UserStore per test
  - client: TestClient wired to that store through a patched lifespan
  - register: helper that POSTs a registration and returns the response

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.
A fresh random name per test keeps tests from seeing each other's users.

DEBUG must be set before any auth/core import so get_settings() auto-generates
JWT_SECRET instead of raising. BCRYPT_ROUNDS is lowered to keep hashing fast.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Generator
from contextlib import asynccontextmanager

# CRITICAL: Set before any auth/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import httpx
import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.store import UserStore


def _memory_db_url() -> str:
    return f"sqlite:///file:test_users_{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true"


def _patch_lifespan(user_store: UserStore):
    """Return a lifespan that publishes the given store instead of opening the real one."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        yield

    return test_lifespan


@pytest.fixture
def user_store() -> Generator[UserStore, None, None]:
    store = UserStore(db_url=_memory_db_url())
    yield store
    store.close()


@pytest.fixture
def client(user_store: UserStore) -> Generator[TestClient, None, None]:
    """TestClient against the real app and routes, backed by an isolated store."""
    app.router.lifespan_context = _patch_lifespan(user_store)
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture
def register(client: TestClient) -> Callable[..., httpx.Response]:
    """POST /api/v1/auth/register with alice01 defaults; override any field by keyword."""

    def _register(**overrides) -> httpx.Response:
        body = {"username": "alice01", "email": "alice@example.com", "password": "secret1"}
        body.update(overrides)
        return client.post("/api/v1/auth/register", json=body)

    return _register


@pytest.fixture
def lenient_client(user_store: UserStore) -> Generator[TestClient, None, None]:
    """Like client, but returns 500 responses instead of re-raising server exceptions."""
    app.router.lifespan_context = _patch_lifespan(user_store)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
