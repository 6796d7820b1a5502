"""
api/routes/v1/auth.py -- Registration, login, and token verification endpoints.

Routes:
  POST /api/v1/auth/register   -- create an account; 201 with token
  POST /api/v1/auth/login      -- username-or-email + password; 200 with token
  GET  /api/v1/auth/verify     -- validate a Bearer token; 200 with the user

The three handlers are independent: none calls another, and each reads the
store from app.state (published by the lifespan in api/main.py).

Failures are raised as auth.errors.AuthError subclasses and rendered into the
shared ErrorResponse envelope by the exception handler in api/main.py.
Malformed JSON bodies are not caught here -- they surface as a 500.

Security:
  authenticate_user() provides timing equalization -- use it, never inline.
  Login failures share one code and message whatever the cause.
  Cache-Control: no-store on every successful response (tokens and profiles).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from api.models import AuthResponse, LoginRequest, PublicUser, VerifyResponse
from auth.errors import Conflict, InvalidCredentials, Unauthorized, UserNotFound, ValidationFailed
from auth.models import User
from auth.store import UserStore
from auth.tokens import authenticate_user, bearer_token, create_access_token, decode_access_token, hash_password
from auth.validation import validate_registration

logger = logging.getLogger("authgate.api.auth")

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


async def json_body(request: Request) -> dict:
    """Parse the request body as a JSON object.

    A body that is not valid JSON raises json.JSONDecodeError, which the
    malformed-JSON handler in api/main.py turns into a 500. Valid JSON that
    is not an object is a client error.
    """
    payload = await request.json()
    if not isinstance(payload, dict):
        raise ValidationFailed("Request body must be a JSON object.", code="invalid_body")
    return payload


def _token_response(status_code: int, message: str, token: str, user: User) -> JSONResponse:
    resp = JSONResponse(
        status_code=status_code,
        content=AuthResponse(message=message, token=token, user=PublicUser.from_user(user)).model_dump(by_alias=True),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


@router.post("/auth/register", response_model=AuthResponse, status_code=201)
def register(
    payload: dict = Depends(json_body),
    user_store: UserStore = Depends(get_user_store),
) -> JSONResponse:
    """Create a new account and return it with a signed token.

    Validation runs in a fixed order (see auth.validation); the first failing
    check decides the 400. Duplicates are reported separately for username and
    email. The UNIQUE constraints catch a concurrent registration that slips
    between the lookup and the insert.
    """
    validate_registration(payload)
    username: str = payload["username"]
    email: str = payload["email"]

    if user_store.get_by_username(username) is not None:
        raise Conflict("Username is already taken.", code="username_taken")
    if user_store.get_by_email(email) is not None:
        raise Conflict("Email is already registered.", code="email_taken")

    user = User(username=username, email=email, hashed_password=hash_password(payload["password"]))
    try:
        user_store.create_user(user)
    except IntegrityError as exc:
        raise Conflict("Username or email is already registered.") from exc

    logger.info("Registered user %s (%s)", user.username, user.id)
    return _token_response(201, "Registration successful.", create_access_token(user), user)


@router.post("/auth/login", response_model=AuthResponse)
def login(
    payload: dict = Depends(json_body),
    user_store: UserStore = Depends(get_user_store),
) -> JSONResponse:
    """Authenticate with username (or email) and password.

    Returns the same 401 for an unknown account and a wrong password so the
    response never reveals whether an account exists. On success last_login
    is stamped in a separate write before the token is issued.
    """
    try:
        body = LoginRequest.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailed("Username and password must be strings.", code="missing_credentials") from exc
    if not body.username or not body.password:
        raise ValidationFailed("Username and password are required.", code="missing_credentials")

    user = authenticate_user(user_store, body.username, body.password)
    if user is None:
        logger.info("Failed login for %r", body.username)
        raise InvalidCredentials()

    user.last_login = user_store.update_last_login(user.id)
    logger.info("User %s logged in", user.username)
    return _token_response(200, "Login successful.", create_access_token(user), user)


@router.get("/auth/verify", response_model=VerifyResponse)
def verify(
    response: Response,
    authorization: str | None = Header(default=None),
    user_store: UserStore = Depends(get_user_store),
) -> VerifyResponse:
    """Validate a Bearer token and return the user it identifies.

    A missing header, a non-Bearer scheme, a bad signature and an expired
    token all produce the same 401. A valid token for a user that no longer
    exists is a 404.
    """
    token = bearer_token(authorization)
    if token is None:
        raise Unauthorized()
    payload = decode_access_token(token)
    if payload is None:
        raise Unauthorized()

    user = user_store.get_by_id(payload["sub"])
    if user is None:
        raise UserNotFound()
    response.headers["Cache-Control"] = "no-store"
    return VerifyResponse(valid=True, user=PublicUser.from_user(user))
