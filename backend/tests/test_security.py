"""Tests for token helpers and the caller dependency."""

from datetime import timedelta

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from api.deps import get_current_caller, get_db
from core import ACCESS_TOKEN_TYPE, create_access_token, decode_token
from core.config import settings
from db.session import async_engine


def _build_request(
    *,
    authorization: str | None = None,
    cookie_header: str | None = None,
) -> Request:
    headers: list[tuple[bytes, bytes]] = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("ascii")))
    if cookie_header is not None:
        headers.append((b"cookie", cookie_header.encode("ascii")))
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": headers,
        "query_string": b"",
    }
    return Request(scope)


def test_access_token_round_trips_subject():
    payload = decode_token(create_access_token("caller-1"))

    assert payload["sub"] == "caller-1"
    assert payload["type"] == ACCESS_TOKEN_TYPE
    assert payload["exp"] > payload["iat"]


def test_decode_token_rejects_tampered_signature(monkeypatch):
    token = create_access_token("caller-1")
    monkeypatch.setattr(settings, "jwt_secret_key", "another-secret")

    with pytest.raises(ValueError):
        decode_token(token)


def test_decode_token_rejects_expired_token():
    token = create_access_token("caller-1", expires_delta=timedelta(seconds=-1))

    with pytest.raises(ValueError):
        decode_token(token)


@pytest.mark.asyncio
async def test_current_caller_prefers_bearer_header():
    request = _build_request(
        authorization=f"Bearer {create_access_token('header-caller')}",
        cookie_header=f"access_token={create_access_token('cookie-caller')}",
    )

    assert await get_current_caller(request) == "header-caller"


@pytest.mark.asyncio
async def test_current_caller_falls_back_to_cookie():
    request = _build_request(
        authorization="Basic abc",
        cookie_header=f"access_token={create_access_token('cookie-caller')}",
    )

    assert await get_current_caller(request) == "cookie-caller"


@pytest.mark.asyncio
async def test_current_caller_requires_token():
    with pytest.raises(HTTPException) as exc_info:
        await get_current_caller(_build_request())

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Not authenticated"


@pytest.mark.asyncio
async def test_current_caller_rejects_blank_subject():
    request = _build_request(authorization=f"Bearer {create_access_token('   ')}")

    with pytest.raises(HTTPException) as exc_info:
        await get_current_caller(request)

    assert exc_info.value.detail == "Invalid token subject"


@pytest.mark.asyncio
async def test_current_caller_rejects_unencodable_subject():
    request = _build_request(authorization="Bearer " + create_access_token("fan-\ud800"))

    with pytest.raises(HTTPException) as exc_info:
        await get_current_caller(request)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid token subject"


@pytest.mark.asyncio
async def test_get_db_yields_application_session():
    sessions = get_db()
    session = await anext(sessions)

    assert isinstance(session, AsyncSession)
    assert session.bind is async_engine
    await sessions.aclose()
