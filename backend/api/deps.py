"""FastAPI dependencies shared by the API routers."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from core import ACCESS_TOKEN_TYPE, decode_token
from db.session import get_session
from models import MAX_CALLER_ID_LENGTH
from services import CallerIdentity, PostStore

ACCESS_COOKIE = "access_token"


def _credentials_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _extract_token(request: Request) -> str | None:
    authorization = request.headers.get("authorization")
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return request.cookies.get(ACCESS_COOKIE) or None


async def get_db() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


async def get_current_caller(request: Request) -> str:
    """Return the caller identifier carried by the access token."""
    token = _extract_token(request)
    if token is None:
        raise _credentials_error("Not authenticated")

    try:
        payload = decode_token(token)
    except ValueError as exc:
        raise _credentials_error("Invalid token") from exc

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise _credentials_error("Invalid token type")

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise _credentials_error("Invalid token subject")
    caller_id = subject.strip()
    if len(caller_id) > MAX_CALLER_ID_LENGTH:
        raise _credentials_error("Invalid token subject")
    try:
        caller_id.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise _credentials_error("Invalid token subject") from exc
    return caller_id


async def get_post_store(
    request: Request,
    session: AsyncSession = Depends(get_db),
    caller_id: str = Depends(get_current_caller),
) -> PostStore:
    return PostStore(
        session,
        identity=CallerIdentity(caller_id),
        clock=request.app.state.clock,
        write_lock=request.app.state.post_write_lock,
    )
