"""Post store endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from api.deps import get_post_store
from services import (
    AlreadyLikedError,
    CommentRecord,
    InvalidPostFieldError,
    NotLikedError,
    NotPostAuthorError,
    PostNotFoundError,
    PostRecord,
    PostStore,
    PostStoreError,
)

router = APIRouter(prefix="/posts", tags=["posts"])

ERROR_STATUS_CODES: tuple[tuple[type[PostStoreError], int], ...] = (
    (PostNotFoundError, status.HTTP_404_NOT_FOUND),
    (NotPostAuthorError, status.HTTP_403_FORBIDDEN),
    (InvalidPostFieldError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (AlreadyLikedError, status.HTTP_409_CONFLICT),
    (NotLikedError, status.HTTP_409_CONFLICT),
    (PostStoreError, status.HTTP_400_BAD_REQUEST),
)


def _http_error(exc: PostStoreError) -> HTTPException:
    """Translate a store failure; the first matching entry wins."""
    status_code = next(
        code for error_type, code in ERROR_STATUS_CODES if isinstance(exc, error_type)
    )
    return HTTPException(status_code=status_code, detail=exc.message)


class PostPayload(BaseModel):
    title: str
    content: str
    image: str


class CommentCreateRequest(BaseModel):
    content: str


class LikeCountResponse(BaseModel):
    likes: int


@router.get("", response_model=list[PostRecord])
async def list_posts(store: PostStore = Depends(get_post_store)) -> list[PostRecord]:
    return await store.list_posts()


@router.get("/liked", response_model=list[PostRecord])
async def list_liked_posts(
    store: PostStore = Depends(get_post_store),
) -> list[PostRecord]:
    return await store.get_liked_posts()


@router.get("/{post_id}", response_model=PostRecord)
async def get_post(
    post_id: str,
    store: PostStore = Depends(get_post_store),
) -> PostRecord:
    try:
        return await store.get_post(post_id)
    except PostStoreError as exc:
        raise _http_error(exc) from exc


@router.get("/{post_id}/comments", response_model=list[CommentRecord])
async def get_post_comments(
    post_id: str,
    store: PostStore = Depends(get_post_store),
) -> list[CommentRecord]:
    try:
        return await store.get_comments(post_id)
    except PostStoreError as exc:
        raise _http_error(exc) from exc


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PostRecord)
async def create_post(
    payload: PostPayload,
    store: PostStore = Depends(get_post_store),
) -> PostRecord:
    try:
        return await store.create_post(
            title=payload.title,
            content=payload.content,
            image=payload.image,
        )
    except PostStoreError as exc:
        raise _http_error(exc) from exc


@router.put("/{post_id}", response_model=PostRecord)
async def update_post(
    post_id: str,
    payload: PostPayload,
    store: PostStore = Depends(get_post_store),
) -> PostRecord:
    try:
        return await store.update_post(
            post_id,
            title=payload.title,
            content=payload.content,
            image=payload.image,
        )
    except PostStoreError as exc:
        raise _http_error(exc) from exc


@router.delete("/{post_id}", response_model=PostRecord)
async def delete_post(
    post_id: str,
    store: PostStore = Depends(get_post_store),
) -> PostRecord:
    try:
        return await store.delete_post(post_id)
    except PostStoreError as exc:
        raise _http_error(exc) from exc


@router.post(
    "/{post_id}/comments",
    status_code=status.HTTP_201_CREATED,
    response_model=CommentRecord,
)
async def create_comment(
    post_id: str,
    payload: CommentCreateRequest,
    store: PostStore = Depends(get_post_store),
) -> CommentRecord:
    try:
        return await store.add_comment(post_id, payload.content)
    except PostStoreError as exc:
        raise _http_error(exc) from exc


@router.post("/{post_id}/likes", response_model=LikeCountResponse)
async def like_post(
    post_id: str,
    store: PostStore = Depends(get_post_store),
) -> LikeCountResponse:
    try:
        return LikeCountResponse(likes=await store.like_post(post_id))
    except PostStoreError as exc:
        raise _http_error(exc) from exc


@router.delete("/{post_id}/likes", response_model=LikeCountResponse)
async def unlike_post(
    post_id: str,
    store: PostStore = Depends(get_post_store),
) -> LikeCountResponse:
    try:
        return LikeCountResponse(likes=await store.unlike_post(post_id))
    except PostStoreError as exc:
        raise _http_error(exc) from exc
