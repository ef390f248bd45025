"""
Postboard Backend — Post Route Handlers
=========================================

What:  CRUD on /posts.
How:   Each handler binds and validates its input, optionally checks the
       bearer token against the body's user_id, then calls exactly one
       PostService operation.

Access rules:
    - Reads are public.
    - Create/update/delete require a bearer token whose subject equals the
      body's user_id (when AUTH_REQUIRED is on).
    - Update/delete additionally filter on user_id in SQL when
      ENFORCE_POST_OWNERSHIP is on; a non-owner gets 404.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.routes.deps import ensure_acting_user, get_current_user, get_post_service
from postboard.schemas.common import ErrorResponse
from postboard.schemas.post import (
    MAX_PAGE_SIZE,
    CreatePostRequest,
    DeletePostRequest,
    MessageResponse,
    PostResponse,
    UpdatePostRequest,
)
from postboard.security import TokenClaims
from postboard.services.post_service import PostService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])

_AUTH_RESPONSES = {
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
    403: {"description": "Token belongs to a different user", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    response_model=PostResponse,
    responses={
        400: {"description": "Invalid input or unknown owner", "model": ErrorResponse},
        **_AUTH_RESPONSES,
    },
    summary="Create a post",
)
async def create_post(
    body: CreatePostRequest,
    db: AsyncSession = Depends(get_db_session),
    posts: PostService = Depends(get_post_service),
    claims: Optional[TokenClaims] = Depends(get_current_user),
) -> PostResponse:
    ensure_acting_user(claims, body.user_id)
    post = await posts.create(db, user_id=body.user_id, title=body.title, content=body.content)
    return PostResponse.model_validate(post)


@router.get(
    "",
    response_model=List[PostResponse],
    responses={400: {"description": "Invalid paging parameters", "model": ErrorResponse}},
    summary="List posts, newest first",
    description=(
        "Without parameters returns every post. With page_id and/or page_size "
        "returns that page (page_size defaults to 10, page_id to 1). Pages past "
        "the end are empty."
    ),
)
async def list_posts(
    page_id: Optional[int] = Query(default=None, ge=1, description="1-based page number"),
    page_size: Optional[int] = Query(default=None, ge=1, le=MAX_PAGE_SIZE, description="Posts per page"),
    db: AsyncSession = Depends(get_db_session),
    posts: PostService = Depends(get_post_service),
) -> List[PostResponse]:
    rows = await posts.list_posts(db, page_id=page_id, page_size=page_size)
    return [PostResponse.model_validate(post) for post in rows]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses={
        400: {"description": "Invalid post ID", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Get a single post by ID",
)
async def get_post(
    post_id: int = Path(ge=1, description="Post ID"),
    db: AsyncSession = Depends(get_db_session),
    posts: PostService = Depends(get_post_service),
) -> PostResponse:
    post = await posts.get(db, post_id)
    return PostResponse.model_validate(post)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        404: {"description": "Post not found or not owned by user_id", "model": ErrorResponse},
        **_AUTH_RESPONSES,
    },
    summary="Update a post's title and/or content",
)
async def update_post(
    body: UpdatePostRequest,
    post_id: int = Path(ge=1, description="Post ID"),
    db: AsyncSession = Depends(get_db_session),
    posts: PostService = Depends(get_post_service),
    claims: Optional[TokenClaims] = Depends(get_current_user),
) -> PostResponse:
    ensure_acting_user(claims, body.user_id)
    post = await posts.update(
        db,
        post_id=post_id,
        user_id=body.user_id,
        title=body.title,
        content=body.content,
    )
    return PostResponse.model_validate(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        404: {"description": "Post not found or not owned by user_id", "model": ErrorResponse},
        **_AUTH_RESPONSES,
    },
    summary="Delete a post",
)
async def delete_post(
    body: DeletePostRequest,
    post_id: int = Path(ge=1, description="Post ID"),
    db: AsyncSession = Depends(get_db_session),
    posts: PostService = Depends(get_post_service),
    claims: Optional[TokenClaims] = Depends(get_current_user),
) -> MessageResponse:
    ensure_acting_user(claims, body.user_id)
    await posts.delete(db, post_id=post_id, user_id=body.user_id)
    return MessageResponse(message="Post deleted successfully")
