"""
Postboard Backend — Post Service
==================================

What:  The post query set: create, get, list (optionally paged), update, delete.
Why:   Encapsulates SQL and the ownership policy, independent of HTTP.
How:   One statement per method on the request's AsyncSession. Writes commit
       immediately; there are no multi-statement transactions.

Statements:
    create     INSERT INTO post (user_id, title, content, created_at) ... RETURNING *
    get        SELECT * FROM post WHERE id = :id
    list_posts SELECT * FROM post ORDER BY created_at DESC, id DESC [LIMIT :size OFFSET :offset]
    update     UPDATE post SET ... WHERE id = :id [AND user_id = :user_id] RETURNING *
    delete     DELETE FROM post WHERE id = :id [AND user_id = :user_id] RETURNING id

Ownership policy:
    With enforce_ownership=True the bracketed `user_id` predicate is part of
    update/delete. A caller who does not own the post matches zero rows and
    gets NotFoundError, exactly like a missing post. With False the predicate
    is dropped and any caller can mutate any post by id.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, desc, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.exceptions import DatabaseError, NotFoundError, ValidationError
from postboard.models.post import Post
from postboard.schemas.post import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

logger = logging.getLogger(__name__)


class PostService:
    """Query layer for the `post` table."""

    def __init__(self, enforce_ownership: bool = True):
        self.enforce_ownership = enforce_ownership

    async def create(self, db: AsyncSession, user_id: int, title: str, content: str) -> Post:
        """
        Insert a post owned by `user_id`.

        Raises:
            ValidationError: `user_id` does not reference an existing user
            DatabaseError: any other store failure
        """
        stmt = (
            insert(Post)
            .values({Post.user_id: user_id, Post.title: title, Post.content: content})
            .returning(Post)
        )
        try:
            result = await db.execute(stmt)
            post = result.scalar_one()
            await db.commit()
        except IntegrityError:
            logger.warning("Post rejected: owner %d does not exist", user_id)
            raise ValidationError(
                message=f"user_id {user_id} does not reference an existing user",
                field="user_id",
            )
        except SQLAlchemyError as e:
            logger.error("Database error creating post: %s", str(e))
            raise DatabaseError(
                message="Failed to create post. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Post %d created by user %d", post.id, user_id)
        return post

    async def get(self, db: AsyncSession, post_id: int) -> Post:
        """
        Raises:
            NotFoundError: no post has this id
        """
        try:
            result = await db.execute(select(Post).where(Post.id == post_id))
            post = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": post_id},
            )

        if post is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        return post

    async def list_posts(
        self,
        db: AsyncSession,
        page_id: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> List[Post]:
        """
        List posts newest first.

        Paging switches on when either argument is given; the other falls back
        to page 1 / DEFAULT_PAGE_SIZE. A page past the end is an empty list.

        Raises:
            ValidationError: page_id < 1 or page_size outside 1..MAX_PAGE_SIZE
        """
        query = select(Post).order_by(desc(Post.created_at), desc(Post.id))

        if page_id is not None or page_size is not None:
            page_id = 1 if page_id is None else page_id
            page_size = DEFAULT_PAGE_SIZE if page_size is None else page_size
            if page_id < 1:
                raise ValidationError(message="page_id must be at least 1", field="page_id")
            if not 1 <= page_size <= MAX_PAGE_SIZE:
                raise ValidationError(
                    message=f"page_size must be between 1 and {MAX_PAGE_SIZE}",
                    field="page_size",
                )
            query = query.limit(page_size).offset((page_id - 1) * page_size)

        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to retrieve posts. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update(
        self,
        db: AsyncSession,
        post_id: int,
        user_id: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Post:
        """
        Change title and/or content of a post.

        Raises:
            ValidationError: neither title nor content given
            NotFoundError: no row matched (missing, or not owned by user_id)
        """
        values = {}
        if title is not None:
            values[Post.title] = title
        if content is not None:
            values[Post.content] = content
        if not values:
            raise ValidationError(message="Nothing to update: provide title or content")

        stmt = update(Post).where(Post.id == post_id)
        if self.enforce_ownership:
            stmt = stmt.where(Post.user_id == user_id)
        stmt = stmt.values(values).returning(Post)

        try:
            result = await db.execute(stmt)
            post = result.scalar_one_or_none()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Failed to update post. Please try again.",
                context={"post_id": post_id},
            )

        if post is None:
            logger.warning("Update of post %d by user %d matched no row", post_id, user_id)
            raise NotFoundError(resource="post", resource_id=str(post_id))

        logger.info("Post %d updated by user %d", post_id, user_id)
        return post

    async def delete(self, db: AsyncSession, post_id: int, user_id: int) -> None:
        """
        Raises:
            NotFoundError: no row matched (missing, or not owned by user_id)
        """
        stmt = delete(Post).where(Post.id == post_id)
        if self.enforce_ownership:
            stmt = stmt.where(Post.user_id == user_id)
        stmt = stmt.returning(Post.id)

        try:
            result = await db.execute(stmt)
            deleted_id = result.scalar_one_or_none()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Failed to delete post. Please try again.",
                context={"post_id": post_id},
            )

        if deleted_id is None:
            logger.warning("Delete of post %d by user %d matched no row", post_id, user_id)
            raise NotFoundError(resource="post", resource_id=str(post_id))

        logger.info("Post %d deleted by user %d", post_id, user_id)
