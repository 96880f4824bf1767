"""
Blog Backend — Post Service (Data Access Layer)
================================================

What:  CRUD operations on the `posts` table.
Why:   Keeps SQL and presence checks out of the route handlers.
How:   Stateless service; every call receives the request's AsyncSession.
       Writes are flushed immediately so constraint violations surface here,
       where they are translated into application exceptions.
Who:   Called by the /api/posts/ route handlers.

Error Handling Strategy:
    - Missing/empty/null required fields → ValidationError (before any SQL runs)
    - Unknown category_id (FK violation) → ValidationError
    - Lookup miss → NotFoundError
    - Anything else from SQLAlchemy → DatabaseError (details logged only)
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.exceptions import DatabaseError, NotFoundError, ValidationError
from blog.models.post import Post
from blog.schemas.post import PostCreate, PostResponse, PostUpdate

logger = logging.getLogger(__name__)


class PostService:
    """
    Data access for posts.

    Responsibilities:
        - list_posts(): every post, newest first
        - get_post(): single post with not-found handling
        - create_post() / update_post() / delete_post(): writes
    """

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """
        Return all posts ordered by created_at descending.

        An empty table yields an empty list, not an error.
        """
        try:
            result = await db.execute(
                select(Post).order_by(desc(Post.created_at), desc(Post.id))
            )
            return [PostResponse.model_validate(post) for post in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts.",
                context={"error_type": type(e).__name__},
            )

    async def get_post(self, db: AsyncSession, post_id: Optional[int]) -> PostResponse:
        """
        Retrieve a single post by ID.

        A None ID (unparseable path segment) is a miss like any other.

        Raises:
            NotFoundError: No post with this ID (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        if post_id is None:
            raise NotFoundError(resource="post", resource_id=None)

        try:
            result = await db.execute(select(Post).where(Post.id == post_id))
            post = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the post.",
                context={"post_id": post_id},
            )

        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)

        return PostResponse.model_validate(post)

    async def create_post(self, db: AsyncSession, payload: PostCreate) -> int:
        """
        Insert a new post and return its server-assigned ID.

        Requires a non-empty title and body and a non-zero category_id.
        The category reference itself is checked by the store (foreign key).
        """
        if not payload.title or not payload.body or not payload.category_id:
            raise ValidationError(
                message="title, body and category_id are required",
                context={
                    "title": bool(payload.title),
                    "body": bool(payload.body),
                    "category_id": payload.category_id,
                },
            )

        post = Post(
            title=payload.title,
            body=payload.body,
            category_id=payload.category_id,
        )
        try:
            db.add(post)
            await db.flush()  # Assigns the ID without committing
        except IntegrityError as e:
            logger.warning(
                "Rejected post referencing category %s: %s", payload.category_id, str(e)
            )
            raise ValidationError(
                message="category_id does not reference an existing category",
                field="category_id",
                context={"category_id": payload.category_id},
            )
        except SQLAlchemyError as e:
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the post.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Post %s created in category %s", post.id, post.category_id)
        return post.id

    async def update_post(
        self, db: AsyncSession, post_id: Optional[int], payload: PostUpdate
    ) -> None:
        """
        Partially update a post.

        Only non-empty (title, body) and non-zero (category_id) fields are
        written, all in one UPDATE statement; null counts as empty. Updating
        a missing or None ID touches no rows and is not an error.

        Raises:
            ValidationError: Every field empty, or unknown category_id (→ 422)
        """
        changes: Dict[str, Any] = {}
        if payload.title:
            changes["title"] = payload.title
        if payload.body:
            changes["body"] = payload.body
        if payload.category_id:
            changes["category_id"] = payload.category_id

        if not changes:
            raise ValidationError(
                message="At least one of title, body or category_id is required",
                context={"post_id": post_id},
            )

        if post_id is None:
            logger.info("Post update skipped, id is not an integer")
            return

        try:
            result = await db.execute(
                update(Post).where(Post.id == post_id).values(**changes)
            )
        except IntegrityError as e:
            logger.warning(
                "Rejected update of post %s to category %s: %s",
                post_id,
                payload.category_id,
                str(e),
            )
            raise ValidationError(
                message="category_id does not reference an existing category",
                field="category_id",
                context={"post_id": post_id, "category_id": payload.category_id},
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the post.",
                context={"post_id": post_id},
            )

        logger.info(
            "Post %s updated (%s), %d row(s)", post_id, ", ".join(changes), result.rowcount
        )

    async def delete_post(self, db: AsyncSession, post_id: Optional[int]) -> None:
        """Delete a post. A missing or None ID is not an error."""
        if post_id is None:
            logger.info("Post delete skipped, id is not an integer")
            return

        try:
            result = await db.execute(delete(Post).where(Post.id == post_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the post.",
                context={"post_id": post_id},
            )

        logger.info("Post %s deleted, %d row(s)", post_id, result.rowcount)


post_service = PostService()
