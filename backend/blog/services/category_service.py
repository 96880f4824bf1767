"""
Blog Backend — Category Service (Data Access Layer)
====================================================

What:  CRUD operations on the `categories` table, with embedded posts on reads.
How:   Stateless service; every call receives the request's AsyncSession.

Embedded posts:
    Each category read issues one dependent, parameterized query for the
    posts whose category_id matches, newest first. Listing N categories
    therefore runs N+1 queries; the blog's data volume keeps that cheap.

Deleting a category that still has posts violates the ON DELETE RESTRICT
foreign key; the store refuses and the service raises ConflictError (409).
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from blog.models.category import Category
from blog.models.post import Post
from blog.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from blog.schemas.post import PostResponse

logger = logging.getLogger(__name__)


class CategoryService:
    """Data access for categories."""

    async def _posts_for(self, db: AsyncSession, category_id: int) -> List[PostResponse]:
        result = await db.execute(
            select(Post)
            .where(Post.category_id == category_id)
            .order_by(desc(Post.created_at), desc(Post.id))
        )
        return [PostResponse.model_validate(post) for post in result.scalars().all()]

    async def _to_response(self, db: AsyncSession, category: Category) -> CategoryResponse:
        return CategoryResponse(
            id=category.id,
            title=category.title,
            posts=await self._posts_for(db, category.id),
            created_at=category.created_at,
        )

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        """
        Return all categories newest first, each with its posts attached.
        """
        try:
            result = await db.execute(
                select(Category).order_by(desc(Category.created_at), desc(Category.id))
            )
            categories = list(result.scalars().all())
            return [await self._to_response(db, category) for category in categories]
        except SQLAlchemyError as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve categories.",
                context={"error_type": type(e).__name__},
            )

    async def get_category(
        self, db: AsyncSession, category_id: Optional[int]
    ) -> CategoryResponse:
        """
        Retrieve a single category with its posts.

        Raises:
            NotFoundError: No category with this ID, or a None ID (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        if category_id is None:
            raise NotFoundError(resource="category", resource_id=None)

        try:
            result = await db.execute(select(Category).where(Category.id == category_id))
            category = result.scalar_one_or_none()
            if category is None:
                raise NotFoundError(resource="category", resource_id=category_id)
            return await self._to_response(db, category)
        except NotFoundError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching category %s: %s", category_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the category.",
                context={"category_id": category_id},
            )

    async def create_category(self, db: AsyncSession, payload: CategoryCreate) -> int:
        """Insert a new category and return its server-assigned ID."""
        if not payload.title:
            raise ValidationError(message="title is required", field="title")

        category = Category(title=payload.title)
        try:
            db.add(category)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating category: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the category.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Category %s created", category.id)
        return category.id

    async def update_category(
        self, db: AsyncSession, category_id: Optional[int], payload: CategoryUpdate
    ) -> None:
        """Rename a category. A missing or None ID touches no rows and is not an error."""
        if not payload.title:
            raise ValidationError(
                message="title is required",
                field="title",
                context={"category_id": category_id},
            )

        if category_id is None:
            logger.info("Category update skipped, id is not an integer")
            return

        try:
            result = await db.execute(
                update(Category)
                .where(Category.id == category_id)
                .values(title=payload.title)
            )
        except SQLAlchemyError as e:
            logger.error(
                "Database error updating category %s: %s", category_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message="Could not update the category.",
                context={"category_id": category_id},
            )

        logger.info("Category %s updated, %d row(s)", category_id, result.rowcount)

    async def delete_category(self, db: AsyncSession, category_id: Optional[int]) -> None:
        """
        Delete a category. A missing or None ID is not an error.

        Raises:
            ConflictError: Posts still reference the category (→ 409)
        """
        if category_id is None:
            logger.info("Category delete skipped, id is not an integer")
            return

        try:
            result = await db.execute(delete(Category).where(Category.id == category_id))
        except IntegrityError as e:
            logger.warning("Refused to delete category %s with posts: %s", category_id, str(e))
            raise ConflictError(
                message="Category still has posts",
                context={"category_id": category_id},
            )
        except SQLAlchemyError as e:
            logger.error(
                "Database error deleting category %s: %s", category_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message="Could not delete the category.",
                context={"category_id": category_id},
            )

        logger.info("Category %s deleted, %d row(s)", category_id, result.rowcount)


category_service = CategoryService()
