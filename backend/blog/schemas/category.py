"""
Blog Backend — Category Request/Response Schemas
=================================================

What:  Pydantic models defining the JSON contract of /api/categories/.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from blog.schemas.post import PostResponse


class CategoryCreate(BaseModel):
    """Body of POST /api/categories/."""
    title: Optional[str] = Field(default=None, description="Category title (non-empty)")


class CategoryUpdate(BaseModel):
    """Body of PATCH /api/categories/{id}/. Only the title can change."""
    title: Optional[str] = Field(default=None, description="New category title (non-empty)")


class CategoryResponse(BaseModel):
    """
    What:  Full representation of a category.
    Why:   `posts` is derived at read time: every post whose category_id is
           this category's id, newest first.
    """
    id: int = Field(description="Server-assigned category identifier")
    title: str = Field(description="Category title")
    posts: List[PostResponse] = Field(default_factory=list, description="Posts in this category")
    created_at: datetime = Field(description="When the category was created")


class CategoryListResponse(BaseModel):
    """Envelope returned by GET /api/categories/."""
    uri: str = Field(description="Absolute URI of the categories collection")
    methods: List[str] = Field(description="HTTP methods supported by the resource")
    data: List[CategoryResponse] = Field(description="All categories, newest first")
