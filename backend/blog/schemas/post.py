"""
Blog Backend — Post Request/Response Schemas
=============================================

What:  Pydantic models defining the JSON contract of /api/posts/.
Why:   FastAPI parses request bodies into these models and serializes
       responses from them; field order here is the field order on the wire.

Request models give every field a None default: "missing", null and "empty"
are the same thing for the presence checks in PostService.
Unknown keys (a client-sent id or created_at) are ignored.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """Body of POST /api/posts/. All three fields are required by the service."""
    title: Optional[str] = Field(default=None, description="Post title (non-empty)")
    body: Optional[str] = Field(default=None, description="Post body (non-empty)")
    category_id: Optional[int] = Field(
        default=None,
        description="ID of an existing category (non-zero)",
    )


class PostUpdate(BaseModel):
    """Body of PATCH /api/posts/{id}/. Empty or zero fields are left unchanged."""
    title: Optional[str] = Field(default=None, description="New title, or null/empty to keep")
    body: Optional[str] = Field(default=None, description="New body, or null/empty to keep")
    category_id: Optional[int] = Field(
        default=None,
        description="New category ID, or null/0 to keep",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """Full representation of a post, as returned by GET and embedded in categories."""
    id: int = Field(description="Server-assigned post identifier")
    title: str = Field(description="Post title")
    body: str = Field(description="Post body")
    category_id: Optional[int] = Field(default=None, description="Owning category ID")
    created_at: datetime = Field(description="When the post was created")

    model_config = {"from_attributes": True}


class PostListResponse(BaseModel):
    """Envelope returned by GET /api/posts/."""
    uri: str = Field(description="Absolute URI of the posts collection")
    methods: List[str] = Field(description="HTTP methods supported by the resource")
    data: List[PostResponse] = Field(description="All posts, newest first")
