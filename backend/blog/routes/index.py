"""
Blog Backend — API Index Route
===============================

GET /api/ advertises the absolute URIs of the two collections,
built from the host the client used to reach us.
"""

from fastapi import APIRouter, Request

from blog.schemas.common import IndexResponse

router = APIRouter(prefix="/api", tags=["Index"])


@router.get(
    "/",
    name="index",
    response_model=IndexResponse,
    summary="List the API collections",
)
async def index(request: Request) -> IndexResponse:
    return IndexResponse(
        posts=str(request.url_for("list_posts")),
        categories=str(request.url_for("list_categories")),
    )
