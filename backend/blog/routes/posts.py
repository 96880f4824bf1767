"""
Blog Backend — Post Route Handlers
===================================

What:  HTTP surface of the posts resource.
How:   Bodies are parsed into PostCreate / PostUpdate, handed to PostService,
       and the service's exceptions become 404/422 via the global handlers.

    GET    /api/posts/        → 200 envelope {uri, methods, data}
    POST   /api/posts/        → 201 empty | 422
    GET    /api/posts/{id}/   → 200 post | 404
    PATCH  /api/posts/{id}/   → 204 empty | 422
    DELETE /api/posts/{id}/   → 204 empty
"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blog.database import get_db_session
from blog.routes import parse_resource_id
from blog.schemas.common import RESOURCE_METHODS, MessageResponse
from blog.schemas.post import PostCreate, PostListResponse, PostResponse, PostUpdate
from blog.services.post_service import post_service

router = APIRouter(prefix="/api/posts", tags=["Posts"])


@router.get(
    "/",
    name="list_posts",
    response_model=PostListResponse,
    summary="List all posts, newest first",
)
async def list_posts(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> PostListResponse:
    posts = await post_service.list_posts(db)
    return PostListResponse(
        uri=str(request.url_for("list_posts")),
        methods=RESOURCE_METHODS,
        data=posts,
    )


@router.post(
    "/",
    status_code=201,
    response_class=Response,
    responses={
        201: {"description": "Post created (empty body)"},
        422: {"description": "Missing field or unknown category", "model": MessageResponse},
    },
    summary="Create a post",
)
async def create_post(
    payload: PostCreate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await post_service.create_post(db, payload)
    return Response(status_code=201)


@router.get(
    "/{post_id}/",
    name="get_post",
    response_model=PostResponse,
    responses={404: {"description": "Post not found", "model": MessageResponse}},
    summary="Get a single post",
)
async def get_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.get_post(db, parse_resource_id(post_id))


@router.patch(
    "/{post_id}/",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Post updated, or no such post (empty body)"},
        422: {"description": "Nothing to update or unknown category", "model": MessageResponse},
    },
    summary="Partially update a post",
)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await post_service.update_post(db, parse_resource_id(post_id), payload)
    return Response(status_code=204)


@router.delete(
    "/{post_id}/",
    status_code=204,
    response_class=Response,
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await post_service.delete_post(db, parse_resource_id(post_id))
    return Response(status_code=204)
