"""
Blog Backend — Category Route Handlers
=======================================

    GET    /api/categories/        → 200 envelope, posts embedded
    POST   /api/categories/        → 201 empty | 422
    GET    /api/categories/{id}/   → 200 category | 404
    PATCH  /api/categories/{id}/   → 204 empty | 422
    DELETE /api/categories/{id}/   → 204 empty | 409 while posts reference it
"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blog.database import get_db_session
from blog.routes import parse_resource_id
from blog.schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)
from blog.schemas.common import RESOURCE_METHODS, MessageResponse
from blog.services.category_service import category_service

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get(
    "/",
    name="list_categories",
    response_model=CategoryListResponse,
    summary="List all categories with their posts",
)
async def list_categories(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryListResponse:
    categories = await category_service.list_categories(db)
    return CategoryListResponse(
        uri=str(request.url_for("list_categories")),
        methods=RESOURCE_METHODS,
        data=categories,
    )


@router.post(
    "/",
    status_code=201,
    response_class=Response,
    responses={
        201: {"description": "Category created (empty body)"},
        422: {"description": "Missing title", "model": MessageResponse},
    },
    summary="Create a category",
)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await category_service.create_category(db, payload)
    return Response(status_code=201)


@router.get(
    "/{category_id}/",
    name="get_category",
    response_model=CategoryResponse,
    responses={404: {"description": "Category not found", "model": MessageResponse}},
    summary="Get a single category with its posts",
)
async def get_category(
    category_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    return await category_service.get_category(db, parse_resource_id(category_id))


@router.patch(
    "/{category_id}/",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Category renamed, or no such category (empty body)"},
        422: {"description": "Missing title", "model": MessageResponse},
    },
    summary="Rename a category",
)
async def update_category(
    category_id: str,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await category_service.update_category(db, parse_resource_id(category_id), payload)
    return Response(status_code=204)


@router.delete(
    "/{category_id}/",
    status_code=204,
    response_class=Response,
    responses={409: {"description": "Category still has posts", "model": MessageResponse}},
    summary="Delete a category",
)
async def delete_category(
    category_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await category_service.delete_category(db, parse_resource_id(category_id))
    return Response(status_code=204)
