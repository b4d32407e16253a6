"""Category tree endpoints"""
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from app.core.auth import require_admin
from app.core.dependencies import get_category_service
from app.core.errors import CategoryNotFoundError, NotFoundError
from app.schemas.category import (
    CategoryCreate,
    CategoryFilters,
    CategoryHierarchy,
    CategoryInDB,
    CategoryOptions,
    CategoryResponse,
    CategoryUpdate,
)
from app.services.category_service import CategoryService

categories_router = APIRouter(
    prefix="/categories",
    responses={
        404: {"description": "Not found"},
        500: {"description": "Internal server error"},
    },
)


def category_options(
    include_children: bool = Query(True, description="Attach direct children"),
    include_parent: bool = Query(True, description="Attach the parent category"),
    include_services: bool = Query(False, description="Attach services in the category"),
) -> CategoryOptions:
    return CategoryOptions(
        include_children=include_children,
        include_parent=include_parent,
        include_services=include_services,
    )


@categories_router.get(
    "",
    response_model=List[CategoryResponse],
    summary="List categories",
    description="Every category, or only the direct children of parent_id when it is given.",
)
async def list_categories(
    parent_id: Optional[UUID] = Query(None, description="Only list children of this category"),
    options: CategoryOptions = Depends(category_options),
    service: CategoryService = Depends(get_category_service),
):
    data = options.model_dump()
    if parent_id is not None:
        data["parent_id"] = parent_id
    return service.list_categories(CategoryFilters(**data))


@categories_router.get("/roots", response_model=List[CategoryResponse], summary="List root categories")
async def list_root_categories(
    options: CategoryOptions = Depends(category_options),
    service: CategoryService = Depends(get_category_service),
):
    return service.get_root_categories(options)


@categories_router.get(
    "/search",
    response_model=List[CategoryResponse],
    summary="Search categories",
    description="Case-insensitive match on name, description and slug (at least 2 characters).",
)
async def search_categories(
    q: str = Query(..., description="Search term"),
    options: CategoryOptions = Depends(category_options),
    service: CategoryService = Depends(get_category_service),
):
    return service.search_categories(q, options)


@categories_router.get("/slug/{slug}", response_model=CategoryResponse, summary="Get category by slug")
async def get_category_by_slug(
    slug: str,
    options: CategoryOptions = Depends(category_options),
    service: CategoryService = Depends(get_category_service),
):
    category = service.get_by_slug(slug, options)
    if not category:
        raise NotFoundError(f"Category with slug '{slug}' not found")
    return category


@categories_router.get("/{category_id}", response_model=CategoryResponse, summary="Get category by ID")
async def get_category(
    category_id: UUID,
    options: CategoryOptions = Depends(category_options),
    service: CategoryService = Depends(get_category_service),
):
    category = service.get_category(category_id, options)
    if not category:
        raise CategoryNotFoundError(category_id)
    return category


@categories_router.get(
    "/{category_id}/hierarchy",
    response_model=CategoryHierarchy,
    summary="Get category hierarchy",
    description="Ancestors (root first), the category and its nested descendants.",
)
async def get_category_hierarchy(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
):
    hierarchy = service.get_category_hierarchy(category_id)
    if not hierarchy:
        raise CategoryNotFoundError(category_id)
    return hierarchy


@categories_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    dependencies=[Depends(require_admin)],
)
async def create_category(
    data: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    return service.create_category(data)


@categories_router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update category",
    dependencies=[Depends(require_admin)],
)
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    return service.update_category(category_id, data)


@categories_router.delete(
    "/{category_id}",
    response_model=CategoryInDB,
    summary="Delete category",
    description=(
        "Without force the category must have no children and no services. "
        "With force, children and services move up to the category's parent."
    ),
    dependencies=[Depends(require_admin)],
)
async def delete_category(
    category_id: UUID,
    force: bool = Query(False, description="Promote children and services instead of refusing"),
    service: CategoryService = Depends(get_category_service),
):
    return service.delete_category(category_id, force=force)
