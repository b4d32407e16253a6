"""Service listing endpoints"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.core.auth import ensure_owner_or_admin, get_current_user, require_provider
from app.core.dependencies import get_service_catalog_service
from app.core.errors import ServiceNotFoundError
from app.schemas.service import ServiceCreate, ServiceFilters, ServiceInDB, ServiceResponse, ServiceUpdate
from app.schemas.user import UserInDB
from app.services.service_catalog_service import ServiceCatalogService

services_router = APIRouter(
    prefix="/services",
    responses={
        404: {"description": "Not found"},
        500: {"description": "Internal server error"},
    },
)


def _get_owned_service(
    service: ServiceCatalogService, service_id: UUID, user: UserInDB
) -> ServiceInDB:
    existing = service.get_service(service_id)
    if not existing:
        raise ServiceNotFoundError(service_id)
    ensure_owner_or_admin(user, existing.provider_id)
    return existing


@services_router.get(
    "",
    response_model=List[ServiceResponse],
    summary="List services",
    description="Newest first. Only active services unless is_active is given.",
)
async def list_services(
    provider_id: Optional[UUID] = Query(None),
    category_id: Optional[UUID] = Query(None),
    is_active: Optional[bool] = Query(True),
    skip: int = Query(0, ge=0),
    take: int = Query(10, ge=1),
    service: ServiceCatalogService = Depends(get_service_catalog_service),
):
    filters = ServiceFilters(
        provider_id=provider_id,
        category_id=category_id,
        is_active=is_active,
        skip=skip,
        take=take,
    )
    return service.list_services(filters)


@services_router.post(
    "",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create service",
)
async def create_service(
    data: ServiceCreate,
    user: UserInDB = Depends(require_provider),
    service: ServiceCatalogService = Depends(get_service_catalog_service),
):
    ensure_owner_or_admin(user, data.provider_id)
    return service.create_service(data)


@services_router.get("/{service_id}", response_model=ServiceResponse, summary="Get service by ID")
async def get_service(
    service_id: UUID,
    service: ServiceCatalogService = Depends(get_service_catalog_service),
):
    existing = service.get_service(service_id)
    if not existing:
        raise ServiceNotFoundError(service_id)
    return existing


@services_router.patch("/{service_id}", response_model=ServiceResponse, summary="Update service")
async def update_service(
    service_id: UUID,
    data: ServiceUpdate,
    user: UserInDB = Depends(get_current_user),
    service: ServiceCatalogService = Depends(get_service_catalog_service),
):
    _get_owned_service(service, service_id, user)
    return service.update_service(service_id, data)


@services_router.post(
    "/{service_id}/deactivate",
    response_model=ServiceResponse,
    summary="Deactivate service",
    description="Hide the service from active listings; its reviews are kept.",
)
async def deactivate_service(
    service_id: UUID,
    user: UserInDB = Depends(get_current_user),
    service: ServiceCatalogService = Depends(get_service_catalog_service),
):
    _get_owned_service(service, service_id, user)
    return service.deactivate_service(service_id)


@services_router.delete(
    "/{service_id}",
    response_model=ServiceResponse,
    summary="Delete service",
    description="Permanently delete a service without reviews.",
)
async def delete_service(
    service_id: UUID,
    user: UserInDB = Depends(get_current_user),
    service: ServiceCatalogService = Depends(get_service_catalog_service),
):
    _get_owned_service(service, service_id, user)
    return service.delete_service(service_id)
