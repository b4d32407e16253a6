"""Endpoints for reviews of services"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.auth import get_current_user
from app.core.dependencies import get_service_review_service
from app.schemas.review import (
    RatingStats,
    ServiceReviewCreate,
    ServiceReviewInDB,
    ServiceReviewPage,
    ServiceReviewSubmitResult,
)
from app.schemas.user import UserInDB
from app.services.review_service import ServiceReviewService

service_reviews_router = APIRouter(prefix="/services")


@service_reviews_router.post(
    "/{service_id}/reviews",
    response_model=ServiceReviewSubmitResult,
    status_code=status.HTTP_201_CREATED,
    summary="Review a service",
    description="Creates the caller's review (201) or overwrites their earlier one (200).",
)
async def submit_service_review(
    service_id: UUID,
    data: ServiceReviewCreate,
    response: Response,
    user: UserInDB = Depends(get_current_user),
    service: ServiceReviewService = Depends(get_service_review_service),
):
    result = service.submit_review(user.id, service_id, data.rating, data.comment)
    if result.is_update:
        response.status_code = status.HTTP_200_OK
    return result


@service_reviews_router.get(
    "/{service_id}/reviews", response_model=ServiceReviewPage, summary="List reviews of a service"
)
async def list_service_reviews(
    service_id: UUID,
    page: int = Query(1),
    limit: int = Query(10),
    service: ServiceReviewService = Depends(get_service_review_service),
):
    return service.list_for_service(service_id, page, limit)


@service_reviews_router.get(
    "/{service_id}/reviews/stats", response_model=RatingStats, summary="Rating statistics of a service"
)
async def service_review_stats(
    service_id: UUID,
    service: ServiceReviewService = Depends(get_service_review_service),
):
    return service.stats_for(service_id)


@service_reviews_router.delete(
    "/reviews/{review_id}", response_model=ServiceReviewInDB, summary="Delete own service review"
)
async def delete_service_review(
    review_id: UUID,
    user: UserInDB = Depends(get_current_user),
    service: ServiceReviewService = Depends(get_service_review_service),
):
    return service.delete_review(review_id, user.id)
