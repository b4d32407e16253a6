"""Endpoints for reviews between users"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.auth import get_current_user
from app.core.dependencies import get_review_service
from app.schemas.review import RatingStats, ReviewCreate, ReviewInDB, ReviewPage, ReviewSubmitResult
from app.schemas.user import UserInDB
from app.services.review_service import ReviewService

reviews_router = APIRouter(
    prefix="/reviews",
    responses={
        404: {"description": "Not found"},
        500: {"description": "Internal server error"},
    },
)


@reviews_router.post(
    "",
    response_model=ReviewSubmitResult,
    status_code=status.HTTP_201_CREATED,
    summary="Review a user",
    description="Creates the caller's review (201) or overwrites their earlier one (200).",
)
async def submit_review(
    data: ReviewCreate,
    response: Response,
    user: UserInDB = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    result = service.submit_review(user.id, data.reviewee_id, data.rating, data.comment)
    if result.is_update:
        response.status_code = status.HTTP_200_OK
    return result


@reviews_router.get("/stats/{target_id}", response_model=RatingStats, summary="Rating statistics of a user")
async def review_stats(
    target_id: UUID,
    service: ReviewService = Depends(get_review_service),
):
    return service.stats_for(target_id)


@reviews_router.get("/given/{user_id}", response_model=ReviewPage, summary="Reviews written by a user")
async def reviews_given(
    user_id: UUID,
    page: int = Query(1),
    limit: int = Query(10),
    service: ReviewService = Depends(get_review_service),
):
    return service.list_given(user_id, page, limit)


@reviews_router.get("/received/{user_id}", response_model=ReviewPage, summary="Reviews a user received")
async def reviews_received(
    user_id: UUID,
    page: int = Query(1),
    limit: int = Query(10),
    service: ReviewService = Depends(get_review_service),
):
    return service.list_received(user_id, page, limit)


@reviews_router.get("/{review_id}", response_model=ReviewInDB, summary="Get review by ID")
async def get_review(
    review_id: UUID,
    service: ReviewService = Depends(get_review_service),
):
    return service.get_review(review_id)


@reviews_router.delete("/{review_id}", response_model=ReviewInDB, summary="Delete own review")
async def delete_review(
    review_id: UUID,
    user: UserInDB = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    return service.delete_review(review_id, user.id)
