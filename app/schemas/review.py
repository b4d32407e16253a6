# app/schemas/review.py
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.common import Pagination


class ReviewCreate(BaseModel):
    """Submission payload for a user review; the reviewer is the caller"""
    reviewee_id: UUID
    rating: int = Field(..., ge=1, le=5, description="Rating 1-5")
    comment: Optional[str] = Field(None, max_length=1000)


class ServiceReviewCreate(BaseModel):
    """Submission payload for a service review; the service comes from the path"""
    rating: int = Field(..., ge=1, le=5, description="Rating 1-5")
    comment: Optional[str] = Field(None, max_length=1000)


class ReviewInDB(BaseModel):
    id: UUID
    reviewer_id: UUID
    reviewee_id: UUID
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ServiceReviewInDB(BaseModel):
    id: UUID
    reviewer_id: UUID
    service_id: UUID
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ReviewSubmitResult(BaseModel):
    review: ReviewInDB
    is_update: bool


class ServiceReviewSubmitResult(BaseModel):
    review: ServiceReviewInDB
    is_update: bool


class RatingStats(BaseModel):
    """Aggregate over a set of ratings; average is 0.0 when count is 0"""
    count: int
    average: float
    distribution: Dict[int, int]


class ReviewPage(BaseModel):
    items: List[ReviewInDB]
    pagination: Pagination


class ServiceReviewPage(BaseModel):
    items: List[ServiceReviewInDB]
    pagination: Pagination
