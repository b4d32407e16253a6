# app/db/repositories/review_repository.py
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.db.models.review import Review, ServiceReview


class ReviewRepository:
    """
    Repository for reviews keyed by (reviewer, target). The target is the
    reviewed user here; ServiceReviewRepository swaps in the reviewed service.
    """

    model = Review
    target_field = "reviewee_id"

    def __init__(self, db_session: Session):
        self.db_session = db_session

    @property
    def target_column(self):
        return getattr(self.model, self.target_field)

    def get_by_id(self, review_id: UUID):
        """Get review by ID"""
        return self.db_session.query(self.model).filter(self.model.id == review_id).first()

    def get_by_pair(self, reviewer_id: UUID, target_id: UUID):
        """Get the single review a reviewer left for a target, if any"""
        return (
            self.db_session.query(self.model)
            .filter(self.model.reviewer_id == reviewer_id, self.target_column == target_id)
            .first()
        )

    def create(self, reviewer_id: UUID, target_id: UUID, rating: int, comment: Optional[str]):
        """Create a new review"""
        db_review = self.model(
            reviewer_id=reviewer_id,
            rating=rating,
            comment=comment,
            **{self.target_field: target_id},
        )

        self.db_session.add(db_review)
        self.db_session.commit()
        self.db_session.refresh(db_review)

        return db_review

    def update(self, db_review, rating: int, comment: Optional[str]):
        """Overwrite rating and comment of an existing review"""
        db_review.rating = rating
        db_review.comment = comment
        db_review.updated_at = datetime.now(timezone.utc)

        self.db_session.commit()
        self.db_session.refresh(db_review)

        return db_review

    def delete(self, db_review) -> None:
        self.db_session.delete(db_review)
        self.db_session.commit()

    def rating_counts_for_target(self, target_id: UUID) -> Dict[int, int]:
        """Number of reviews per rating value received by a target"""
        return self._rating_counts(self.target_column == target_id)

    def rating_counts_by_reviewer(self, reviewer_id: UUID) -> Dict[int, int]:
        """Number of reviews per rating value written by a reviewer"""
        return self._rating_counts(self.model.reviewer_id == reviewer_id)

    def list_for_target(self, target_id: UUID, offset: int, limit: int) -> Tuple[List, int]:
        """Page of reviews received by a target, newest first, with the total count"""
        return self._page(self.target_column == target_id, offset, limit)

    def list_by_reviewer(self, reviewer_id: UUID, offset: int, limit: int) -> Tuple[List, int]:
        """Page of reviews written by a reviewer, newest first, with the total count"""
        return self._page(self.model.reviewer_id == reviewer_id, offset, limit)

    def _rating_counts(self, criterion) -> Dict[int, int]:
        rows = (
            self.db_session.query(self.model.rating, func.count(self.model.id))
            .filter(criterion)
            .group_by(self.model.rating)
            .all()
        )
        return {rating: count for rating, count in rows}

    def _page(self, criterion, offset: int, limit: int) -> Tuple[List, int]:
        total = self.db_session.query(func.count(self.model.id)).filter(criterion).scalar()
        items = (
            self.db_session.query(self.model)
            .filter(criterion)
            .order_by(self.model.created_at.desc(), self.model.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total


class ServiceReviewRepository(ReviewRepository):
    """Repository for reviews of services"""

    model = ServiceReview
    target_field = "service_id"
