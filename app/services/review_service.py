# app/services/review_service.py
"""
Services for reviews between users and reviews of services.

A reviewer has at most one review per target: submitting again overwrites
the rating and comment of the existing review.
"""
from typing import Optional
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.config import settings
from app.core.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    ReviewNotFoundError,
    ServiceNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from app.db.repositories.review_repository import ReviewRepository, ServiceReviewRepository
from app.db.repositories.service_repository import ServiceRepository
from app.db.repositories.user_repository import UserRepository
from app.schemas.common import Pagination
from app.schemas.review import (
    RatingStats,
    ReviewInDB,
    ReviewPage,
    ReviewSubmitResult,
    ServiceReviewInDB,
    ServiceReviewPage,
    ServiceReviewSubmitResult,
)
from app.services.notification_service import NotificationService
from app.services.user_service import UserService
from app.utils.ratings import compute_rating_stats, is_valid_rating

logger = logging.getLogger(__name__)


def _check_page(page: int, limit: int) -> int:
    """Validate 1-indexed paging arguments and return the row offset"""
    if page < 1:
        raise ValidationError("page must be at least 1")
    if not 1 <= limit <= settings.REVIEW_PAGE_MAX_LIMIT:
        raise ValidationError(f"limit must be between 1 and {settings.REVIEW_PAGE_MAX_LIMIT}")
    return (page - 1) * limit


class _ReviewWriter:
    """Upsert and delete flow shared by user and service reviews"""

    repository_class = ReviewRepository

    def __init__(self, db_session, notifier: Optional[NotificationService] = None):
        self.db_session = db_session
        self.review_repo = self.repository_class(db_session)
        self.user_repo = UserRepository(db_session)
        self.notifier = notifier or NotificationService(db_session)

    def _upsert(self, reviewer_id: UUID, target_id: UUID, rating: int, comment: Optional[str]):
        """
        Returns:
            Tuple of (review row, is_update)
        """
        existing = self.review_repo.get_by_pair(reviewer_id, target_id)
        if existing:
            return self.review_repo.update(existing, rating, comment), True

        try:
            return self.review_repo.create(reviewer_id, target_id, rating, comment), False
        except IntegrityError:
            # A concurrent submit for the same pair won the insert
            self.db_session.rollback()
            existing = self.review_repo.get_by_pair(reviewer_id, target_id)
            if not existing:
                raise ConflictError("Review could not be saved; referenced records changed")
            logger.info(f"Review insert raced for reviewer {reviewer_id}; updating instead")
            return self.review_repo.update(existing, rating, comment), True

    def _require_reviewer(self, reviewer_id: UUID):
        reviewer = self.user_repo.get_by_id(reviewer_id)
        if not reviewer:
            raise UserNotFoundError(reviewer_id)
        return reviewer

    def _get_owned(self, review_id: UUID, requester_id: UUID):
        review = self.review_repo.get_by_id(review_id)
        if not review:
            raise ReviewNotFoundError(review_id)
        if review.reviewer_id != requester_id:
            raise ForbiddenError("You can only delete your own reviews")
        return review

    def _rating_stats(self, target_id: UUID) -> RatingStats:
        return compute_rating_stats(self.review_repo.rating_counts_for_target(target_id))


class ReviewService(_ReviewWriter):
    """Reviews users leave for each other, and the rating statistics over them"""

    def submit_review(
        self, reviewer_id: UUID, reviewee_id: UUID, rating: int, comment: Optional[str] = None
    ) -> ReviewSubmitResult:
        """Create the reviewer's review of the reviewee, or overwrite the existing one"""
        if not is_valid_rating(rating):
            raise ValidationError("Rating must be an integer between 1 and 5")
        if reviewer_id == reviewee_id:
            raise ValidationError("Users cannot review themselves")

        self._require_reviewer(reviewer_id)
        reviewee = self.user_repo.get_by_id(reviewee_id)
        if not reviewee:
            raise UserNotFoundError(reviewee_id)

        review, is_update = self._upsert(reviewer_id, reviewee_id, rating, comment)
        result = ReviewSubmitResult(review=ReviewInDB.model_validate(review), is_update=is_update)
        logger.info(
            f"{'Updated' if is_update else 'Created'} review {review.id} "
            f"from {reviewer_id} for {reviewee_id}"
        )

        self._refresh_reviewee_rating(reviewee_id)
        if not is_update:
            label = " ".join(filter(None, [reviewee.first_name, reviewee.last_name])) or reviewee.email
            self.notifier.queue_review_created(reviewer_id, reviewee_id, rating, label)
        return result

    def stats_for(self, target_id: UUID) -> RatingStats:
        """Statistics over reviews the user received"""
        return self._rating_stats(target_id)

    def stats_given(self, user_id: UUID) -> RatingStats:
        """Statistics over reviews the user wrote"""
        return compute_rating_stats(self.review_repo.rating_counts_by_reviewer(user_id))

    def list_given(self, user_id: UUID, page: int = 1, limit: int = 10) -> ReviewPage:
        """Reviews written by the user, newest first"""
        offset = _check_page(page, limit)
        items, total = self.review_repo.list_by_reviewer(user_id, offset, limit)
        return ReviewPage(
            items=[ReviewInDB.model_validate(r) for r in items],
            pagination=Pagination.build(page, limit, total),
        )

    def list_received(self, user_id: UUID, page: int = 1, limit: int = 10) -> ReviewPage:
        """Reviews the user received, newest first"""
        offset = _check_page(page, limit)
        items, total = self.review_repo.list_for_target(user_id, offset, limit)
        return ReviewPage(
            items=[ReviewInDB.model_validate(r) for r in items],
            pagination=Pagination.build(page, limit, total),
        )

    def get_review(self, review_id: UUID) -> ReviewInDB:
        review = self.review_repo.get_by_id(review_id)
        if not review:
            raise ReviewNotFoundError(review_id)
        return ReviewInDB.model_validate(review)

    def delete_review(self, review_id: UUID, requester_id: UUID) -> ReviewInDB:
        """Delete a review; only its author may do so"""
        review = self._get_owned(review_id, requester_id)
        deleted = ReviewInDB.model_validate(review)
        self.review_repo.delete(review)
        logger.info(f"Deleted review {deleted.id}")

        self._refresh_reviewee_rating(deleted.reviewee_id)
        return deleted

    def _refresh_reviewee_rating(self, reviewee_id: UUID) -> None:
        """Recompute the reviewee's stored rating; the review itself is already saved"""
        try:
            UserService(self.db_session).refresh_rating(reviewee_id, self.stats_for(reviewee_id))
        except (SQLAlchemyError, DomainError) as e:
            self.db_session.rollback()
            logger.warning(f"Could not refresh rating of user {reviewee_id}: {e}")


class ServiceReviewService(_ReviewWriter):
    """Reviews customers leave for services"""

    repository_class = ServiceReviewRepository

    def __init__(self, db_session, notifier: Optional[NotificationService] = None):
        super().__init__(db_session, notifier)
        self.service_repo = ServiceRepository(db_session)

    def submit_review(
        self, reviewer_id: UUID, service_id: UUID, rating: int, comment: Optional[str] = None
    ) -> ServiceReviewSubmitResult:
        """Create the reviewer's review of the service, or overwrite the existing one"""
        if not is_valid_rating(rating):
            raise ValidationError("Rating must be an integer between 1 and 5")

        self._require_reviewer(reviewer_id)
        service = self.service_repo.get_by_id(service_id)
        if not service:
            raise ServiceNotFoundError(service_id)
        if service.provider_id == reviewer_id:
            raise ValidationError("Providers cannot review their own services")

        review, is_update = self._upsert(reviewer_id, service_id, rating, comment)
        result = ServiceReviewSubmitResult(
            review=ServiceReviewInDB.model_validate(review), is_update=is_update
        )
        logger.info(
            f"{'Updated' if is_update else 'Created'} review {review.id} "
            f"from {reviewer_id} for service {service_id}"
        )

        if not is_update:
            self.notifier.queue_review_created(
                reviewer_id, service.provider_id, rating, service.title or "your service"
            )
        return result

    def stats_for(self, service_id: UUID) -> RatingStats:
        if not self.service_repo.get_by_id(service_id):
            raise ServiceNotFoundError(service_id)
        return self._rating_stats(service_id)

    def list_for_service(self, service_id: UUID, page: int = 1, limit: int = 10) -> ServiceReviewPage:
        """Reviews of the service, newest first"""
        offset = _check_page(page, limit)
        if not self.service_repo.get_by_id(service_id):
            raise ServiceNotFoundError(service_id)
        items, total = self.review_repo.list_for_target(service_id, offset, limit)
        return ServiceReviewPage(
            items=[ServiceReviewInDB.model_validate(r) for r in items],
            pagination=Pagination.build(page, limit, total),
        )

    def delete_review(self, review_id: UUID, requester_id: UUID) -> ServiceReviewInDB:
        """Delete a service review; only its author may do so"""
        review = self._get_owned(review_id, requester_id)
        deleted = ServiceReviewInDB.model_validate(review)
        self.review_repo.delete(review)
        logger.info(f"Deleted service review {deleted.id}")
        return deleted
