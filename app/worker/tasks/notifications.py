# app/worker/tasks/notifications.py
"""
Celery tasks delivering in-app notifications.
"""
import logging
from uuid import UUID
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import SessionLocal
from app.worker.celery_app import celery_app
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


@celery_app.task(
    name="notifications:review_created",
    bind=True,
    max_retries=3,
    default_retry_delay=30,
)
def send_review_notifications(
    self, reviewer_id: str, recipient_id: str, rating: int, target_label: str
):
    """
    Notify both parties of a newly created review.

    Args:
        reviewer_id: ID of the user who wrote the review
        recipient_id: ID of the reviewed user (or the provider of the reviewed service)
        rating: Rating given
        target_label: Human-readable name of what was reviewed
    """
    try:
        db_session = SessionLocal()
        try:
            service = NotificationService(db_session)
            created = service.notify_review_created(
                UUID(reviewer_id), UUID(recipient_id), rating, target_label
            )
            logger.info(f"Created {len(created)} review notifications for {recipient_id}")
            return {"status": "success", "created": len(created)}
        finally:
            db_session.close()

    except SQLAlchemyError as e:
        logger.exception(f"Error creating review notifications: {str(e)}")

        retry_count = self.request.retries
        if retry_count < self.max_retries:
            logger.info(f"Retrying review notifications (attempt {retry_count + 1})")
            raise self.retry(exc=e, countdown=30 * (retry_count + 1))

        return {"status": "error", "error": str(e)}
