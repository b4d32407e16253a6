# app/services/notification_service.py
from typing import List
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, NotFoundError
from app.db.repositories.notification_repository import NotificationRepository
from app.schemas.notification import NotificationCreate, NotificationInDB

logger = logging.getLogger(__name__)


class NotificationService:
    """In-app notifications and the queue that produces them"""

    def __init__(self, db_session: Session):
        self.notification_repo = NotificationRepository(db_session)

    def queue_review_created(
        self, reviewer_id: UUID, recipient_id: UUID, rating: int, target_label: str
    ) -> bool:
        """
        Queue notifications for a newly created review. Never raises: a broker
        failure is logged and the review stays saved.

        Returns:
            True if the task was handed to the broker
        """
        # Import here to avoid circular imports
        from app.worker.tasks.notifications import send_review_notifications

        try:
            send_review_notifications.delay(
                str(reviewer_id), str(recipient_id), rating, target_label
            )
            return True
        except Exception as e:
            logger.warning(
                f"Could not queue review notifications for reviewer {reviewer_id}: {e}"
            )
            return False

    def notify_review_created(
        self, reviewer_id: UUID, recipient_id: UUID, rating: int, target_label: str
    ) -> List[NotificationInDB]:
        """Write one notification for each party of a new review"""
        notifications = self.notification_repo.create_many([
            NotificationCreate(
                user_id=recipient_id,
                kind="review_received",
                subject=f"New {rating}-star review",
                body=f"You received a {rating}-star review for {target_label}.",
            ),
            NotificationCreate(
                user_id=reviewer_id,
                kind="review_posted",
                subject="Your review was posted",
                body=f"Thanks for reviewing {target_label}.",
            ),
        ])
        return [NotificationInDB.model_validate(n) for n in notifications]

    def list_for_user(self, user_id: UUID, unread_only: bool = False) -> List[NotificationInDB]:
        notifications = self.notification_repo.list_for_user(user_id, unread_only)
        return [NotificationInDB.model_validate(n) for n in notifications]

    def mark_read(self, notification_id: UUID, user_id: UUID) -> NotificationInDB:
        notification = self.notification_repo.get_by_id(notification_id)
        if not notification:
            raise NotFoundError("Notification not found")
        if notification.user_id != user_id:
            raise ForbiddenError("You can only update your own notifications")
        return NotificationInDB.model_validate(self.notification_repo.mark_read(notification))
