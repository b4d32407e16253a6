# app/db/repositories/notification_repository.py
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from app.db.models.notification import Notification
from app.schemas.notification import NotificationCreate


class NotificationRepository:
    """Repository for CRUD operations on Notification model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, notification_id: UUID) -> Optional[Notification]:
        return (
            self.db_session.query(Notification)
            .filter(Notification.id == notification_id)
            .first()
        )

    def list_for_user(self, user_id: UUID, unread_only: bool = False) -> List[Notification]:
        query = self.db_session.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        return query.order_by(Notification.created_at.desc()).all()

    def create_many(self, notifications: List[NotificationCreate]) -> List[Notification]:
        """Create several notifications in one commit"""
        db_notifications = [Notification(**n.model_dump()) for n in notifications]
        self.db_session.add_all(db_notifications)
        self.db_session.commit()
        for db_notification in db_notifications:
            self.db_session.refresh(db_notification)
        return db_notifications

    def mark_read(self, db_notification: Notification) -> Notification:
        db_notification.is_read = True
        self.db_session.commit()
        self.db_session.refresh(db_notification)
        return db_notification
