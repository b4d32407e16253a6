# app/db/models/notification.py
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Uuid, DateTime, func
from app.db.base import Base
import uuid


class Notification(Base):
    """In-app notification delivered to a single user."""

    __tablename__ = "notifications"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    kind = Column(String(50), nullable=False)  # "review_received" or "review_posted"
    subject = Column(String(255), nullable=False)
    body = Column(Text, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Notification(id={self.id}, kind='{self.kind}')>"
