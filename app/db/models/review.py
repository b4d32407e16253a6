# app/db/models/review.py
from sqlalchemy import (
    Column, String, Text, Integer, ForeignKey, Uuid, DateTime, UniqueConstraint,
    CheckConstraint, func
)
from sqlalchemy.orm import relationship
from app.db.base import Base
import uuid


class Review(Base):
    """
    Rating left by one user about another. One row per (reviewer, reviewee);
    a repeated submission updates the existing row.
    """

    __tablename__ = "reviews"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reviewer_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    reviewee_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rating = Column(Integer, nullable=False)  # 1..5
    comment = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    reviewer = relationship("User", foreign_keys=[reviewer_id])
    reviewee = relationship("User", foreign_keys=[reviewee_id])

    __table_args__ = (
        UniqueConstraint("reviewer_id", "reviewee_id", name="uq_reviews_reviewer_reviewee"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
    )

    def __repr__(self):
        return f"<Review(id={self.id}, rating={self.rating})>"


class ServiceReview(Base):
    """
    Rating left by a user about a service. One row per (reviewer, service).
    """

    __tablename__ = "service_reviews"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reviewer_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    service_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rating = Column(Integer, nullable=False)  # 1..5
    comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    reviewer = relationship("User", foreign_keys=[reviewer_id])
    service = relationship("Service", back_populates="reviews")

    __table_args__ = (
        UniqueConstraint("reviewer_id", "service_id", name="uq_service_reviews_reviewer_service"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_service_reviews_rating_range"),
    )

    def __repr__(self):
        return f"<ServiceReview(id={self.id}, rating={self.rating})>"
