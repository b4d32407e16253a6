# app/db/models/service.py
from sqlalchemy import (
    Column, String, Text, ForeignKey, Uuid, Numeric, Boolean, Float, JSON, DateTime, func
)
from sqlalchemy.orm import relationship
from app.db.base import Base
import uuid


class Service(Base):
    """
    Service listing offered by a provider under exactly one category.
    """

    __tablename__ = "services"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(100), nullable=True)
    description = Column(Text)

    # Pricing
    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")

    # Foreign keys
    category_id = Column(
        Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=False, index=True
    )
    provider_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Listing details
    tags = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)
    working_time = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)

    # Location
    address = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    category = relationship("Category", back_populates="services")
    provider = relationship("User", back_populates="services")
    reviews = relationship("ServiceReview", back_populates="service")

    def __repr__(self):
        return f"<Service(id={self.id}, title='{self.title}')>"
