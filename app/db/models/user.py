# app/db/models/user.py
from sqlalchemy import Column, String, Boolean, Float, Integer, Uuid, DateTime, func
from sqlalchemy.orm import relationship
from app.db.base import Base
import uuid


class User(Base):
    """
    Marketplace user. A user acts as a customer, a provider of services,
    or an administrator of the catalog.
    """

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    role = Column(String(20), nullable=False, default="customer")  # customer, provider, admin
    api_key_hash = Column(String(255), nullable=False, unique=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Denormalised rating of reviews received
    average_rating = Column(Float, nullable=True)
    total_reviews = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    services = relationship("Service", back_populates="provider")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
