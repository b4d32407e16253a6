# app/db/models/category.py
from sqlalchemy import Column, String, Text, ForeignKey, Uuid, DateTime, func
from sqlalchemy.orm import relationship
from app.db.base import Base
import uuid


class Category(Base):
    """
    Category model representing a node in the service classification tree.
    Categories reference their parent by id; roots have no parent.
    """

    __tablename__ = "categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=True)
    description = Column(Text)
    parent_id = Column(
        Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=True, index=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    parent = relationship("Category", remote_side=[id], back_populates="children")
    children = relationship(
        "Category", back_populates="parent", order_by="Category.slug"
    )
    services = relationship("Service", back_populates="category")

    def __repr__(self):
        return f"<Category(id={self.id}, slug='{self.slug}')>"
