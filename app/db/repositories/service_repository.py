# app/db/repositories/service_repository.py
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.db.models.service import Service
from app.db.models.review import ServiceReview
from app.schemas.service import ServiceCreate, ServiceFilters


class ServiceRepository:
    """Repository for CRUD operations on Service model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, service_id: UUID) -> Optional[Service]:
        """Get service by ID"""
        return self.db_session.query(Service).filter(Service.id == service_id).first()

    def list(self, filters: ServiceFilters, take: int) -> List[Service]:
        """List services matching the filters, newest first"""
        query = self.db_session.query(Service)
        if filters.provider_id:
            query = query.filter(Service.provider_id == filters.provider_id)
        if filters.category_id:
            query = query.filter(Service.category_id == filters.category_id)
        if filters.is_active is not None:
            query = query.filter(Service.is_active == filters.is_active)
        return (
            query.order_by(Service.created_at.desc(), Service.id)
            .offset(filters.skip)
            .limit(take)
            .all()
        )

    def count_reviews(self, service_id: UUID) -> int:
        return (
            self.db_session.query(func.count(ServiceReview.id))
            .filter(ServiceReview.service_id == service_id)
            .scalar()
        )

    def create(self, service_data: ServiceCreate) -> Service:
        """Create a new service"""
        db_service = Service(**service_data.model_dump())

        self.db_session.add(db_service)
        self.db_session.commit()
        self.db_session.refresh(db_service)

        return db_service

    def update(self, db_service: Service, changes: dict) -> Service:
        """Apply field changes to a service"""
        for key, value in changes.items():
            setattr(db_service, key, value)

        self.db_session.commit()
        self.db_session.refresh(db_service)

        return db_service

    def delete(self, db_service: Service) -> None:
        self.db_session.delete(db_service)
        self.db_session.commit()
