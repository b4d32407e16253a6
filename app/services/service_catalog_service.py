# app/services/service_catalog_service.py
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.errors import (
    CategoryNotFoundError,
    ConflictError,
    NotFoundError,
    ServiceNotFoundError,
    UnavailableError,
    ValidationError,
)
from app.db.repositories.service_repository import ServiceRepository
from app.db.repositories.user_repository import UserRepository
from app.schemas.service import ServiceCreate, ServiceFilters, ServiceInDB, ServiceUpdate
from app.services.cache_service import CacheService
from app.services.category_service import CategoryService
from app.services.geocoding_service import GeocodingService

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = (
    "price", "currency", "category_id", "tags", "images", "working_time", "is_active"
)


class ServiceCatalogService:
    """Service for service listings offered by providers"""

    CACHE_PREFIX = "services"

    def __init__(
        self,
        db_session,
        cache: Optional[CacheService] = None,
        geocoder: Optional[GeocodingService] = None,
    ):
        self.db_session = db_session
        self.service_repo = ServiceRepository(db_session)
        self.user_repo = UserRepository(db_session)
        self.category_service = CategoryService(db_session, cache=cache)
        self.cache = cache
        self.geocoder = geocoder

    def get_service(self, service_id: UUID) -> Optional[ServiceInDB]:
        """Get service by ID; None when it does not exist"""
        service = self.service_repo.get_by_id(service_id)
        if not service:
            return None
        return ServiceInDB.model_validate(service)

    def list_services(self, filters: Optional[ServiceFilters] = None) -> List[ServiceInDB]:
        """List services, newest first; take is capped at SERVICE_LIST_MAX_TAKE"""
        filters = filters or ServiceFilters()
        take = min(filters.take, settings.SERVICE_LIST_MAX_TAKE)

        cache_key = CacheService.build_key(
            self.CACHE_PREFIX,
            provider=filters.provider_id,
            category=filters.category_id,
            active=filters.is_active,
            skip=filters.skip,
            take=take,
        )
        if self.cache:
            cached = self.cache.get_json(cache_key)
            if cached is not None:
                return [ServiceInDB.model_validate(item) for item in cached]

        services = [ServiceInDB.model_validate(s) for s in self.service_repo.list(filters, take)]

        if self.cache:
            self.cache.set_json(cache_key, [s.model_dump(mode="json") for s in services])
        return services

    def create_service(self, service_data: ServiceCreate) -> ServiceInDB:
        """Create a new service for an existing provider under an existing category"""
        provider = self.user_repo.get_by_id(service_data.provider_id)
        if not provider:
            raise NotFoundError("Service provider not found")
        if provider.role != "provider":
            raise ValidationError("Services can only be offered by provider accounts")

        if not self.category_service.category_exists(service_data.category_id):
            raise CategoryNotFoundError(service_data.category_id)

        if service_data.address and (service_data.latitude is None or service_data.longitude is None):
            service_data = service_data.model_copy(update=self._locate(service_data.address))

        try:
            service = self.service_repo.create(service_data)
        except IntegrityError:
            self.db_session.rollback()
            raise ConflictError("Provider or category was removed while creating the service")

        logger.info(f"Created service {service.id} in category {service.category_id}")
        self._invalidate_cache()
        return ServiceInDB.model_validate(service)

    def update_service(self, service_id: UUID, service_data: ServiceUpdate) -> ServiceInDB:
        """Update an existing service"""
        changes = service_data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("At least one field must be provided for update")
        for field in NON_NULLABLE_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be null")

        service = self.service_repo.get_by_id(service_id)
        if not service:
            raise ServiceNotFoundError(service_id)

        if "category_id" in changes and not self.category_service.category_exists(changes["category_id"]):
            raise CategoryNotFoundError(changes["category_id"])

        if changes.get("address") and "latitude" not in changes and "longitude" not in changes:
            changes.update(self._locate(changes["address"]))

        service = self.service_repo.update(service, changes)
        self._invalidate_cache()
        return ServiceInDB.model_validate(service)

    def deactivate_service(self, service_id: UUID) -> ServiceInDB:
        """Soft delete: hide the service from active listings, keep its reviews"""
        service = self.service_repo.get_by_id(service_id)
        if not service:
            raise ServiceNotFoundError(service_id)
        service = self.service_repo.update(service, {"is_active": False})
        self._invalidate_cache()
        return ServiceInDB.model_validate(service)

    def delete_service(self, service_id: UUID) -> ServiceInDB:
        """Hard delete; rejected while reviews reference the service"""
        service = self.service_repo.get_by_id(service_id)
        if not service:
            raise ServiceNotFoundError(service_id)

        if self.service_repo.count_reviews(service.id):
            raise ConflictError(
                "Cannot delete a service that has reviews; deactivate it instead"
            )

        deleted = ServiceInDB.model_validate(service)
        self.service_repo.delete(service)
        logger.info(f"Deleted service {deleted.id}")
        self._invalidate_cache()
        return deleted

    def _locate(self, address: str) -> dict:
        """Best-effort coordinates for an address; empty when unavailable"""
        if not self.geocoder:
            return {}
        try:
            geo = self.geocoder.geocode(address)
        except UnavailableError as e:
            logger.warning(f"Geocoding skipped for '{address}': {e.message}")
            return {}
        if not geo:
            return {}
        return {"latitude": geo.latitude, "longitude": geo.longitude}

    def _invalidate_cache(self) -> None:
        if self.cache:
            self.cache.invalidate_prefix(self.CACHE_PREFIX)
            # Category responses carry service counts
            self.cache.invalidate_prefix(CategoryService.CACHE_PREFIX)
