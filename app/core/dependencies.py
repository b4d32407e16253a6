"""FastAPI dependencies building request-scoped services."""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.base import get_db_session
from app.services.cache_service import CacheService, get_cache_service
from app.services.category_service import CategoryService
from app.services.geocoding_service import GeocodingService, get_geocoding_service
from app.services.notification_service import NotificationService
from app.services.review_service import ReviewService, ServiceReviewService
from app.services.service_catalog_service import ServiceCatalogService
from app.services.user_service import UserService


def get_category_service(
    db: Session = Depends(get_db_session),
    cache: CacheService = Depends(get_cache_service),
) -> CategoryService:
    return CategoryService(db, cache=cache)


def get_service_catalog_service(
    db: Session = Depends(get_db_session),
    cache: CacheService = Depends(get_cache_service),
    geocoder: GeocodingService = Depends(get_geocoding_service),
) -> ServiceCatalogService:
    return ServiceCatalogService(db, cache=cache, geocoder=geocoder)


def get_notification_service(db: Session = Depends(get_db_session)) -> NotificationService:
    return NotificationService(db)


def get_review_service(
    db: Session = Depends(get_db_session),
    notifier: NotificationService = Depends(get_notification_service),
) -> ReviewService:
    return ReviewService(db, notifier=notifier)


def get_service_review_service(
    db: Session = Depends(get_db_session),
    notifier: NotificationService = Depends(get_notification_service),
) -> ServiceReviewService:
    return ServiceReviewService(db, notifier=notifier)


def get_user_service(db: Session = Depends(get_db_session)) -> UserService:
    return UserService(db)
