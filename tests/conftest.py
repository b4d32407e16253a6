# tests/conftest.py
import os
import tempfile
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

# Configure the application before anything from app/ is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "false"
os.environ["GEOCODING_API_KEY"] = ""
os.environ["LOG_LEVEL"] = "warning"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="marketplace-logs-"))

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.base import Base, get_db_session  # noqa: E402
import app.db.models  # noqa: E402,F401  registers the models on Base.metadata
from app.schemas.category import CategoryCreate  # noqa: E402
from app.schemas.service import ServiceCreate  # noqa: E402
from app.services.cache_service import CacheService, get_cache_service  # noqa: E402
from app.services.category_service import CategoryService  # noqa: E402
from app.services.geocoding_service import GeocodingService, get_geocoding_service  # noqa: E402
from app.services.notification_service import NotificationService  # noqa: E402
from app.services.review_service import ReviewService, ServiceReviewService  # noqa: E402
from app.services.service_catalog_service import ServiceCatalogService  # noqa: E402
from app.services.user_service import UserService  # noqa: E402


@pytest.fixture(scope="function")
def db_engine():
    """In-memory SQLite database shared by every connection of the test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a test database session."""
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()

    yield session

    session.close()


@pytest.fixture(autouse=True)
def queued_notifications():
    """Replace the broker hand-off of the notification task"""
    with patch("app.worker.tasks.notifications.send_review_notifications.delay") as delay:
        yield delay


@pytest.fixture
def notifier():
    return MagicMock(spec=NotificationService)


@pytest.fixture
def category_service(db_session):
    """Create a category service for testing."""
    return CategoryService(db_session)


@pytest.fixture
def user_service(db_session):
    return UserService(db_session)


@pytest.fixture
def catalog_service(db_session):
    return ServiceCatalogService(db_session)


@pytest.fixture
def review_service(db_session, notifier):
    return ReviewService(db_session, notifier=notifier)


@pytest.fixture
def service_review_service(db_session, notifier):
    return ServiceReviewService(db_session, notifier=notifier)


@pytest.fixture
def customer(user_service):
    return user_service.create_user("alice@example.com", role="customer", first_name="Alice")


@pytest.fixture
def other_customer(user_service):
    return user_service.create_user("bob@example.com", role="customer", first_name="Bob")


@pytest.fixture
def provider(user_service):
    return user_service.create_user(
        "carol@example.com", role="provider", first_name="Carol", last_name="Plumber"
    )


@pytest.fixture
def admin(user_service):
    return user_service.create_user("admin@example.com", role="admin")


@pytest.fixture
def make_category(category_service):
    """Create a category by slug, optionally under a parent"""

    def _make(slug, parent=None, **fields):
        return category_service.create_category(
            CategoryCreate(slug=slug, parent_id=parent.id if parent else None, **fields)
        )

    return _make


@pytest.fixture
def make_service(catalog_service, provider):
    """Create a service in a category, offered by the provider fixture by default"""

    def _make(category, title="Pipe repair", price="40.00", provider_id=None, **fields):
        return catalog_service.create_service(
            ServiceCreate(
                title=title,
                price=Decimal(price),
                category_id=category.id,
                provider_id=provider_id or provider.user.id,
                **fields,
            )
        )

    return _make


@pytest.fixture
def client(db_session):
    """TestClient bound to the test database, with cache and geocoding disabled."""
    from app.api.web_app import app

    def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db_session] = _get_test_db
    app.dependency_overrides[get_cache_service] = lambda: CacheService(enabled=False)
    app.dependency_overrides[get_geocoding_service] = lambda: GeocodingService(api_key="")

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Authorization header for a registration returned by UserService"""

    def _headers(registration):
        return {"Authorization": f"Bearer {registration.api_key}"}

    return _headers
