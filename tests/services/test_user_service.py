# tests/services/test_user_service.py
import uuid

import pytest

from app.core.errors import EmailAlreadyExistsError, UserNotFoundError
from app.schemas.review import RatingStats
from app.schemas.user import UserCreate
from app.services.user_service import API_KEY_PREFIX, hash_api_key


def test_register_issues_api_key(user_service, db_session):
    registration = user_service.register(
        UserCreate(email="  Dana@Example.com ", role="provider", first_name="Dana")
    )

    assert registration.user.email == "dana@example.com"
    assert registration.user.role == "provider"
    assert registration.api_key.startswith(API_KEY_PREFIX)

    from app.db.models.user import User

    stored = db_session.get(User, registration.user.id)
    assert stored.api_key_hash == hash_api_key(registration.api_key)
    assert registration.api_key not in stored.api_key_hash


def test_register_duplicate_email(user_service, customer):
    with pytest.raises(EmailAlreadyExistsError):
        user_service.register(UserCreate(email="ALICE@example.com"))


def test_create_user_unknown_role(user_service):
    with pytest.raises(ValueError):
        user_service.create_user("eve@example.com", role="superuser")


def test_authenticate(user_service, customer):
    assert user_service.authenticate(customer.api_key).id == customer.user.id
    assert user_service.authenticate("mkt_not-a-key") is None
    assert user_service.authenticate("") is None


def test_inactive_user_does_not_authenticate(user_service, db_session, customer):
    from app.db.models.user import User

    db_session.get(User, customer.user.id).is_active = False
    db_session.commit()

    assert user_service.authenticate(customer.api_key) is None


def test_refresh_rating(user_service, provider):
    stats = RatingStats(count=2, average=4.5, distribution={1: 0, 2: 0, 3: 0, 4: 1, 5: 1})

    user = user_service.refresh_rating(provider.user.id, stats)

    assert user.average_rating == 4.5
    assert user.total_reviews == 2


def test_refresh_rating_unknown_user(user_service):
    stats = RatingStats(count=0, average=0.0, distribution={r: 0 for r in range(1, 6)})
    with pytest.raises(UserNotFoundError):
        user_service.refresh_rating(uuid.uuid4(), stats)
