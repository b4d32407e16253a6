# app/services/user_service.py
"""Service for user registration and API key authentication."""
import hashlib
import logging
import secrets
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import EmailAlreadyExistsError, UserNotFoundError
from app.db.repositories.user_repository import UserRepository
from app.schemas.review import RatingStats
from app.schemas.user import UserCreate, UserInDB, UserRegistration

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "mkt_"
ROLES = ("customer", "provider", "admin")


def hash_api_key(raw_key: str) -> str:
    """Keys are stored as SHA-256 hex digests only"""
    return hashlib.sha256(raw_key.encode()).hexdigest()


class UserService:
    """Service for user-related business logic"""

    def __init__(self, db_session: Session):
        self.db_session = db_session
        self.user_repo = UserRepository(db_session)

    def register(self, user_data: UserCreate) -> UserRegistration:
        """
        Register a customer or provider.

        Returns:
            UserRegistration with the raw API key (only time it's visible)
        """
        return self.create_user(
            email=user_data.email,
            role=user_data.role,
            first_name=user_data.first_name,
            last_name=user_data.last_name,
        )

    def create_user(
        self,
        email: str,
        role: str = "customer",
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> UserRegistration:
        """Create a user of any role and issue their API key"""
        if role not in ROLES:
            raise ValueError(f"Unknown role '{role}'")

        email = email.strip().lower()
        if self.user_repo.get_by_email(email):
            raise EmailAlreadyExistsError(email)

        raw_key = f"{API_KEY_PREFIX}{secrets.token_urlsafe(32)}"
        try:
            user = self.user_repo.create(
                email=email,
                role=role,
                first_name=first_name,
                last_name=last_name,
                api_key_hash=hash_api_key(raw_key),
                is_active=True,
                total_reviews=0,
            )
        except IntegrityError:
            self.db_session.rollback()
            raise EmailAlreadyExistsError(email)

        logger.info(f"Registered {role} user {user.id}")
        return UserRegistration(user=UserInDB.model_validate(user), api_key=raw_key)

    def authenticate(self, raw_key: str) -> Optional[UserInDB]:
        """Resolve an API key to an active user, or None"""
        if not raw_key:
            return None
        user = self.user_repo.get_by_key_hash(hash_api_key(raw_key))
        if not user or not user.is_active:
            return None
        return UserInDB.model_validate(user)

    def get_user(self, user_id: UUID) -> Optional[UserInDB]:
        """Get user by ID"""
        user = self.user_repo.get_by_id(user_id)
        if not user:
            return None
        return UserInDB.model_validate(user)

    def refresh_rating(self, user_id: UUID, stats: RatingStats) -> UserInDB:
        """Store rating statistics of reviews the user received"""
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        average = stats.average if stats.count else None
        user = self.user_repo.update_rating(user, average, stats.count)
        return UserInDB.model_validate(user)
