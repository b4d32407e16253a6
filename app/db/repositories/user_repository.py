# app/db/repositories/user_repository.py
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
from app.db.models.user import User


class UserRepository:
    """Repository for CRUD operations on User model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        return self.db_session.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        return self.db_session.query(User).filter(User.email == email).first()

    def get_by_key_hash(self, key_hash: str) -> Optional[User]:
        """Get user by the hash of their API key"""
        return self.db_session.query(User).filter(User.api_key_hash == key_hash).first()

    def create(self, **fields) -> User:
        """Create a new user"""
        db_user = User(**fields)

        self.db_session.add(db_user)
        self.db_session.commit()
        self.db_session.refresh(db_user)

        return db_user

    def update_rating(self, db_user: User, average_rating: Optional[float], total_reviews: int) -> User:
        """Store the denormalised rating of reviews the user received"""
        db_user.average_rating = average_rating
        db_user.total_reviews = total_reviews

        self.db_session.commit()
        self.db_session.refresh(db_user)

        return db_user
