# app/schemas/user.py
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserBase(BaseModel):
    """Base Pydantic model for User data"""
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class UserCreate(UserBase):
    """Self-registration payload; admins are created from the CLI"""
    role: Literal["customer", "provider"] = "customer"


class UserInDB(UserBase):
    """Schema for User as stored in DB (never includes the key hash)"""
    id: UUID
    role: str
    is_active: bool
    average_rating: Optional[float] = None
    total_reviews: int = 0
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserRegistration(BaseModel):
    """Registration result; the raw API key is only ever returned here"""
    user: UserInDB
    api_key: str
