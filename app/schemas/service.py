# app/schemas/service.py
import re
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from urllib.parse import urlparse
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

WORKING_TIME_PATTERN = re.compile(
    r"^(Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday):\s*"
    r"\d{1,2}:\d{2}\s*(AM|PM)\s*-\s*\d{1,2}:\d{2}\s*(AM|PM)$",
    re.IGNORECASE,
)


class ServiceFieldChecks(BaseModel):
    """Field checks shared by create and update payloads"""

    @field_validator("currency", mode="before", check_fields=False)
    @classmethod
    def upper_currency(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("tags", check_fields=False)
    @classmethod
    def check_tags(cls, value):
        if value is None:
            return value
        for tag in value:
            if not 2 <= len(tag) <= 30:
                raise ValueError("Each tag must be between 2 and 30 characters long")
        return value

    @field_validator("images", check_fields=False)
    @classmethod
    def check_images(cls, value):
        if value is None:
            return value
        for url in value:
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"Image must be a valid http(s) URL: {url}")
        return value

    @field_validator("working_time", check_fields=False)
    @classmethod
    def check_working_time(cls, value):
        if value is None:
            return value
        for slot in value:
            if not WORKING_TIME_PATTERN.match(slot.strip()):
                raise ValueError(
                    'Working time must look like "Monday: 9:00 AM - 5:00 PM"'
                )
        return value


class ServiceBase(ServiceFieldChecks):
    """Base Pydantic model for Service data"""
    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    currency: str = Field("USD", pattern=r"^[A-Z]{3}$", description="ISO 4217 currency code")
    tags: List[str] = Field(default_factory=list, max_length=10)
    images: List[str] = Field(default_factory=list, max_length=5)
    is_active: bool = True
    working_time: List[str] = Field(default_factory=list, max_length=7)
    address: Optional[str] = Field(None, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class ServiceCreate(ServiceBase):
    """Schema for creating a new Service"""
    category_id: UUID
    provider_id: UUID


class ServiceUpdate(ServiceFieldChecks):
    """Schema for updating a Service (all fields optional, at least one required)"""
    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    currency: Optional[str] = Field(None, pattern=r"^[A-Z]{3}$")
    category_id: Optional[UUID] = None
    tags: Optional[List[str]] = Field(None, max_length=10)
    images: Optional[List[str]] = Field(None, max_length=5)
    is_active: Optional[bool] = None
    working_time: Optional[List[str]] = Field(None, max_length=7)
    address: Optional[str] = Field(None, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class ServiceFilters(BaseModel):
    """Listing filters; take is clamped to the configured maximum"""
    provider_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    is_active: Optional[bool] = None
    skip: int = Field(0, ge=0)
    take: int = Field(10, ge=1)


class ServiceSummary(BaseModel):
    """Compact service reference attached to categories"""
    id: UUID
    title: Optional[str] = None
    price: Decimal
    currency: str
    is_active: bool

    model_config = {"from_attributes": True}


class ServiceInDB(ServiceBase):
    """Schema for Service as stored in DB (includes DB fields)"""
    id: UUID
    category_id: UUID
    provider_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ServiceResponse(ServiceInDB):
    """Schema for API responses"""
    pass
