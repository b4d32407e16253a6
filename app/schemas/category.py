# app/schemas/category.py
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Optional, List
from uuid import UUID
from datetime import datetime

from app.schemas.service import ServiceSummary

SLUG_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"


class CategoryBase(BaseModel):
    """Base Pydantic model for Category data"""
    slug: str = Field(
        ..., max_length=100, pattern=SLUG_PATTERN,
        description="Unique lowercase-kebab identifier for the category",
    )
    name: Optional[str] = Field(None, max_length=100, description="Display name of the category")
    description: Optional[str] = Field(None, max_length=500, description="Optional description of the category")
    parent_id: Optional[UUID] = Field(None, description="Parent category ID; omitted for root categories")

    @field_validator("slug", mode="before")
    @classmethod
    def strip_slug(cls, value):
        return value.strip() if isinstance(value, str) else value


class CategoryCreate(CategoryBase):
    """Schema for creating a new Category"""
    pass


class CategoryUpdate(BaseModel):
    """Schema for updating a Category (all fields optional, at least one required)"""
    slug: Optional[str] = Field(None, max_length=100, pattern=SLUG_PATTERN)
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    parent_id: Optional[UUID] = None

    @field_validator("slug", mode="before")
    @classmethod
    def strip_slug(cls, value):
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def slug_not_null(self):
        if "slug" in self.model_fields_set and self.slug is None:
            raise ValueError("slug cannot be null")
        return self


class CategoryOptions(BaseModel):
    """Which relations to attach to returned categories. Unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore")

    include_children: bool = True
    include_parent: bool = True
    include_services: bool = False


class CategoryFilters(CategoryOptions):
    """
    Listing filters. Setting parent_id to None explicitly selects root
    categories; leaving it unset selects categories at every depth.
    """
    parent_id: Optional[UUID] = None

    @property
    def filters_by_parent(self) -> bool:
        return "parent_id" in self.model_fields_set


class CategorySummary(BaseModel):
    """Compact category reference used for parents and children"""
    id: UUID
    slug: str
    name: Optional[str] = None
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class CategoryInDB(CategoryBase):
    """Schema for Category as stored in DB (includes DB fields)"""
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CategoryResponse(CategoryInDB):
    """Schema for API responses, with the requested relations attached"""
    parent: Optional[CategorySummary] = None
    children: Optional[List[CategorySummary]] = None
    services: Optional[List[ServiceSummary]] = None
    service_count: int = 0


class CategoryTreeNode(CategorySummary):
    """Category with its nested subtree"""
    parent_id: Optional[UUID] = None
    children: List["CategoryTreeNode"] = Field(default_factory=list)


class CategoryHierarchy(BaseModel):
    """
    A category in context: ancestors ordered root-first, the category itself,
    and its descendants as a nested tree.
    """
    ancestors: List[CategorySummary]
    category: CategoryInDB
    descendants: List[CategoryTreeNode]
