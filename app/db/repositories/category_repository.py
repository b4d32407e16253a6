# app/db/repositories/category_repository.py
from typing import Iterable, List, Optional
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.db.models.category import Category
from app.db.models.service import Service
from app.schemas.category import CategoryCreate


class CategoryRepository:
    """Repository for CRUD operations on Category model"""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, category_id: UUID) -> Optional[Category]:
        """Get category by ID"""
        return self.db_session.query(Category).filter(Category.id == category_id).first()

    def get_by_slug(self, slug: str) -> Optional[Category]:
        """Get category by slug"""
        return self.db_session.query(Category).filter(Category.slug == slug).first()

    def get_parent_id(self, category_id: UUID) -> Optional[UUID]:
        """Get only the parent pointer of a category, for ancestor walks"""
        row = (
            self.db_session.query(Category.parent_id)
            .filter(Category.id == category_id)
            .first()
        )
        return row[0] if row else None

    def exists(self, category_id: UUID) -> bool:
        return (
            self.db_session.query(Category.id).filter(Category.id == category_id).first()
            is not None
        )

    def list(self, parent_id: Optional[UUID] = None, filter_by_parent: bool = False) -> List[Category]:
        """List categories ordered by name, optionally restricted to one parent (None = roots)"""
        query = self.db_session.query(Category)
        if filter_by_parent:
            if parent_id is None:
                query = query.filter(Category.parent_id.is_(None))
            else:
                query = query.filter(Category.parent_id == parent_id)
        return query.order_by(Category.name, Category.slug).all()

    def list_children_of(self, parent_ids: Iterable[UUID]) -> List[Category]:
        """List the direct children of any of the given categories"""
        parent_ids = list(parent_ids)
        if not parent_ids:
            return []
        return (
            self.db_session.query(Category)
            .filter(Category.parent_id.in_(parent_ids))
            .order_by(Category.name, Category.slug)
            .all()
        )

    def search(self, term: str) -> List[Category]:
        """Case-insensitive substring search over name, description and slug"""
        return (
            self.db_session.query(Category)
            .filter(
                or_(
                    Category.name.icontains(term, autoescape=True),
                    Category.description.icontains(term, autoescape=True),
                    Category.slug.icontains(term, autoescape=True),
                )
            )
            .order_by(Category.name, Category.slug)
            .all()
        )

    def count_children(self, category_id: UUID) -> int:
        return (
            self.db_session.query(func.count(Category.id))
            .filter(Category.parent_id == category_id)
            .scalar()
        )

    def count_services(self, category_id: UUID) -> int:
        return (
            self.db_session.query(func.count(Service.id))
            .filter(Service.category_id == category_id)
            .scalar()
        )

    def count(self) -> int:
        return self.db_session.query(func.count(Category.id)).scalar()

    def create(self, category_data: CategoryCreate) -> Category:
        """Create a new category"""
        db_category = Category(**category_data.model_dump())

        self.db_session.add(db_category)
        self.db_session.commit()
        self.db_session.refresh(db_category)

        return db_category

    def update(self, db_category: Category, changes: dict) -> Category:
        """Apply already-validated field changes to a category"""
        for key, value in changes.items():
            setattr(db_category, key, value)

        self.db_session.commit()
        self.db_session.refresh(db_category)

        return db_category

    def delete(self, db_category: Category) -> None:
        """Delete a category that has no children and no services"""
        self.db_session.delete(db_category)
        self.db_session.commit()

    def delete_promoting_dependents(self, db_category: Category) -> None:
        """
        Move the category's children and services to its parent, then delete it.
        Everything commits together; on failure the session is rolled back and
        the tree is left as it was.
        """
        new_parent = db_category.parent
        try:
            for child in list(db_category.children):
                child.parent = new_parent
            for service in list(db_category.services):
                service.category = new_parent
            self.db_session.delete(db_category)
            self.db_session.commit()
        except SQLAlchemyError:
            self.db_session.rollback()
            raise
