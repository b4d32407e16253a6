# app/services/category_service.py
from typing import Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError

from app.core.errors import (
    CategoryNotFoundError,
    CircularReferenceError,
    ConflictError,
    NotFoundError,
    SlugAlreadyExistsError,
    ValidationError,
)
from app.db.models.category import Category
from app.db.repositories.category_repository import CategoryRepository
from app.schemas.category import (
    CategoryCreate,
    CategoryFilters,
    CategoryHierarchy,
    CategoryInDB,
    CategoryOptions,
    CategoryResponse,
    CategorySummary,
    CategoryTreeNode,
    CategoryUpdate,
)
from app.schemas.service import ServiceSummary
from app.services.cache_service import CacheService

logger = logging.getLogger(__name__)

MIN_SEARCH_TERM_LENGTH = 2


class CategoryService:
    """
    Service for the category tree: slug uniqueness, parent existence,
    acyclic parent assignment and the delete lifecycle.
    """

    CACHE_PREFIX = "categories"

    def __init__(self, db_session, cache: Optional[CacheService] = None):
        self.db_session = db_session
        self.category_repo = CategoryRepository(db_session)
        self.cache = cache

    def get_category(
        self, category_id: UUID, options: Optional[CategoryOptions] = None
    ) -> Optional[CategoryResponse]:
        """Get category by ID; None when it does not exist"""
        category = self.category_repo.get_by_id(category_id)
        if not category:
            return None
        return self._to_response(category, options or CategoryOptions())

    def get_by_slug(
        self, slug: str, options: Optional[CategoryOptions] = None
    ) -> Optional[CategoryResponse]:
        """Get category by slug; None when it does not exist"""
        category = self.category_repo.get_by_slug(slug)
        if not category:
            return None
        return self._to_response(category, options or CategoryOptions())

    def category_exists(self, category_id: UUID) -> bool:
        return self.category_repo.exists(category_id)

    def list_categories(self, filters: Optional[CategoryFilters] = None) -> List[CategoryResponse]:
        """
        List categories. An explicit parent_id of None lists root categories,
        an omitted parent_id lists every category.
        """
        filters = filters or CategoryFilters()
        cache_key = CacheService.build_key(
            self.CACHE_PREFIX,
            parent=filters.parent_id if filters.filters_by_parent else "any",
            children=filters.include_children,
            parent_ref=filters.include_parent,
            services=filters.include_services,
        )
        if self.cache:
            cached = self.cache.get_json(cache_key)
            if cached is not None:
                return [CategoryResponse.model_validate(item) for item in cached]

        categories = self.category_repo.list(
            parent_id=filters.parent_id, filter_by_parent=filters.filters_by_parent
        )
        result = [self._to_response(category, filters) for category in categories]

        if self.cache:
            self.cache.set_json(cache_key, [item.model_dump(mode="json") for item in result])
        return result

    def get_root_categories(self, options: Optional[CategoryOptions] = None) -> List[CategoryResponse]:
        """List categories without a parent"""
        options = options or CategoryOptions()
        return self.list_categories(
            CategoryFilters(parent_id=None, **options.model_dump(exclude={"parent_id"}))
        )

    def search_categories(
        self, term: str, options: Optional[CategoryOptions] = None
    ) -> List[CategoryResponse]:
        """Case-insensitive substring search over name, description and slug"""
        term = (term or "").strip()
        if len(term) < MIN_SEARCH_TERM_LENGTH:
            raise ValidationError(
                f"Search term must be at least {MIN_SEARCH_TERM_LENGTH} characters long"
            )
        options = options or CategoryOptions()
        return [self._to_response(c, options) for c in self.category_repo.search(term)]

    def create_category(self, category_data: CategoryCreate) -> CategoryResponse:
        """Create a new category"""
        if self.category_repo.get_by_slug(category_data.slug):
            raise SlugAlreadyExistsError(category_data.slug)

        if category_data.parent_id is not None and not self.category_repo.exists(
            category_data.parent_id
        ):
            raise NotFoundError("Parent category not found")

        try:
            category = self.category_repo.create(category_data)
        except IntegrityError:
            # Lost a race against a concurrent insert of the same slug
            self.db_session.rollback()
            logger.warning(f"Unique constraint rejected category slug '{category_data.slug}'")
            raise SlugAlreadyExistsError(category_data.slug)

        logger.info(f"Created category '{category.slug}' ({category.id})")
        self._invalidate_cache()
        return self._to_response(category, CategoryOptions())

    def update_category(self, category_id: UUID, category_data: CategoryUpdate) -> CategoryResponse:
        """Update an existing category"""
        changes = category_data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("At least one field must be provided for update")

        category = self.category_repo.get_by_id(category_id)
        if not category:
            raise CategoryNotFoundError(category_id)

        new_slug = changes.get("slug")
        if new_slug is not None and new_slug != category.slug:
            existing = self.category_repo.get_by_slug(new_slug)
            if existing and existing.id != category.id:
                raise SlugAlreadyExistsError(new_slug)

        # parent_id set to None makes the category a root
        new_parent_id = changes.get("parent_id")
        if new_parent_id is not None:
            if not self.category_repo.exists(new_parent_id):
                raise NotFoundError("Parent category not found")
            self._ensure_acyclic(category.id, new_parent_id)

        try:
            category = self.category_repo.update(category, changes)
        except IntegrityError:
            self.db_session.rollback()
            raise SlugAlreadyExistsError(new_slug or category.slug)

        self._invalidate_cache()
        return self._to_response(category, CategoryOptions())

    def delete_category(self, category_id: UUID, force: bool = False) -> CategoryInDB:
        """
        Delete a category.

        Without force the category must have no children and no services.
        With force, children are promoted to the deleted category's parent
        (becoming roots when it had none) and its services move to that parent.
        A root category that still has services cannot be force-deleted since
        there is no parent to take them.
        """
        category = self.category_repo.get_by_id(category_id)
        if not category:
            raise CategoryNotFoundError(category_id)

        child_count = self.category_repo.count_children(category.id)
        service_count = self.category_repo.count_services(category.id)

        if not force:
            if child_count:
                raise ConflictError(
                    "Cannot delete category with child categories. "
                    "Use force option or delete children first."
                )
            if service_count:
                raise ConflictError(
                    "Cannot delete category with associated services. "
                    "Use force option or remove services first."
                )
        elif service_count and category.parent_id is None:
            raise ConflictError(
                "Cannot force delete a root category with associated services; "
                "move the services to another category first."
            )

        deleted = CategoryInDB.model_validate(category)
        try:
            if force and (child_count or service_count):
                self.category_repo.delete_promoting_dependents(category)
                logger.info(
                    f"Force deleted category '{deleted.slug}': promoted {child_count} children "
                    f"and {service_count} services to parent {deleted.parent_id}"
                )
            else:
                self.category_repo.delete(category)
                logger.info(f"Deleted category '{deleted.slug}'")
        except IntegrityError:
            # A child or service was attached concurrently
            self.db_session.rollback()
            raise ConflictError("Category gained dependents while being deleted; retry the request")

        self._invalidate_cache()
        return deleted

    def get_category_hierarchy(self, category_id: UUID) -> Optional[CategoryHierarchy]:
        """
        Get a category with its ancestors (root first) and its descendants as
        a nested tree. Returns None when the category does not exist.
        """
        category = self.category_repo.get_by_id(category_id)
        if not category:
            return None

        visited = {category.id}

        ancestors: List[CategorySummary] = []
        current = category.parent
        while current is not None and current.id not in visited:
            visited.add(current.id)
            ancestors.append(CategorySummary.model_validate(current))
            current = current.parent
        ancestors.reverse()

        # Walk down one level per query
        nodes: Dict[UUID, CategoryTreeNode] = {}
        descendants: List[CategoryTreeNode] = []
        frontier = [category.id]
        while frontier:
            level = [c for c in self.category_repo.list_children_of(frontier) if c.id not in visited]
            for child in level:
                visited.add(child.id)
                node = self._to_tree_node(child)
                nodes[child.id] = node
                if child.parent_id == category.id:
                    descendants.append(node)
                else:
                    nodes[child.parent_id].children.append(node)
            frontier = [c.id for c in level]

        return CategoryHierarchy(
            ancestors=ancestors,
            category=CategoryInDB.model_validate(category),
            descendants=descendants,
        )

    def _ensure_acyclic(self, category_id: UUID, new_parent_id: UUID) -> None:
        """
        Walk up from the proposed parent; reaching the category itself means the
        assignment would close a cycle. Self-parenting is caught on the first step.
        """
        visited = set()
        current = new_parent_id
        while current is not None:
            if current == category_id:
                raise CircularReferenceError()
            if current in visited:
                logger.error(f"Existing cycle detected in category tree at {current}")
                raise CircularReferenceError("Category hierarchy already contains a cycle")
            visited.add(current)
            current = self.category_repo.get_parent_id(current)

    def _to_response(self, category: Category, options: CategoryOptions) -> CategoryResponse:
        data = CategoryInDB.model_validate(category).model_dump()
        if options.include_parent and category.parent is not None:
            data["parent"] = CategorySummary.model_validate(category.parent)
        if options.include_children:
            data["children"] = [CategorySummary.model_validate(c) for c in category.children]
        if options.include_services:
            data["services"] = [ServiceSummary.model_validate(s) for s in category.services]
        data["service_count"] = self.category_repo.count_services(category.id)
        return CategoryResponse(**data)

    @staticmethod
    def _to_tree_node(category: Category) -> CategoryTreeNode:
        return CategoryTreeNode(
            id=category.id,
            slug=category.slug,
            name=category.name,
            description=category.description,
            parent_id=category.parent_id,
        )

    def _invalidate_cache(self) -> None:
        if self.cache:
            self.cache.invalidate_prefix(self.CACHE_PREFIX)
