# app/schemas/__init__.py
from app.schemas.common import Pagination
from app.schemas.service import (
    ServiceBase,
    ServiceCreate,
    ServiceUpdate,
    ServiceFilters,
    ServiceSummary,
    ServiceInDB,
    ServiceResponse,
)
from app.schemas.category import (
    CategoryBase,
    CategoryCreate,
    CategoryUpdate,
    CategoryOptions,
    CategoryFilters,
    CategorySummary,
    CategoryInDB,
    CategoryResponse,
    CategoryTreeNode,
    CategoryHierarchy,
)
from app.schemas.user import UserCreate, UserInDB, UserRegistration
from app.schemas.review import (
    ReviewCreate,
    ServiceReviewCreate,
    ReviewInDB,
    ServiceReviewInDB,
    ReviewSubmitResult,
    ServiceReviewSubmitResult,
    RatingStats,
    ReviewPage,
    ServiceReviewPage,
)
from app.schemas.notification import NotificationCreate, NotificationInDB
