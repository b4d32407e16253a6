"""Domain error taxonomy shared by services and the API boundary."""
from typing import Any, Optional


class DomainError(Exception):
    """Base class for errors raised by the domain services"""

    status_code = 500
    code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(DomainError):
    status_code = 400
    code = "VALIDATION_ERROR"


class CircularReferenceError(ValidationError):
    code = "CIRCULAR_REFERENCE"

    def __init__(self, message: str = "Cannot create circular reference in category hierarchy"):
        super().__init__(message)


class NotFoundError(DomainError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(DomainError):
    status_code = 409
    code = "CONFLICT"


class UnauthorizedError(DomainError):
    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(DomainError):
    status_code = 403
    code = "FORBIDDEN"


class InternalError(DomainError):
    status_code = 500
    code = "INTERNAL_ERROR"


class UnavailableError(DomainError):
    """A dependency timed out or refused the connection; safe to retry"""

    status_code = 503
    code = "UNAVAILABLE"


# Entity-specific errors
class UserNotFoundError(NotFoundError):
    def __init__(self, user_id=None):
        super().__init__(f"User with ID {user_id} not found" if user_id else "User not found")


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id=None):
        super().__init__(
            f"Category with ID {category_id} not found" if category_id else "Category not found"
        )


class ServiceNotFoundError(NotFoundError):
    def __init__(self, service_id=None):
        super().__init__(
            f"Service with ID {service_id} not found" if service_id else "Service not found"
        )


class ReviewNotFoundError(NotFoundError):
    def __init__(self, review_id=None):
        super().__init__(
            f"Review with ID {review_id} not found" if review_id else "Review not found"
        )


class SlugAlreadyExistsError(ConflictError):
    def __init__(self, slug: str):
        super().__init__(f"Category with slug '{slug}' already exists")


class EmailAlreadyExistsError(ConflictError):
    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")
