"""Authentication dependencies for API key (Bearer token) authentication."""
from typing import Optional, Tuple
from fastapi import Request, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import logging

from app.core.errors import ForbiddenError, UnauthorizedError
from app.db.base import get_db_session
from app.schemas.user import UserInDB
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


class UserAuth:
    """
    Resolve the calling user from an `Authorization: Bearer <api key>` header.

    Missing or unknown keys raise UnauthorizedError; when roles are given,
    a user outside them raises ForbiddenError.
    """

    def __init__(self, roles: Optional[Tuple[str, ...]] = None):
        self.roles = roles

    def __call__(
        self,
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
        db: Session = Depends(get_db_session),
    ) -> UserInDB:
        if credentials is None or not credentials.credentials:
            raise UnauthorizedError("Missing API key")

        user = UserService(db).authenticate(credentials.credentials)
        if not user:
            client = request.client.host if request.client else "unknown"
            logger.warning(f"Invalid API key attempted from {client}")
            raise UnauthorizedError("Invalid API key")

        if self.roles and user.role not in self.roles:
            raise ForbiddenError(f"Requires one of the roles: {', '.join(self.roles)}")

        request.state.user = user
        return user


# Pre-configured auth dependencies for common use cases
get_current_user = UserAuth()
require_admin = UserAuth(roles=("admin",))
require_provider = UserAuth(roles=("provider", "admin"))


def ensure_owner_or_admin(user: UserInDB, owner_id) -> None:
    """Only the owning user or an admin may modify a resource"""
    if user.role != "admin" and user.id != owner_id:
        raise ForbiddenError("You can only modify your own resources")
