"""In-app notification inbox"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.core.auth import get_current_user
from app.core.dependencies import get_notification_service
from app.schemas.notification import NotificationInDB
from app.schemas.user import UserInDB
from app.services.notification_service import NotificationService

notifications_router = APIRouter(prefix="/notifications")


@notifications_router.get("", response_model=List[NotificationInDB], summary="List own notifications")
async def list_notifications(
    unread_only: bool = Query(False),
    user: UserInDB = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    return service.list_for_user(user.id, unread_only)


@notifications_router.post(
    "/{notification_id}/read", response_model=NotificationInDB, summary="Mark notification as read"
)
async def mark_notification_read(
    notification_id: UUID,
    user: UserInDB = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    return service.mark_read(notification_id, user.id)
