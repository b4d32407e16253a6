# app/schemas/notification.py
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class NotificationCreate(BaseModel):
    user_id: UUID
    kind: str
    subject: str
    body: Optional[str] = None


class NotificationInDB(NotificationCreate):
    id: UUID
    is_read: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
