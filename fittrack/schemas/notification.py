from pydantic import BaseModel
from typing import Literal, Optional
from datetime import datetime
import uuid

from fittrack.models.notification import NotificationType

class NotificationBase(BaseModel):
    title: str
    message: str
    type: NotificationType
    status: Literal["completed", "alert"]
    goal_id: Optional[uuid.UUID] = None

    class Config:
        use_enum_values = True

class NotificationCreate(NotificationBase):
    user_id: uuid.UUID

class NotificationRead(NotificationBase):
    id: uuid.UUID
    user_id: uuid.UUID
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True
        use_enum_values = True
