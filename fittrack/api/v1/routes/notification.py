# fittrack/api/v1/routes/notification.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from fittrack.schemas.notification import NotificationRead
from fittrack.models.notification import NotificationType
from fittrack.crud import notification as crud_notification
from fittrack.api import deps
from fittrack.core.database import get_async_session
from fittrack.core.auth import User

router = APIRouter()

@router.get("", response_model=List[NotificationRead])
async def get_notifications(
    unread_only: bool = Query(False, description="Only unread notifications"),
    type: Optional[NotificationType] = Query(None, description="Only achievements or only reminders"),
    goal_id: Optional[UUID] = Query(None, description="Only notifications about this goal"),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    """Achievement and reminder notifications of the current user, newest first"""
    return await crud_notification.get_notifications_for_user(
        db,
        user_id=current_user.id,
        unread_only=unread_only,
        notification_type=type,
        goal_id=goal_id,
        limit=limit,
    )

@router.get("/unread-count", response_model=int)
async def get_unread_count(
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    return await crud_notification.get_unread_count(db, current_user.id)

@router.post("/read_all", response_model=int)
async def mark_all_notifications_as_read(
    goal_id: Optional[UUID] = Query(None, description="Limit to notifications about this goal"),
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    """Returns the number of notifications that were unread"""
    return await crud_notification.mark_all_notifications_as_read(db, current_user.id, goal_id=goal_id)

@router.post("/{notification_id}/read", response_model=NotificationRead)
async def mark_notification_as_read(
    notification_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    notification = await crud_notification.mark_notification_as_read(db, notification_id, current_user.id)
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification

@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(deps.get_current_user)
):
    deleted = await crud_notification.delete_notification(db, notification_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Notification not found")
    return None
