# fittrack/crud/notification.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, desc, func
from fittrack.core.db_utils import with_db_retry
from fittrack.models.notification import Notification, NotificationType
from fittrack.schemas.notification import NotificationCreate
from typing import List, Optional
import uuid

def _owned(user_id: uuid.UUID, goal_id: Optional[uuid.UUID] = None) -> list:
    conditions = [Notification.user_id == user_id]
    if goal_id is not None:
        conditions.append(Notification.goal_id == goal_id)
    return conditions

async def create_notification(db: AsyncSession, notification: NotificationCreate) -> Notification:
    db_notification = Notification(**notification.model_dump())
    db.add(db_notification)
    await db.commit()
    await db.refresh(db_notification)
    return db_notification

@with_db_retry()
async def get_notifications_for_user(
    db: AsyncSession,
    user_id: uuid.UUID,
    unread_only: bool = False,
    notification_type: Optional[NotificationType] = None,
    goal_id: Optional[uuid.UUID] = None,
    limit: int = 50,
) -> List[Notification]:
    """Newest first, optionally narrowed to unread ones, one type or one goal"""
    query = select(Notification).where(*_owned(user_id, goal_id))
    if unread_only:
        query = query.where(Notification.is_read == False)
    if notification_type is not None:
        query = query.where(Notification.type == notification_type.value)

    result = await db.execute(query.order_by(desc(Notification.created_at)).limit(limit))
    return result.scalars().all()

@with_db_retry()
async def get_unread_count(db: AsyncSession, user_id: uuid.UUID) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Notification)
        .where(Notification.user_id == user_id, Notification.is_read == False)
    )
    return result.scalar_one() or 0

async def mark_notification_as_read(db: AsyncSession, notification_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Notification]:
    result = await db.execute(
        select(Notification).where(Notification.id == notification_id, *_owned(user_id))
    )
    notification = result.scalar_one_or_none()
    if notification is None:
        return None

    notification.is_read = True
    await db.commit()
    await db.refresh(notification)
    return notification

async def mark_all_notifications_as_read(
    db: AsyncSession,
    user_id: uuid.UUID,
    goal_id: Optional[uuid.UUID] = None,
) -> int:
    """Mark the user's unread notifications (or only one goal's) as read; returns how many changed"""
    result = await db.execute(
        update(Notification)
        .where(*_owned(user_id, goal_id), Notification.is_read == False)
        .values(is_read=True)
    )
    await db.commit()
    return result.rowcount

async def delete_notification(db: AsyncSession, notification_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    result = await db.execute(
        delete(Notification).where(Notification.id == notification_id, *_owned(user_id))
    )
    await db.commit()
    return result.rowcount > 0
