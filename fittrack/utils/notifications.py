# fittrack/utils/notifications.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.crud.notification import create_notification
from fittrack.models.goal import Goal
from fittrack.models.notification import Notification, NotificationType
from fittrack.schemas.notification import NotificationCreate
from fittrack.utils.goals import reminder_text

logger = logging.getLogger(__name__)

# status is "completed" for achievements and "alert" for reminders
async def notify_goal_achieved(db: AsyncSession, goal: Goal) -> Notification:
    notification = NotificationCreate(
        user_id=goal.user_id,
        goal_id=goal.id,
        title="Goal Achieved!",
        message=(
            f'Congratulations! You reached {goal.current_value:g} {goal.unit} '
            f'on your goal "{goal.title}".'
        ),
        type=NotificationType.goal_achieved,
        status="completed",
    )
    notification_obj = await create_notification(db, notification)
    logger.info(f"🎉 Goal {goal.id} completed, notification {notification_obj.id} created")
    return notification_obj

async def notify_goal_reminder(db: AsyncSession, goal: Goal) -> Notification:
    notification = NotificationCreate(
        user_id=goal.user_id,
        goal_id=goal.id,
        title="Goal Reminder",
        message=reminder_text(goal),
        type=NotificationType.goal_reminder,
        status="alert",
    )
    return await create_notification(db, notification)
