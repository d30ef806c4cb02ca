# fittrack/api/v1/routes/dashboard.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.core.auth import User
from fittrack.core.clock import utcnow
from fittrack.core.config import settings
from fittrack.core.database import get_async_session
from fittrack.crud.goal import get_goals_for_user
from fittrack.crud.progress import get_progress_for_user
from fittrack.models.goal import GoalStatus
from fittrack.schemas.analytics import DashboardSummary
from fittrack.api.deps import get_current_user
from fittrack.api.v1.routes.goals import serialize_goal
from fittrack.utils import goals as goal_utils
from fittrack.utils import progress as progress_utils

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary(
    upcoming_days: int = Query(settings.UPCOMING_GOAL_DAYS, ge=1, le=365),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Everything the dashboard shows in one call:
    - goal counts by status
    - current and longest logging streak with a motivational message
    - goals due within `upcoming_days`
    - a reminder for every active goal, highest progress first
    """
    now = utcnow()
    goals = await get_goals_for_user(user.id, db)
    entries = await get_progress_for_user(user.id, db)

    streak = progress_utils.calculate_streak(entries)
    active = [
        goal for goal in goal_utils.sort_by_progress_descending(goals)
        if goal_utils.effective_status(goal, now) == GoalStatus.active
    ]

    return DashboardSummary(
        goals=goal_utils.goal_summary(goals, now),
        current_streak=streak,
        longest_streak=progress_utils.longest_streak(entries),
        motivational_message=progress_utils.motivational_message(streak),
        upcoming_goals=[
            serialize_goal(goal, now)
            for goal in goal_utils.upcoming_goals(goals, upcoming_days, now)
        ],
        reminders=[goal_utils.reminder_text(goal, now) for goal in active],
    )
