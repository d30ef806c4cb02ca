# fittrack/api/v1/routes/goals.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime
from typing import List, Literal, Optional
import logging
import uuid

from fittrack.schemas.goal import GoalCreate, GoalUpdate, GoalRead, GoalInsight
from fittrack.schemas.analytics import GoalAnalytics, InterpolationResult
from fittrack.schemas.notification import NotificationRead
from fittrack.models.goal import Goal, GoalCategory
from fittrack.crud.goal import (
    create_goal_for_user,
    get_goals_for_user,
    get_goal_by_id,
    update_goal,
    delete_goal,
)
from fittrack.crud.progress import get_progress_for_goal
from fittrack.core.clock import to_naive_utc, utcnow
from fittrack.core.config import settings
from fittrack.core.database import get_async_session
from fittrack.core.exceptions import InsufficientDataError
from fittrack.core.auth import User
from fittrack.api.deps import get_current_user
from fittrack.utils import goals as goal_utils
from fittrack.utils import progress as progress_utils
from fittrack.utils.notifications import notify_goal_reminder

router = APIRouter(prefix="/goals", tags=["goals"])
logger = logging.getLogger(__name__)

def serialize_goal(goal: Goal, now: Optional[datetime] = None) -> GoalRead:
    """Goal as returned to clients, with its percentage and the status it has right now"""
    now = now or utcnow()
    return GoalRead.model_validate(goal).model_copy(update={
        "progress_percentage": goal_utils.goal_percentage(goal),
        "status": goal_utils.effective_status(goal, now),
    })

async def get_owned_goal(goal_id: uuid.UUID, user: User, db: AsyncSession) -> Goal:
    goal = await get_goal_by_id(goal_id, user.id, db)
    if not goal:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return goal

@router.get("", response_model=List[GoalRead])
async def read_goals(
    category: Optional[GoalCategory] = Query(None, description="Only return goals of this category"),
    sort: Literal["created", "progress"] = Query("created", description="Newest first, or highest progress first"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goals = await get_goals_for_user(user.id, db)
    if category is not None:
        goals = goal_utils.filter_by_category(goals, category)
    if sort == "progress":
        goals = goal_utils.sort_by_progress_descending(goals)
    now = utcnow()
    return [serialize_goal(goal, now) for goal in goals]

@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal_in: GoalCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    try:
        goal = await create_goal_for_user(user.id, goal_in, db)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error creating goal: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred while creating goal"
        )
    logger.info(f"Goal {goal.id} created for user {user.id}")
    return serialize_goal(goal)

@router.get("/upcoming", response_model=List[GoalRead])
async def read_upcoming_goals(
    days: int = Query(settings.UPCOMING_GOAL_DAYS, ge=1, le=365, description="Look-ahead window in days"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Active goals whose target date falls within the next `days` days"""
    now = utcnow()
    goals = await get_goals_for_user(user.id, db)
    return [serialize_goal(goal, now) for goal in goal_utils.upcoming_goals(goals, days, now)]

@router.get("/{goal_id}", response_model=GoalRead)
async def read_goal(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await get_owned_goal(goal_id, user, db)
    return serialize_goal(goal)

async def _apply_goal_update(goal_id: uuid.UUID, goal_in: GoalUpdate, user: User, db: AsyncSession) -> GoalRead:
    goal = await get_owned_goal(goal_id, user, db)
    try:
        goal = await update_goal(goal, goal_in, db)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error updating goal {goal_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred while updating goal"
        )
    return serialize_goal(goal)

@router.put("/{goal_id}", response_model=GoalRead)
async def replace_goal_endpoint(
    goal_id: uuid.UUID,
    goal_in: GoalCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Replace every editable field of a goal"""
    return await _apply_goal_update(goal_id, GoalUpdate(**goal_in.model_dump()), user, db)

@router.patch("/{goal_id}", response_model=GoalRead)
async def update_goal_endpoint(
    goal_id: uuid.UUID,
    goal_in: GoalUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Update some fields of a goal.

    The stored status is re-derived from the values afterwards; only `paused`
    is kept as chosen.
    """
    if not goal_in.model_dump(exclude_unset=True):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="No fields provided for update")
    return await _apply_goal_update(goal_id, goal_in, user, db)

@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal_endpoint(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await get_owned_goal(goal_id, user, db)
    try:
        await delete_goal(goal, db)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error deleting goal {goal_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred while deleting goal"
        )
    logger.info(f"Goal {goal_id} and its progress entries deleted for user {user.id}")
    return None

@router.get("/{goal_id}/insight", response_model=GoalInsight)
async def read_goal_insight(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await get_owned_goal(goal_id, user, db)
    now = utcnow()
    return GoalInsight(
        goal_id=goal.id,
        progress_percentage=goal_utils.goal_percentage(goal),
        status=goal_utils.effective_status(goal, now),
        days_remaining=goal_utils.days_remaining(goal.target_date, now),
        insight=goal_utils.generate_insight(goal, now),
        reminder=goal_utils.reminder_text(goal, now),
    )

@router.get("/{goal_id}/analytics", response_model=GoalAnalytics)
async def read_goal_analytics(
    goal_id: uuid.UUID,
    project_days: int = Query(7, ge=0, le=365, description="Days of projected progress to include"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Trend, streaks, aggregate statistics and a linear projection of a goal's
    progress entries.

    - **aggregate** is null when the goal has no entries
    - **projection** is null (with **projection_error** set) when fewer than two entries exist
    """
    goal = await get_owned_goal(goal_id, user, db)
    entries = await get_progress_for_goal(goal.id, user.id, db)
    now = utcnow()

    projection = None
    projection_error = None
    try:
        projection = progress_utils.project_future(entries, project_days)
    except InsufficientDataError as e:
        projection_error = str(e)

    streak = progress_utils.calculate_streak(entries)
    return GoalAnalytics(
        goal_id=goal.id,
        progress_percentage=goal_utils.goal_percentage(goal),
        trend=progress_utils.analyze_trend(entries),
        current_streak=streak,
        longest_streak=progress_utils.longest_streak(entries),
        motivational_message=progress_utils.motivational_message(streak),
        aggregate=progress_utils.aggregate(entries) if entries else None,
        projection=projection,
        projection_error=projection_error,
        insight=goal_utils.generate_insight(goal, now),
        reminder=goal_utils.reminder_text(goal, now),
    )

@router.get("/{goal_id}/interpolate", response_model=InterpolationResult)
async def interpolate_goal_progress(
    goal_id: uuid.UUID,
    at: datetime = Query(..., description="Moment to estimate the value at"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Estimate the goal's value at a moment between two logged entries"""
    goal = await get_owned_goal(goal_id, user, db)
    entries = await get_progress_for_goal(goal.id, user.id, db)
    at = to_naive_utc(at)
    # AnalyticsError subclasses are turned into 400 responses by the app handler
    start, end = progress_utils.bracketing_entries(entries, at)
    return InterpolationResult(
        goal_id=goal.id,
        at=at,
        value=progress_utils.interpolate(start, end, at),
        start_date=start.date,
        end_date=end.date,
    )

@router.post("/{goal_id}/reminder", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
async def create_goal_reminder(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Store the goal's current reminder text as a notification"""
    goal = await get_owned_goal(goal_id, user, db)
    return await notify_goal_reminder(db, goal)
