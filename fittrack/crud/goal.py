# fittrack/crud/goal.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, desc, update
from fittrack.core.auth import User
from fittrack.core.db_utils import with_db_retry
from fittrack.models.goal import Goal, GoalPrivacy, GoalStatus
from fittrack.models.notification import Notification
from fittrack.models.progress import Progress
from fittrack.utils.goals import derive_status
from typing import List, Optional, Tuple
import uuid
from fittrack.schemas.goal import GoalCreate, GoalUpdate

def apply_derived_status(goal: Goal) -> Goal:
    """Re-derive the stored status from the goal's values unless the goal is paused"""
    if goal.status != GoalStatus.paused:
        goal.status = derive_status(goal.current_value or 0.0, goal.target_value, goal.target_date)
    return goal

@with_db_retry()
async def get_goals_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Goal]:
    result = await db.execute(
        select(Goal).where(Goal.user_id == user_id).order_by(desc(Goal.created_at))
    )
    return result.unique().scalars().all()

@with_db_retry()
async def get_goal_by_id(goal_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Goal]:
    result = await db.execute(
        select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
    )
    return result.unique().scalar_one_or_none()

async def create_goal_for_user(user_id: uuid.UUID, goal_in: GoalCreate, db: AsyncSession) -> Goal:
    new_goal = Goal(**goal_in.model_dump(), user_id=user_id, current_value=0.0, status=GoalStatus.active)
    apply_derived_status(new_goal)
    db.add(new_goal)
    await db.commit()
    await db.refresh(new_goal)
    return new_goal

async def update_goal(goal: Goal, goal_in: GoalUpdate, db: AsyncSession) -> Goal:
    for field, value in goal_in.model_dump(exclude_unset=True).items():
        setattr(goal, field, value)
    apply_derived_status(goal)
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal

async def delete_goal(goal: Goal, db: AsyncSession) -> None:
    # Progress entries cannot outlive their goal; notifications stay, unlinked
    await db.execute(delete(Progress).where(Progress.goal_id == goal.id))
    await db.execute(
        update(Notification).where(Notification.goal_id == goal.id).values(goal_id=None)
    )
    await db.delete(goal)
    await db.commit()

async def refresh_goal_progress(goal: Goal, db: AsyncSession) -> Tuple[Goal, bool]:
    """
    Set the goal's current value from its most recent progress entry and
    re-derive its status.

    Returns the goal and whether this change completed it.
    """
    result = await db.execute(
        select(Progress.value)
        .where(Progress.goal_id == goal.id)
        .order_by(desc(Progress.date), desc(Progress.created_at))
        .limit(1)
    )
    latest_value = result.scalar_one_or_none()

    was_completed = goal.status == GoalStatus.completed
    goal.current_value = latest_value if latest_value is not None else 0.0
    apply_derived_status(goal)
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal, goal.status == GoalStatus.completed and not was_completed

@with_db_retry()
async def get_public_goals(
    db: AsyncSession,
    exclude_user_id: Optional[uuid.UUID] = None,
    skip: int = 0,
    limit: int = 20,
) -> List[Goal]:
    """Public goals for the feed, newest first"""
    query = (
        select(Goal)
        .join(User, Goal.user_id == User.id)
        .where(Goal.privacy == GoalPrivacy.public, User.is_active == True)
    )
    if exclude_user_id is not None:
        query = query.where(Goal.user_id != exclude_user_id)
    query = query.order_by(desc(Goal.created_at)).offset(skip).limit(limit)
    result = await db.execute(query)
    return result.unique().scalars().all()
