# fittrack/api/v1/routes/progress.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Literal, Optional
import logging
import uuid

from fittrack.schemas.progress import ProgressCreate, ProgressUpdate, ProgressRead
from fittrack.models.progress import Progress
from fittrack.crud.goal import get_goal_by_id, refresh_goal_progress
from fittrack.crud.progress import (
    create_progress_for_user,
    get_progress_for_goal,
    get_progress_by_id,
    update_progress,
    delete_progress,
)
from fittrack.core.database import get_async_session
from fittrack.core.auth import User
from fittrack.api.deps import get_current_user
from fittrack.utils.notifications import notify_goal_achieved
from fittrack.utils.progress import sort_entries

router = APIRouter(prefix="/progress", tags=["progress"])
logger = logging.getLogger(__name__)

async def get_owned_entry(progress_id: uuid.UUID, user: User, db: AsyncSession) -> Progress:
    entry = await get_progress_by_id(progress_id, user.id, db)
    if not entry:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Progress entry not found")
    return entry

async def sync_goal(goal_id: uuid.UUID, user: User, db: AsyncSession) -> None:
    """Carry the latest entry over to the goal and announce a completion"""
    goal = await get_goal_by_id(goal_id, user.id, db)
    if goal is None:
        return
    goal, completed_now = await refresh_goal_progress(goal, db)
    if completed_now:
        await notify_goal_achieved(db, goal)

@router.get("", response_model=List[ProgressRead])
async def read_progress(
    goal_id: Optional[uuid.UUID] = Query(None, description="Goal whose entries to list"),
    sort_by: Literal["date", "value"] = Query("date"),
    order: Literal["asc", "desc"] = Query("asc"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    if goal_id is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Invalid goalId")
    entries = await get_progress_for_goal(goal_id, user.id, db)
    return sort_entries(entries, sort_by, order)

@router.post("", response_model=ProgressRead, status_code=status.HTTP_201_CREATED)
async def add_progress(
    progress_in: ProgressCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    # Entries may only be logged against the user's own goals
    goal = await get_goal_by_id(progress_in.goal_id, user.id, db)
    if not goal:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Goal not found")

    user_id, goal_id = user.id, goal.id
    try:
        entry = await create_progress_for_user(user_id, progress_in, db)
        await sync_goal(goal_id, user, db)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error adding progress to goal {goal_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred while adding progress"
        )
    return entry

@router.get("/{progress_id}", response_model=ProgressRead)
async def read_progress_entry(
    progress_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_owned_entry(progress_id, user, db)

async def _apply_progress_update(
    progress_id: uuid.UUID,
    progress_in: ProgressUpdate,
    user: User,
    db: AsyncSession,
) -> Progress:
    entry = await get_owned_entry(progress_id, user, db)
    try:
        entry = await update_progress(entry, progress_in, db)
        await sync_goal(entry.goal_id, user, db)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error updating progress entry {progress_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred while updating progress"
        )
    return entry

@router.put("/{progress_id}", response_model=ProgressRead)
async def replace_progress_entry(
    progress_id: uuid.UUID,
    progress_in: ProgressCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Replace value, date and notes of an entry; an entry cannot move to another goal"""
    entry = await get_owned_entry(progress_id, user, db)
    if progress_in.goal_id != entry.goal_id:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Progress entries cannot move between goals")
    update_in = ProgressUpdate(value=progress_in.value, date=progress_in.date, notes=progress_in.notes)
    return await _apply_progress_update(progress_id, update_in, user, db)

@router.patch("/{progress_id}", response_model=ProgressRead)
async def update_progress_entry(
    progress_id: uuid.UUID,
    progress_in: ProgressUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    if not progress_in.model_dump(exclude_unset=True):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="No fields provided for update")
    return await _apply_progress_update(progress_id, progress_in, user, db)

@router.delete("/{progress_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_progress_entry(
    progress_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    entry = await get_owned_entry(progress_id, user, db)
    goal_id = entry.goal_id
    try:
        await delete_progress(entry, db)
        await sync_goal(goal_id, user, db)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error deleting progress entry {progress_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred while deleting progress"
        )
    return None
