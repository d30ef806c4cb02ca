# fittrack/crud/progress.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from fittrack.core.db_utils import with_db_retry
from fittrack.models.progress import Progress
from typing import List, Optional
import uuid
from fittrack.schemas.progress import ProgressCreate, ProgressUpdate

@with_db_retry()
async def get_progress_for_goal(goal_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> List[Progress]:
    result = await db.execute(
        select(Progress)
        .where(Progress.goal_id == goal_id, Progress.user_id == user_id)
        .order_by(Progress.date)
    )
    return result.scalars().all()

@with_db_retry()
async def get_progress_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Progress]:
    result = await db.execute(select(Progress).where(Progress.user_id == user_id))
    return result.scalars().all()

@with_db_retry()
async def get_progress_by_id(progress_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Progress]:
    result = await db.execute(
        select(Progress).where(Progress.id == progress_id, Progress.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_progress_for_user(user_id: uuid.UUID, progress_in: ProgressCreate, db: AsyncSession) -> Progress:
    new_entry = Progress(**progress_in.model_dump(), user_id=user_id)
    db.add(new_entry)
    await db.commit()
    await db.refresh(new_entry)
    return new_entry

async def update_progress(entry: Progress, progress_in: ProgressUpdate, db: AsyncSession) -> Progress:
    for field, value in progress_in.model_dump(exclude_unset=True).items():
        setattr(entry, field, value)
    db.add(entry)
    await db.commit()
    await db.refresh(entry)
    return entry

async def delete_progress(entry: Progress, db: AsyncSession) -> None:
    await db.delete(entry)
    await db.commit()
