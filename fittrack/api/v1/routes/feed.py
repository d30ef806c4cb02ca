# fittrack/api/v1/routes/feed.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from fittrack.core.auth import User
from fittrack.core.clock import utcnow
from fittrack.core.config import settings
from fittrack.core.database import get_async_session
from fittrack.crud.goal import get_public_goals
from fittrack.schemas.goal import FeedItem
from fittrack.api.deps import get_current_user
from fittrack.utils import goals as goal_utils

router = APIRouter(prefix="/feed", tags=["feed"])

@router.get("", response_model=List[FeedItem])
async def read_feed(
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Public goals of other users, newest first"""
    goals = await get_public_goals(
        db,
        exclude_user_id=user.id,
        skip=skip,
        limit=limit or settings.FEED_PAGE_SIZE,
    )
    now = utcnow()
    return [
        FeedItem(
            goal_id=goal.id,
            user_name=goal.user.name if goal.user else None,
            title=goal.title,
            category=goal.category,
            unit=goal.unit,
            current_value=goal.current_value,
            target_value=goal.target_value,
            progress_percentage=goal_utils.goal_percentage(goal),
            status=goal_utils.effective_status(goal, now),
            message=goal_utils.shareable_message(goal),
            created_at=goal.created_at,
        )
        for goal in goals
    ]
