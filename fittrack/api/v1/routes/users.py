# fittrack/api/v1/routes/users.py
import uuid
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_users import BaseUserManager
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from fittrack.core.auth import get_user_manager, User
from fittrack.core.database import get_async_session
from fittrack.crud.goal import get_goals_for_user
from fittrack.crud.progress import get_progress_for_user
from fittrack.crud.user import get_user_by_email, update_user_fields
from fittrack.schemas.user import UserProfile, UserUpdate, UserStats
from fittrack.api.deps import get_current_user
from fittrack.utils.goals import goal_summary
from fittrack.utils.progress import calculate_streak, longest_streak

router = APIRouter(tags=["User Management"])
logger = logging.getLogger(__name__)

# 1) GET /users/me
@router.get("/me", response_model=UserProfile)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return user

async def _update_profile(
    user_update: UserUpdate,
    user: User,
    user_manager: BaseUserManager[User, uuid.UUID],
    db: AsyncSession,
) -> User:
    update_dict = user_update.model_dump(exclude_unset=True)

    if not update_dict:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields provided for update"
        )

    email = update_dict.get("email")
    if email and email.lower() != user.email.lower():
        existing = await get_user_by_email(email, db)
        if existing is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email address is already in use"
            )

    password = update_dict.pop("password", None)
    if password:
        update_dict["hashed_password"] = user_manager.password_helper.hash(password)

    if update_dict.get("avatar_url") == "":
        update_dict["avatar_url"] = None

    # The instance is expired by a rollback, so read the id up front
    user_id = user.id
    try:
        return await update_user_fields(user, update_dict, db)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error updating profile of user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred while updating profile"
        )

# 2) PUT/PATCH /users/me
@router.put("/me", response_model=UserProfile)
@router.patch("/me", response_model=UserProfile)
async def update_own_profile(
    user_update: UserUpdate,
    user: User = Depends(get_current_user),
    user_manager: BaseUserManager[User, uuid.UUID] = Depends(get_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """Update current user's profile; a new password is hashed before it is stored"""
    return await _update_profile(user_update, user, user_manager, db)

# 3) DELETE /users/me
@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_own_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Delete current user's account together with goals, progress and notifications"""
    user_id = user.id
    try:
        await db.delete(user)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error deleting user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred while deleting account"
        )
    logger.info(f"User {user_id} deleted their account")
    return None

# 4) GET /users/me/stats
@router.get("/me/stats", response_model=UserStats)
async def read_own_stats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Goal counts by status and logging streaks across all goals"""
    goals = await get_goals_for_user(user.id, db)
    entries = await get_progress_for_user(user.id, db)
    return UserStats(
        goals=goal_summary(goals),
        current_streak=calculate_streak(entries),
        longest_streak=longest_streak(entries),
        total_progress_entries=len(entries),
    )
