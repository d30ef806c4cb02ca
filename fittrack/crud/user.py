# fittrack/crud/user.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from fittrack.core.auth import User
from fittrack.core.db_utils import with_db_retry
from typing import Any, Dict, Optional

@with_db_retry()
async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(func.lower(User.email) == func.lower(email)))
    return result.unique().scalar_one_or_none()

async def update_user_fields(user: User, fields: Dict[str, Any], db: AsyncSession) -> User:
    for field, value in fields.items():
        setattr(user, field, value)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
