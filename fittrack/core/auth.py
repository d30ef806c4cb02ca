# fittrack/core/auth.py

import uuid
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Optional

from fastapi import Depends, Request
from fastapi_users import FastAPIUsers, BaseUserManager, UUIDIDMixin
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users import schemas

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship
from sqlalchemy.ext.asyncio import AsyncSession

import sendgrid
from sendgrid.helpers.mail import Mail

from .clock import utcnow
from .database import Base, get_async_session
from .config import settings

logger = logging.getLogger(__name__)

# Audience written into every access token by the JWT strategy
TOKEN_AUDIENCE = ["fastapi-users:auth"]

# 1. User DB model
class User(Base):
    __tablename__ = "users"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(length=320), unique=True, index=True, nullable=False)
    hashed_password = Column(String(length=1024), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Profile fields
    name = Column(String(length=100), nullable=True)
    bio = Column(String(length=250), nullable=True)
    avatar_url = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Goals own their progress entries; deleting the user removes everything
    goals = relationship(
        "Goal",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    progress_entries = relationship(
        "Progress",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    notifications = relationship(
        "Notification",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<User email={self.email}>"

# 2. Pydantic schemas used by the fastapi-users routers
class UserRead(schemas.BaseUser[uuid.UUID]):
    name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class UserCreate(schemas.BaseUserCreate):
    name: Optional[str] = None

async def send_email_via_sendgrid(to_email: str, subject: str, body: str) -> bool:
    """
    Send email using SendGrid API (async version).
    Returns False without sending when no API key is configured.
    """
    if not settings.SENDGRID_API_KEY:
        logger.warning(f"SENDGRID_API_KEY not configured, skipping email to {to_email}")
        return False

    try:
        logger.info(f"Attempting to send email to {to_email}")

        message = Mail(
            from_email=(settings.EMAIL_FROM, settings.EMAIL_FROM_NAME),
            to_emails=to_email,
            subject=subject,
            html_content=body
        )
        message.reply_to = settings.EMAIL_FROM

        sg = sendgrid.SendGridAPIClient(api_key=settings.SENDGRID_API_KEY)

        # The SendGrid client is blocking
        loop = asyncio.get_running_loop()
        with ThreadPoolExecutor() as executor:
            response = await loop.run_in_executor(executor, sg.send, message)

        if response.status_code == 202:
            logger.info(f"✅ Email sent successfully to {to_email}")
            return True

        logger.error(f"❌ Failed to send email. Status code: {response.status_code}")
        logger.error(f"Response body: {response.body}")
        return False

    except Exception as e:
        logger.error(f"❌ Exception while sending email to {to_email}: {str(e)}")
        return False

EMAIL_TEMPLATE = """
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{title} - FitTrack</title></head>
<body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f4f4f4;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; padding: 20px;">
        <h1 style="color: #16a34a; font-size: 24px;">FitTrack</h1>
        <p style="color: #666; line-height: 1.6;">Hello <strong>{user_name}</strong>!</p>
        <p style="color: #666; line-height: 1.6;">{intro}</p>
        <p style="text-align: center; margin: 30px 0;">
            <a href="{link}" style="background-color: #16a34a; color: #ffffff; padding: 15px 30px; text-decoration: none; border-radius: 5px;">{action}</a>
        </p>
        <p style="color: #999; font-size: 12px; word-break: break-all;">{link}</p>
    </div>
</body>
</html>
"""

def render_email(user: User, title: str, intro: str, action: str, link: str) -> str:
    return EMAIL_TEMPLATE.format(
        title=title,
        user_name=user.name or user.email.split('@')[0],
        intro=intro,
        action=action,
        link=link,
    )

# 3. User Manager
class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = settings.SECRET_KEY
    verification_token_secret = settings.SECRET_KEY

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info(f"User {user.email} has registered. Requesting verification…")
        try:
            await self.request_verify(user, request)
        except Exception as e:
            # Registration succeeds even when the verification mail cannot be sent
            logger.error(f"❌ Error requesting verification for {user.email}: {str(e)}")

    async def on_after_request_verify(self, user: User, token: str, request: Optional[Request] = None):
        logger.info(f"Verification requested for user {user.email}. Token: {token[:10]}...")
        body = render_email(
            user,
            title="Verify Email",
            intro="Thanks for joining FitTrack. Please verify your email address to start tracking your goals.",
            action="Verify Email Address",
            link=f"{settings.FRONTEND_URL}/verify-email?token={token}",
        )
        success = await send_email_via_sendgrid(user.email, "🔐 Verify your FitTrack account", body)
        if success:
            logger.info(f"✅ Verification email sent to {user.email}")

    async def on_after_forgot_password(self, user: User, token: str, request: Optional[Request] = None):
        logger.info(f"Password reset requested for user {user.email}. Token: {token[:10]}...")
        body = render_email(
            user,
            title="Reset Password",
            intro="We received a request to reset your FitTrack password. The link expires in 1 hour.",
            action="Reset Password",
            link=f"{settings.FRONTEND_URL}/reset-password?token={token}",
        )
        success = await send_email_via_sendgrid(user.email, "🔑 Reset your FitTrack password", body)
        if success:
            logger.info(f"✅ Password reset email sent to {user.email}")

    async def on_after_verify(self, user: User, request: Optional[Request] = None):
        logger.info(f"User {user.email} has been verified successfully! 🎉")

    async def on_after_reset_password(self, user: User, request: Optional[Request] = None):
        logger.info(f"Password reset completed for user {user.email}")

# 4. User Database
async def get_user_db(session: AsyncSession = Depends(get_async_session)):
    yield SQLAlchemyUserDatabase(session, User)

# 5. User Manager dependency
async def get_user_manager(user_db: SQLAlchemyUserDatabase = Depends(get_user_db)):
    yield UserManager(user_db)

# 6. Authentication
bearer_transport = BearerTransport(tokenUrl="/api/v1/auth/jwt/login")

def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(
        secret=settings.SECRET_KEY,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        token_audience=TOKEN_AUDIENCE,
        algorithm=settings.ALGORITHM,
    )

auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)

# 7. FastAPI Users instance
fastapi_users = FastAPIUsers[User, uuid.UUID](get_user_manager, [auth_backend])

__all__ = [
    "fastapi_users",
    "auth_backend",
    "get_user_db",
    "get_user_manager",
    "User",
    "UserRead",
    "UserCreate",
    "UserManager",
]
