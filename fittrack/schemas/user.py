# fittrack/schemas/user.py
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, HttpUrl, TypeAdapter, ValidationError, field_validator
import uuid

from fittrack.schemas.analytics import GoalSummary

# Public profile returned on GET /users/me
class UserProfile(BaseModel):
    id: uuid.UUID
    name: Optional[str] = None
    email: EmailStr
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Fields accepted on PUT/PATCH /users/me
class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)
    bio: Optional[str] = Field(None, max_length=250)
    # An empty string clears the avatar
    avatar_url: Optional[str] = None

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def reject_null(cls, value):
        # bio and avatar_url may be cleared with null
        if value is None:
            raise ValueError("Field may not be null")
        return value

    @field_validator("avatar_url")
    @classmethod
    def validate_avatar_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return value
        try:
            return str(TypeAdapter(HttpUrl).validate_python(value))
        except ValidationError:
            raise ValueError("Avatar URL must be a valid http or https URL")

class UserStats(BaseModel):
    goals: GoalSummary
    current_streak: int
    longest_streak: int
    total_progress_entries: int
