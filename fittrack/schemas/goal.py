# fittrack/schemas/goal.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

from fittrack.core.clock import to_naive_utc
from fittrack.models.goal import GoalCategory, GoalPrivacy, GoalStatus

MAX_TARGET_VALUE = 1_000_000

class GoalBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=500)
    target_date: datetime
    target_value: float = Field(..., ge=0, le=MAX_TARGET_VALUE)
    unit: str = Field("units", min_length=1, max_length=50)
    category: GoalCategory = GoalCategory.custom
    privacy: GoalPrivacy = GoalPrivacy.private

    @field_validator("target_date")
    @classmethod
    def normalize_target_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

class GoalCreate(GoalBase):
    pass

class GoalUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    target_date: Optional[datetime] = None
    target_value: Optional[float] = Field(None, ge=0, le=MAX_TARGET_VALUE)
    current_value: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    category: Optional[GoalCategory] = None
    status: Optional[GoalStatus] = None
    privacy: Optional[GoalPrivacy] = None

    @field_validator(
        "title", "target_date", "target_value", "current_value",
        "unit", "category", "status", "privacy",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may not be null")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def clear_description(cls, value):
        # null clears the description
        return "" if value is None else value

    @field_validator("target_date")
    @classmethod
    def normalize_target_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value) if value is not None else None

class GoalRead(GoalBase):
    id: uuid.UUID
    user_id: uuid.UUID
    current_value: float
    status: GoalStatus
    progress_percentage: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class GoalInsight(BaseModel):
    goal_id: uuid.UUID
    progress_percentage: int
    status: GoalStatus
    days_remaining: int
    insight: str
    reminder: str

class FeedItem(BaseModel):
    goal_id: uuid.UUID
    user_name: Optional[str] = None
    title: str
    category: GoalCategory
    unit: str
    current_value: float
    target_value: float
    progress_percentage: int
    status: GoalStatus
    message: str
    created_at: Optional[datetime] = None
