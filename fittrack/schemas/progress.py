# fittrack/schemas/progress.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import uuid

from fittrack.core.clock import to_naive_utc

MAX_PROGRESS_VALUE = 1_000_000

class ProgressCreate(BaseModel):
    goal_id: uuid.UUID
    value: float = Field(..., ge=0, le=MAX_PROGRESS_VALUE)
    date: datetime
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

class ProgressUpdate(BaseModel):
    value: Optional[float] = Field(None, ge=0, le=MAX_PROGRESS_VALUE)
    date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("value", "date", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may not be null")
        return value

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value) if value is not None else None

class ProgressRead(BaseModel):
    id: uuid.UUID
    goal_id: uuid.UUID
    user_id: uuid.UUID
    value: float
    date: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
