# fittrack/schemas/analytics.py
from typing import List, Optional
from pydantic import BaseModel
from datetime import datetime
import enum
import uuid

from fittrack.schemas.goal import GoalRead

class ProgressTrend(str, enum.Enum):
    increasing = "increasing"
    decreasing = "decreasing"
    stable = "stable"

class GoalSummary(BaseModel):
    total_goals: int = 0
    active_goals: int = 0
    completed_goals: int = 0
    abandoned_goals: int = 0
    paused_goals: int = 0

class ProgressAggregate(BaseModel):
    goal_id: Optional[uuid.UUID] = None
    total: float
    average: float
    min: float
    max: float
    count: int
    last_updated: datetime

class ProjectedProgress(BaseModel):
    """Synthetic entry produced by a projection; never persisted"""
    id: str
    goal_id: Optional[uuid.UUID] = None
    user_id: Optional[uuid.UUID] = None
    value: float
    date: datetime

class GoalAnalytics(BaseModel):
    goal_id: uuid.UUID
    progress_percentage: int
    trend: ProgressTrend
    current_streak: int
    longest_streak: int
    motivational_message: str
    aggregate: Optional[ProgressAggregate] = None
    projection: Optional[List[ProjectedProgress]] = None
    projection_error: Optional[str] = None
    insight: str
    reminder: str

class InterpolationResult(BaseModel):
    goal_id: uuid.UUID
    at: datetime
    value: float
    start_date: datetime
    end_date: datetime

class DashboardSummary(BaseModel):
    goals: GoalSummary
    current_streak: int
    longest_streak: int
    motivational_message: str
    upcoming_goals: List[GoalRead]
    reminders: List[str]
