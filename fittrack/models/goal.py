# fittrack/models/goal.py
import enum
import uuid
from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Enum
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship
from fittrack.core.clock import utcnow
from fittrack.core.database import Base

class GoalCategory(str, enum.Enum):
    weight_loss = "weight_loss"
    muscle_gain = "muscle_gain"
    endurance = "endurance"
    flexibility = "flexibility"
    strength = "strength"
    general_fitness = "general_fitness"
    nutrition = "nutrition"
    mental_health = "mental_health"
    custom = "custom"

class GoalStatus(str, enum.Enum):
    active = "active"
    completed = "completed"
    abandoned = "abandoned"
    paused = "paused"

class GoalPrivacy(str, enum.Enum):
    public = "public"
    friends_only = "friends_only"
    private = "private"

class Goal(Base):
    __tablename__ = "goals"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(length=100), nullable=False)
    description = Column(String(length=500), nullable=False, default="")
    target_date = Column(DateTime, nullable=False)
    target_value = Column(Float, nullable=False)
    # Mirrors the value of the most recent progress entry
    current_value = Column(Float, nullable=False, default=0.0)
    unit = Column(String(length=50), nullable=False, default="units")
    category = Column(Enum(GoalCategory), nullable=False, default=GoalCategory.custom)
    status = Column(Enum(GoalStatus), nullable=False, default=GoalStatus.active)
    privacy = Column(Enum(GoalPrivacy), nullable=False, default=GoalPrivacy.private)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="goals", lazy="joined")
    progress_entries = relationship(
        "Progress",
        back_populates="goal",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Goal title={self.title} target={self.target_value} user_id={self.user_id}>"
