import enum
import uuid
from sqlalchemy import Column, String, ForeignKey, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship
from fittrack.core.clock import utcnow
from fittrack.core.database import Base

class NotificationType(str, enum.Enum):
    goal_achieved = "goal_achieved"
    goal_reminder = "goal_reminder"

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # Kept after the goal is deleted, with goal_id cleared
    goal_id = Column(PG_UUID(as_uuid=True), ForeignKey("goals.id", ondelete="SET NULL"), nullable=True)
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    type = Column(String, nullable=False)    # a NotificationType value
    status = Column(String, nullable=False)  # 'completed' or 'alert'
    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="notifications")
    goal = relationship("Goal")
