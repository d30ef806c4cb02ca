# fittrack/models/progress.py
import uuid
from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship
from fittrack.core.clock import utcnow
from fittrack.core.database import Base

class Progress(Base):
    __tablename__ = "progress_entries"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    goal_id = Column(PG_UUID(as_uuid=True), ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    # Copy of the goal owner, used to scope every lookup to the current user
    user_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(Float, nullable=False)
    date = Column(DateTime, nullable=False)
    notes = Column(String(length=500), nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    goal = relationship("Goal", back_populates="progress_entries")
    user = relationship("User", back_populates="progress_entries")

    def __repr__(self):
        return f"<Progress value={self.value} date={self.date} goal_id={self.goal_id}>"
