# app/models/goal.py
import enum
import uuid
from sqlalchemy import CheckConstraint, Column, String, Date, DateTime, ForeignKey, Boolean, Uuid, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Timeframe(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (
        CheckConstraint("timeframe IN ('daily', 'weekly', 'monthly')", name="ck_goals_timeframe"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    # daily / weekly / monthly, fixed at creation
    timeframe = Column(String(length=10), nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Period anchors, only the one matching the timeframe is set
    goal_date = Column(Date, nullable=True)
    week_start_date = Column(Date, nullable=True)    # always a Sunday
    month_start_date = Column(Date, nullable=True)   # always the 1st

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    category = relationship("Category", back_populates="goals")

    def __repr__(self):
        return f"<Goal title={self.title} timeframe={self.timeframe} completed={self.completed}>"
