# app/schemas/goal.py
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
import uuid

from app.models.goal import Timeframe

class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1)
    timeframe: Timeframe
    # Date being viewed when the goal was added; defaults to today
    on_date: Optional[date] = None

class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    category_id: uuid.UUID
    title: str
    timeframe: Timeframe
    completed: bool
    completed_at: Optional[datetime] = None
    goal_date: Optional[date] = None
    week_start_date: Optional[date] = None
    month_start_date: Optional[date] = None

class CategoryProgress(BaseModel):
    category_id: uuid.UUID
    # None means every timeframe in the category
    timeframe: Optional[Timeframe] = None
    total_goals: int
    completed_goals: int
    progress_percentage: float
