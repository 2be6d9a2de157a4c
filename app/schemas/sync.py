# app/schemas/sync.py
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field


class SyncResult(BaseModel):
    """Outcome of one rollover pass, serialized with the camelCase keys clients expect."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    current_date: datetime = Field(..., alias="currentDate")
    week_start: date = Field(..., alias="weekStart")
    month_start: date = Field(..., alias="monthStart")
    weekly_goals_reset: int = Field(0, alias="weeklyGoalsReset")
    monthly_goals_reset: int = Field(0, alias="monthlyGoalsReset")


class ErrorResponse(BaseModel):
    error: str
