# app/api/v1/routes/sync.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.sync import SyncResult, ErrorResponse
from app.utils.goal_sync import sync_goal_periods
from app.core.clock import Clock, get_clock
from app.core.database import get_async_session
from app.core.auth import User
from app.api.deps import get_current_user

router = APIRouter(tags=["goals"])

@router.post(
    "/sync-goals",
    response_model=SyncResult,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def sync_goals(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    """
    Reset weekly and monthly goals whose period has rolled over.

    Safe to call on every session load; a second call in the same period
    reports zero resets.

    Returns:
    - **currentDate**: Server instant used for the boundaries
    - **weekStart** / **monthStart**: Current period anchors
    - **weeklyGoalsReset** / **monthlyGoalsReset**: Goals moved to the current period
    """
    return await sync_goal_periods(user.id, clock(), db)
