# app/utils/goal_sync.py
"""
Period rollover for weekly and monthly goals.

A client triggers this once per session load. Every weekly goal whose
week_start_date is not the current Sunday, and every monthly goal whose
month_start_date is not the 1st of the current month, is reopened and
moved to the current period. Daily goals are separate rows per day and
are never touched here.

The target anchors depend only on the clock, so concurrent or repeated
runs converge on the same rows without locking.
"""
import logging
import uuid
from datetime import date, datetime
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import reference_timezone
from app.core.errors import StoreReadFailure, StoreWriteFailure
from app.crud.category import get_category_ids_for_user
from app.crud.goal import count_stale_goals, reset_stale_goals
from app.models.goal import Timeframe
from app.schemas.sync import SyncResult
from app.utils.periods import month_start_of, week_start_of

logger = logging.getLogger(__name__)


async def _roll_over(
    category_ids: List[uuid.UUID],
    timeframe: Timeframe,
    anchor: date,
    db: AsyncSession,
) -> int:
    """Read how many goals of one timeframe are stale, then reset them in one batch."""
    try:
        stale = await count_stale_goals(category_ids, timeframe, anchor, db)
    except SQLAlchemyError as e:
        logger.error(f"Failed to query {timeframe.value} goals: {str(e)}")
        raise StoreReadFailure(f"Failed to read {timeframe.value} goals") from e

    if not stale:
        return 0

    logger.info(f"Resetting {stale} {timeframe.value} goals to {anchor.isoformat()}")
    try:
        await reset_stale_goals(category_ids, timeframe, anchor, db)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to reset {timeframe.value} goals: {str(e)}")
        raise StoreWriteFailure(f"Failed to update {timeframe.value} goals") from e

    return stale


async def sync_goal_periods(user_id: uuid.UUID, now: datetime, db: AsyncSession) -> SyncResult:
    """
    Bring the user's weekly and monthly goals up to the period containing `now`.

    Returns a SyncResult with the computed anchors and how many goals were
    reset per timeframe. Raises StoreReadFailure if a query fails (nothing
    is written) and StoreWriteFailure if an update fails; in the latter case
    weekly resets committed before a failing monthly update stay in place
    and the next run finishes the job.
    """
    # Boundaries follow the calendar date in the reference zone, not the
    # zone the instant happens to carry. Naive instants are taken as-is.
    if now.tzinfo is not None:
        now = now.astimezone(reference_timezone())

    week_start = week_start_of(now)
    month_start = month_start_of(now)

    logger.info(f"Syncing goals for user: {user_id}")
    logger.info(f"Current week start: {week_start.isoformat()}")
    logger.info(f"Current month start: {month_start.isoformat()}")

    try:
        category_ids = await get_category_ids_for_user(user_id, db)
    except SQLAlchemyError as e:
        logger.error(f"Failed to query categories for user {user_id}: {str(e)}")
        raise StoreReadFailure("Failed to read categories") from e

    if not category_ids:
        return SyncResult(
            message="No categories found",
            current_date=now,
            week_start=week_start,
            month_start=month_start,
        )

    weekly_reset = await _roll_over(category_ids, Timeframe.weekly, week_start, db)
    monthly_reset = await _roll_over(category_ids, Timeframe.monthly, month_start, db)

    logger.info(
        f"✅ Goals synced for user {user_id}: "
        f"{weekly_reset} weekly, {monthly_reset} monthly reset"
    )

    return SyncResult(
        message="Goals synced successfully",
        current_date=now,
        week_start=week_start,
        month_start=month_start,
        weekly_goals_reset=weekly_reset,
        monthly_goals_reset=monthly_reset,
    )
