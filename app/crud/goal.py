# app/crud/goal.py
from datetime import date, datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import case, func, or_, update
from app.core.db_utils import with_db_retry
from app.models.goal import Goal, Timeframe
from app.utils.periods import anchor_field, anchor_values
from typing import List, Optional, Sequence
import uuid
from app.schemas.goal import CategoryProgress, GoalCreate


def _stale_goal_filter(category_ids: Sequence[uuid.UUID], timeframe: Timeframe, anchor: date):
    """Goals of `timeframe` in the given categories whose anchor is not `anchor`.

    A missing anchor counts as stale so rows inserted without one get healed.
    """
    if timeframe == Timeframe.daily:
        raise ValueError("Daily goals have no rollover")
    column = getattr(Goal, anchor_field(timeframe))
    return (
        Goal.category_id.in_(category_ids),
        Goal.timeframe == timeframe.value,
        or_(column.is_(None), column != anchor),
    )


@with_db_retry()
async def get_goals_for_category(category_id: uuid.UUID, db: AsyncSession) -> List[Goal]:
    result = await db.execute(
        select(Goal).where(Goal.category_id == category_id).order_by(Goal.created_at.desc())
    )
    return result.scalars().all()


@with_db_retry()
async def get_category_progress(
    category_id: uuid.UUID, db: AsyncSession, timeframe: Optional[Timeframe] = None
) -> CategoryProgress:
    """Total and completed goal counts for a category, optionally for one timeframe."""
    stmt = select(
        func.count(Goal.id),
        func.count(case((Goal.completed.is_(True), Goal.id))),
    ).where(Goal.category_id == category_id)
    if timeframe is not None:
        stmt = stmt.where(Goal.timeframe == timeframe.value)

    total, completed = (await db.execute(stmt)).one()
    progress = (completed / total * 100.0) if total > 0 else 0.0
    return CategoryProgress(
        category_id=category_id,
        timeframe=timeframe,
        total_goals=total,
        completed_goals=completed,
        progress_percentage=round(progress, 2),
    )


@with_db_retry()
async def count_stale_goals(
    category_ids: Sequence[uuid.UUID], timeframe: Timeframe, anchor: date, db: AsyncSession
) -> int:
    result = await db.execute(
        select(func.count()).select_from(Goal).where(*_stale_goal_filter(category_ids, timeframe, anchor))
    )
    return result.scalar_one()


async def reset_stale_goals(
    category_ids: Sequence[uuid.UUID], timeframe: Timeframe, anchor: date, db: AsyncSession
) -> int:
    """Move every stale goal of `timeframe` to `anchor` and clear its completion.

    One UPDATE statement; the values written don't depend on the rows'
    previous state, so repeating it is harmless.
    """
    stmt = (
        update(Goal)
        .where(*_stale_goal_filter(category_ids, timeframe, anchor))
        .values(
            completed=False,
            completed_at=None,
            **{anchor_field(timeframe): anchor},
        )
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount


async def create_goal(category_id: uuid.UUID, goal_in: GoalCreate, today: date, db: AsyncSession) -> Goal:
    """Insert an open goal anchored to the period containing the viewed date."""
    on_date = goal_in.on_date or today
    new_goal = Goal(
        category_id=category_id,
        title=goal_in.title.strip(),
        timeframe=goal_in.timeframe.value,
        completed=False,
        completed_at=None,
        **anchor_values(goal_in.timeframe, on_date),
    )
    db.add(new_goal)
    await db.commit()
    await db.refresh(new_goal)
    return new_goal


async def set_goal_completed(goal: Goal, completed: bool, now: datetime, db: AsyncSession) -> Goal:
    # completed_at follows the transition, not the request
    if completed and not goal.completed:
        goal.completed_at = now
    elif not completed:
        goal.completed_at = None
    goal.completed = completed
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal


async def delete_goal(goal: Goal, db: AsyncSession) -> None:
    await db.delete(goal)
    await db.commit()
