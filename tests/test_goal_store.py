"""Tests for category and goal store operations"""
import uuid
from datetime import date, datetime, timezone

import pytest

from app.crud.category import (
    create_category_for_user,
    get_categories_for_user,
    get_category_by_id,
    get_category_ids_for_user,
)
from app.crud.goal import (
    count_stale_goals,
    create_goal,
    delete_goal,
    get_category_progress,
    get_goals_for_category,
    reset_stale_goals,
    set_goal_completed,
)
from app.models.category import CATEGORY_COLORS
from app.models.goal import Timeframe
from app.schemas.category import CategoryCreate
from app.schemas.goal import GoalCreate, GoalRead
from conftest import add_category, add_goal, add_user, reload

TODAY = date(2024, 3, 13)


@pytest.mark.asyncio
async def test_new_category_gets_a_palette_color(db, user):
    category = await create_category_for_user(user.id, CategoryCreate(name="  Fitness "), db)

    assert category.name == "Fitness"
    assert category.color in CATEGORY_COLORS
    assert category.user_id == user.id


@pytest.mark.asyncio
async def test_categories_are_scoped_to_their_owner(db, user):
    other = await add_user(db, "other@example.com")
    mine = await add_category(db, user, "Mine")
    await add_category(db, other, "Theirs")

    assert await get_category_ids_for_user(user.id, db) == [mine.id]
    assert [c.name for c in await get_categories_for_user(user.id, db)] == ["Mine"]


@pytest.mark.asyncio
async def test_category_lookup_by_id_is_owner_scoped(db, user):
    other = await add_user(db, "other@example.com")
    mine = await add_category(db, user, "Mine")
    theirs = await add_category(db, other, "Theirs")

    found = await get_category_by_id(mine.id, user.id, db)
    assert found is not None
    assert found.name == "Mine"
    assert await get_category_by_id(theirs.id, user.id, db) is None
    assert await get_category_by_id(uuid.uuid4(), user.id, db) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "timeframe, field, expected",
    [
        (Timeframe.daily, "goal_date", date(2024, 3, 13)),
        (Timeframe.weekly, "week_start_date", date(2024, 3, 10)),
        (Timeframe.monthly, "month_start_date", date(2024, 3, 1)),
    ],
)
async def test_create_goal_stamps_the_viewed_period(db, user, timeframe, field, expected):
    category = await add_category(db, user)

    goal = await create_goal(category.id, GoalCreate(title="Stretch", timeframe=timeframe), TODAY, db)

    assert goal.completed is False
    assert goal.completed_at is None
    assert getattr(goal, field) == expected
    anchors = {"goal_date", "week_start_date", "month_start_date"} - {field}
    assert all(getattr(goal, other) is None for other in anchors)


@pytest.mark.asyncio
async def test_create_goal_for_a_selected_calendar_date(db, user):
    category = await add_category(db, user)
    goal_in = GoalCreate(title="Plan trip", timeframe=Timeframe.weekly, on_date=date(2024, 5, 2))

    goal = await create_goal(category.id, goal_in, TODAY, db)

    assert goal.week_start_date == date(2024, 4, 28)


@pytest.mark.asyncio
async def test_toggling_completion_maintains_completed_at(db, user):
    category = await add_category(db, user)
    goal = await create_goal(category.id, GoalCreate(title="Meditate", timeframe=Timeframe.daily), TODAY, db)
    first_done = datetime(2024, 3, 13, 8, 0, tzinfo=timezone.utc)

    goal = await set_goal_completed(goal, True, first_done, db)
    assert goal.completed is True
    assert goal.completed_at is not None

    # Completing again does not move the timestamp
    goal = await set_goal_completed(goal, True, datetime(2024, 3, 13, 20, 0, tzinfo=timezone.utc), db)
    assert goal.completed_at.replace(tzinfo=None) == first_done.replace(tzinfo=None)

    goal = await set_goal_completed(goal, False, datetime(2024, 3, 13, 21, 0, tzinfo=timezone.utc), db)
    assert goal.completed is False
    assert goal.completed_at is None


@pytest.mark.asyncio
async def test_delete_goal_removes_it(db, user):
    category = await add_category(db, user)
    keep = await add_goal(db, category, Timeframe.daily, TODAY, title="keep")
    drop = await add_goal(db, category, Timeframe.daily, TODAY, title="drop")

    await delete_goal(drop, db)

    assert [g.id for g in await get_goals_for_category(category.id, db)] == [keep.id]


@pytest.mark.asyncio
async def test_batch_reset_only_touches_stale_rows(db, session_factory, user):
    category = await add_category(db, user)
    stale = await add_goal(db, category, Timeframe.monthly, date(2024, 1, 1), completed=True)
    current = await add_goal(db, category, Timeframe.monthly, date(2024, 3, 1), completed=True)

    assert await count_stale_goals([category.id], Timeframe.monthly, date(2024, 3, 1), db) == 1
    assert await reset_stale_goals([category.id], Timeframe.monthly, date(2024, 3, 1), db) == 1
    assert await count_stale_goals([category.id], Timeframe.monthly, date(2024, 3, 1), db) == 0

    assert GoalRead.model_validate(await reload(session_factory, stale)).month_start_date == date(2024, 3, 1)
    assert (await reload(session_factory, current)).completed is True


@pytest.mark.asyncio
async def test_daily_goals_cannot_be_rolled_over(db, user):
    category = await add_category(db, user)

    with pytest.raises(ValueError):
        await reset_stale_goals([category.id], Timeframe.daily, TODAY, db)


@pytest.mark.asyncio
async def test_category_progress_counts_completed_goals(db, user):
    category = await add_category(db, user)
    await add_goal(db, category, Timeframe.daily, TODAY, completed=True)
    await add_goal(db, category, Timeframe.daily, TODAY)
    await add_goal(db, category, Timeframe.weekly, date(2024, 3, 10), completed=True)
    await add_goal(db, category, Timeframe.monthly, date(2024, 3, 1))
    # Goals in another category don't count
    await add_goal(db, await add_category(db, user, "Work"), Timeframe.daily, TODAY, completed=True)

    overall = await get_category_progress(category.id, db)
    assert (overall.total_goals, overall.completed_goals) == (4, 2)
    assert overall.progress_percentage == 50.0
    assert overall.timeframe is None

    daily = await get_category_progress(category.id, db, Timeframe.daily)
    assert (daily.total_goals, daily.completed_goals) == (2, 1)

    weekly = await get_category_progress(category.id, db, Timeframe.weekly)
    assert weekly.progress_percentage == 100.0

    monthly = await get_category_progress(category.id, db, Timeframe.monthly)
    assert (monthly.total_goals, monthly.completed_goals) == (1, 0)
    assert monthly.progress_percentage == 0.0


@pytest.mark.asyncio
async def test_empty_category_has_zero_progress(db, user):
    category = await add_category(db, user)

    progress = await get_category_progress(category.id, db)

    assert progress.category_id == category.id
    assert (progress.total_goals, progress.completed_goals) == (0, 0)
    assert progress.progress_percentage == 0.0
