# app/utils/periods.py
"""
Period boundary arithmetic for goal anchors.

Weeks start on Sunday. Every function works on calendar dates; callers
convert an instant to a date in the reference zone first (see
app.core.clock).
"""
from datetime import date, datetime, timedelta
from typing import Dict, Optional, Union

from app.models.goal import Timeframe


def week_start_of(d: Union[date, datetime]) -> date:
    """Sunday on or before `d`.

    Python's weekday() is Monday=0 ... Sunday=6, so shift it to
    Sunday=0 ... Saturday=6 before subtracting.
    Example: Wednesday 2024-03-13 -> 2024-03-10
    """
    if isinstance(d, datetime):
        d = d.date()
    days_since_sunday = (d.weekday() + 1) % 7
    return d - timedelta(days=days_since_sunday)


def month_start_of(d: Union[date, datetime]) -> date:
    """First day of the month containing `d`."""
    if isinstance(d, datetime):
        d = d.date()
    return d.replace(day=1)


def anchor_field(timeframe: Union[Timeframe, str]) -> str:
    """Name of the Goal column that anchors a timeframe."""
    timeframe = Timeframe(timeframe)
    if timeframe == Timeframe.weekly:
        return "week_start_date"
    if timeframe == Timeframe.monthly:
        return "month_start_date"
    return "goal_date"


def anchor_for(timeframe: Union[Timeframe, str], d: Union[date, datetime]) -> date:
    """Anchor date of the period of `timeframe` that contains `d`."""
    timeframe = Timeframe(timeframe)
    if isinstance(d, datetime):
        d = d.date()
    if timeframe == Timeframe.weekly:
        return week_start_of(d)
    if timeframe == Timeframe.monthly:
        return month_start_of(d)
    return d


def anchor_values(timeframe: Union[Timeframe, str], d: Union[date, datetime]) -> Dict[str, Optional[date]]:
    """All three anchor columns for a new goal: the matching one set, the others None."""
    values = {"goal_date": None, "week_start_date": None, "month_start_date": None}
    values[anchor_field(timeframe)] = anchor_for(timeframe, d)
    return values
