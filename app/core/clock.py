# app/core/clock.py
"""
Wall clock used for period boundaries.

Routes take the clock as a dependency so tests can pin "now" to
any instant. All boundary math happens in one reference zone
(settings.TIMEZONE); there is no per-user zone.
"""
import logging
from datetime import datetime, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import settings

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def reference_timezone(tz_name: str = None) -> tzinfo:
    """Resolve 'local' (or None) to the server zone, anything else as an IANA name."""
    tz_name = tz_name or settings.TIMEZONE
    if tz_name == "local":
        return datetime.now().astimezone().tzinfo
    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        logger.warning(f"Unknown timezone {tz_name!r}, falling back to server local time")
        return datetime.now().astimezone().tzinfo


def system_now() -> datetime:
    """Current instant, aware, expressed in the reference zone."""
    return datetime.now(reference_timezone())


def get_clock() -> Clock:
    return system_now
