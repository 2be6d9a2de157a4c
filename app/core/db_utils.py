"""
Database utilities for connection management and error handling
"""
import asyncio
import functools
import logging
from typing import Callable, Any, TypeVar, cast, Awaitable, Optional

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings

logger = logging.getLogger(__name__)

# Define a type variable for the return type of the decorated function
T = TypeVar('T')


def is_connection_error(exc: BaseException) -> bool:
    """True for errors where the store was unreachable rather than the statement wrong."""
    if isinstance(exc, OperationalError):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, (ConnectionError, OSError))


def with_db_retry(
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that retries read-only store calls on connection errors.

    Args:
        max_retries: Maximum number of retries before giving up
            (defaults to settings.DB_MAX_RETRIES)
        retry_delay: Base delay between retries in seconds, doubled on
            every attempt (defaults to settings.DB_RETRY_DELAY)

    Returns:
        Decorated function with retry logic
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            retries_allowed = settings.DB_MAX_RETRIES if max_retries is None else max_retries
            base_delay = settings.DB_RETRY_DELAY if retry_delay is None else retry_delay
            retries = 0

            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not is_connection_error(e) or retries >= retries_allowed:
                        if retries:
                            logger.error(
                                f"Database operation {func.__name__} failed after {retries} retries: {e}"
                            )
                        raise

                    # A failed statement leaves the session unusable until rolled back
                    for arg in (*args, *kwargs.values()):
                        if isinstance(arg, AsyncSession):
                            await arg.rollback()

                    retries += 1
                    delay = base_delay * (2 ** (retries - 1))  # Exponential backoff
                    logger.warning(
                        f"Database connection error in {func.__name__}: {str(e)}. "
                        f"Retrying in {delay:.2f}s... (Attempt {retries}/{retries_allowed})"
                    )
                    await asyncio.sleep(delay)

        return cast(Callable[..., Awaitable[T]], wrapper)

    return decorator
