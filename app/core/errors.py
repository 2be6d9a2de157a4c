# app/core/errors.py
"""
Error taxonomy surfaced to API callers.

Every error carries the HTTP status it maps to; app.main renders them
as {"error": message}.
"""
from fastapi import status


class GoalTrackerError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(GoalTrackerError):
    """Missing, malformed, expired or unknown bearer credential."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class StoreReadFailure(GoalTrackerError):
    """A query against the goal store failed; nothing was written."""
    default_message = "Failed to read goals"


class StoreWriteFailure(GoalTrackerError):
    """A batch update failed after the read succeeded."""
    default_message = "Failed to update goals"
