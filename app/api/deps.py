# app/api/deps.py
import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import get_async_session
from app.core.auth import User, decode_access_token
from app.core.errors import StoreReadFailure, Unauthorized

logger = logging.getLogger(__name__)

# auto_error is off so a missing header reaches our own Unauthorized error
optional_security = HTTPBearer(auto_error=False)


async def get_current_user(
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> User:
    """
    Resolve the bearer credential to an active user.

    Fails closed: anything short of a valid token for an existing,
    active user raises Unauthorized. A missing or undecodable token is
    rejected before the database is touched. A failed user lookup is a
    store error (StoreReadFailure), not a credential problem.
    """
    if not credentials or not credentials.credentials:
        raise Unauthorized()

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise Unauthorized()

    try:
        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalars().first()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load user {user_id}: {str(e)}")
        raise StoreReadFailure("Failed to read user") from e

    if not user:
        logger.info(f"Token subject {user_id} does not match any user")
        raise Unauthorized()

    if user.is_active is False:
        raise Unauthorized()

    return user
