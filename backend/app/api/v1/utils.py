"""Helpers shared by the v1 routers."""
import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


async def commit_or_conflict(
    db: AsyncSession,
    detail: str,
    status_code: int = status.HTTP_409_CONFLICT,
) -> None:
    """Commit, turning a unique-constraint violation into an HTTP error.

    The pre-insert existence checks in the routers can race with a concurrent
    request; the database constraint is the final word.
    """
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Write rejected by constraint: %s", exc.orig)
        raise HTTPException(status_code=status_code, detail=detail)
