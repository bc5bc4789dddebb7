"""Clear the retired account-lockout fields on every user.

Run: python -m app.migrations.remove_login_attempts
"""
import logging

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import MigrationError
from app.migrations.runner import Migration, UpdateResult, main
from app.models.user import User

logger = logging.getLogger(__name__)

NAME = "remove_login_attempts"


def remove_login_attempts_fields(db: Session) -> UpdateResult:
    """Unset login_attempts and lock_until on all users, unconditionally."""
    logger.info("Starting migration to remove login_attempts and lock_until fields...")
    try:
        modified = db.execute(
            select(func.count()).select_from(User).where(
                or_(User.login_attempts.is_not(None), User.lock_until.is_not(None))
            )
        ).scalar_one()
        result = db.execute(
            update(User)
            .values(login_attempts=None, lock_until=None)
            .execution_options(synchronize_session=False)
        )
    except SQLAlchemyError as exc:
        logger.error("Migration failed: %s", exc)
        raise MigrationError(NAME, exc) from exc

    return UpdateResult(matched_count=result.rowcount, modified_count=modified)


MIGRATION = Migration(
    name=NAME,
    description="Remove login_attempts and lock_until from all users",
    apply=remove_login_attempts_fields,
)


if __name__ == "__main__":
    main(MIGRATION)
