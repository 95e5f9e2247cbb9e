import logging

from fastapi import Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bakery.core.errors import ServiceError

logger = logging.getLogger(__name__)


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def commit_or_conflict(db: Session, conflict_message: str) -> None:
    """Commit the session, surfacing a unique-key race as a conflict."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity error on commit: %s", exc.orig)
        raise ServiceError.conflict(conflict_message) from exc
