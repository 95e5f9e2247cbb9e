import logging
from functools import lru_cache
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from bakery.config import Settings
from bakery.core.errors import ErrorKind, ServiceError
from bakery.core.security import hash_password, issue_token, verify_password
from bakery.database.session import commit_or_conflict
from bakery.models.user import USER_ROLES, User
from bakery.schemas.user import UserCreate, UserLogin

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "A user with this email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


@lru_cache
def _dummy_hash(rounds: int) -> str:
    return hash_password("not-a-real-password", rounds)


def prepare_login(settings: Settings) -> None:
    """Build the unknown-email comparison hash ahead of the first login."""
    _dummy_hash(settings.PASSWORD_HASH_ROUNDS)


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    return (
        db.execute(select(User).where(User.email == email.strip().lower()))
        .scalars()
        .first()
    )


def register_user(
    db: Session,
    payload: UserCreate,
    settings: Settings,
    *,
    role: str = "user",
) -> User:
    if role not in USER_ROLES:
        raise ValueError("Unknown role: {}".format(role))
    if find_user_by_email(db, payload.email):
        raise ServiceError.conflict(EMAIL_TAKEN_MESSAGE)

    user = User(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password, settings.PASSWORD_HASH_ROUNDS),
        role=role,
        confirmed=False,
    )
    db.add(user)
    commit_or_conflict(db, EMAIL_TAKEN_MESSAGE)
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, user.role)
    return user


def authenticate_user(db: Session, payload: UserLogin, settings: Settings) -> User:
    user = find_user_by_email(db, payload.email)
    if user is None:
        # Same hashing cost as a real check so response time does not leak existence.
        verify_password(payload.password, _dummy_hash(settings.PASSWORD_HASH_ROUNDS))
        logger.warning("Failed login attempt")
        raise ServiceError(ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
    if not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login attempt for user %s", user.id)
        raise ServiceError(ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
    return user


def login_user(db: Session, payload: UserLogin, settings: Settings) -> tuple[User, str]:
    user = authenticate_user(db, payload, settings)
    token = issue_token(user.id, user.role, settings)
    logger.info("User %s logged in", user.id)
    return user, token


__all__ = [
    "EMAIL_TAKEN_MESSAGE",
    "INVALID_CREDENTIALS_MESSAGE",
    "authenticate_user",
    "find_user_by_email",
    "login_user",
    "prepare_login",
    "register_user",
]
