from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from bakery.config import Settings

_HASH_SCHEME = "pbkdf2_sha256"
_SALT_BYTES = 16
DEFAULT_HASH_ROUNDS = 200_000


class InvalidToken(Exception):
    pass


@dataclass(frozen=True)
class Principal:
    subject_id: str
    role: str


def _pbkdf2(password: str, salt: str, rounds: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        rounds,
    )
    return digest.hex()


def hash_password(password: str, rounds: int = DEFAULT_HASH_ROUNDS) -> str:
    salt = secrets.token_hex(_SALT_BYTES)
    return "{}${}${}${}".format(_HASH_SCHEME, rounds, salt, _pbkdf2(password, salt, rounds))


def verify_password(password: str, encoded: Optional[str]) -> bool:
    if not encoded:
        return False
    parts = encoded.split("$")
    if len(parts) != 4 or parts[0] != _HASH_SCHEME:
        return False
    _, rounds_value, salt, expected = parts
    try:
        rounds = int(rounds_value)
    except ValueError:
        return False
    return hmac.compare_digest(_pbkdf2(password, salt, rounds), expected)


def issue_token(
    subject_id: str,
    role: str,
    settings: Settings,
    *,
    now: Optional[datetime] = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": subject_id,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    if settings.JWT_AUDIENCE:
        claims["aud"] = settings.JWT_AUDIENCE
    if settings.JWT_ISSUER:
        claims["iss"] = settings.JWT_ISSUER
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, settings: Settings) -> Principal:
    options = {"verify_aud": bool(settings.JWT_AUDIENCE), "require": ["exp", "sub"]}
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options=options,
        )
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc

    subject_id = payload.get("sub")
    if not isinstance(subject_id, str) or not subject_id:
        raise InvalidToken("Token subject is missing")
    return Principal(subject_id=subject_id, role=str(payload.get("role") or "user"))


def get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


__all__ = [
    "InvalidToken",
    "Principal",
    "decode_token",
    "get_bearer_token",
    "hash_password",
    "issue_token",
    "verify_password",
]
