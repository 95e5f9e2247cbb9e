import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from bakery.config import Settings
from bakery.core.security import InvalidToken, Principal, decode_token, get_bearer_token
from bakery.database.session import get_db

logger = logging.getLogger(__name__)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_auth(
    request: Request,
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> Principal:
    token = get_bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=_BEARER_CHALLENGE,
        )
    try:
        principal = decode_token(token, settings)
    except InvalidToken as exc:
        logger.warning("Rejected bearer token on %s %s: %s", request.method, request.url.path, exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers=_BEARER_CHALLENGE,
        ) from exc

    request.state.principal = principal
    return principal


__all__ = ["get_app_settings", "get_db", "require_auth"]
