from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bakery.config import Settings
from bakery.core.responses import envelope
from bakery.dependencies import get_app_settings, get_db
from bakery.schemas.common import Envelope, ErrorEnvelope
from bakery.schemas.user import TokenRead, UserCreate, UserLogin, UserProfile, UserRead
from bakery.services.user_service import login_user, register_user

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[UserRead],
    responses={400: {"model": ErrorEnvelope}, 409: {"model": ErrorEnvelope}},
)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = register_user(db, payload, settings)
    return envelope(UserRead.model_validate(user), "User created")


@router.post(
    "/login",
    response_model=Envelope[TokenRead],
    responses={400: {"model": ErrorEnvelope}, 401: {"model": ErrorEnvelope}},
)
def login(
    payload: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user, token = login_user(db, payload, settings)
    result = TokenRead(
        access_token=token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=UserProfile.model_validate(user),
    )
    return envelope(result, "Login successful")


__all__ = ["router"]
