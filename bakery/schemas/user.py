from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator


def normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class UserCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3)]
    email: EmailStr
    password: str = Field(min_length=6)

    normalize_email = field_validator("email", mode="before")(normalize_email)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    normalize_email = field_validator("email", mode="before")(normalize_email)


class UserRead(BaseModel):
    id: str
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class UserProfile(UserRead):
    confirmed: bool
    created_at: datetime


class TokenRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserProfile
