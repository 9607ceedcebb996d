"""Pydantic request/response contracts for users and authentication."""

import re
from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, Field, field_validator

from sitecms.utils.helpers import is_valid_email, normalize_email
from sitecms.utils.permissions import Role

PASSWORD_RULE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")
PASSWORD_MIN_LENGTH = 6

Theme = Literal["light", "dark", "auto"]


def _check_password(value: str) -> str:
    if len(value or "") < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if not PASSWORD_RULE.match(value):
        raise ValueError(
            "Password must contain at least one lowercase letter, one uppercase letter, and one number"
        )
    return value


def _check_name(value: str) -> str:
    text = (value or "").strip()
    if not 2 <= len(text) <= 100:
        raise ValueError("Name must be between 2 and 100 characters")
    return text


def _check_email(value: str) -> str:
    email = normalize_email(value)
    if not is_valid_email(email):
        raise ValueError("Please provide a valid email")
    return email


Name = Annotated[str, AfterValidator(_check_name)]
Email = Annotated[str, AfterValidator(_check_email)]
Password = Annotated[str, AfterValidator(_check_password)]


class Preferences(BaseModel):
    newsletter: bool = True
    notifications: bool = True
    theme: Theme = "light"


class PreferencesUpdate(BaseModel):
    newsletter: Optional[bool] = None
    notifications: Optional[bool] = None
    theme: Optional[Theme] = None


class RegisterRequest(BaseModel):
    name: Name
    email: Email
    password: Password


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=1)


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: Password


class ProfileUpdate(BaseModel):
    name: Optional[Name] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    preferences: Optional[PreferencesUpdate] = None

    @field_validator("bio")
    @classmethod
    def strip_bio(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else value.strip()


class RoleUpdate(BaseModel):
    role: Role


class UserOut(BaseModel):
    user_id: int
    name: str
    email: str
    role: Role
    is_active: bool
    bio: str = ""
    avatar: Optional[str] = None
    preferences: Preferences
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PublicProfileOut(BaseModel):
    user_id: int
    name: str
    bio: str = ""
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    message: str
    user: UserOut
    token: str


class TokenRefreshResponse(BaseModel):
    message: str
    token: str


class UserEnvelope(BaseModel):
    user: UserOut


class MessageUserEnvelope(BaseModel):
    message: str
    user: UserOut


class Pagination(BaseModel):
    page: int
    pages: int
    total: int


class UserListOut(BaseModel):
    users: List[UserOut]
    pagination: Pagination


class UserStatsOut(BaseModel):
    total: int
    recent: int
