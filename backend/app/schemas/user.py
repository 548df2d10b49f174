"""User schemas used for registration, admin management and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from backend.app.models.enums import UserRole


class UserCreate(BaseModel):
    full_name: str = Field(min_length=1, max_length=25)
    email: EmailStr
    password: str


class AdminUserCreate(UserCreate):
    role: UserRole


class UserRead(BaseModel):
    id: int
    email: EmailStr
    full_name: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)


class AdminUserRead(UserRead):
    is_active: bool
    created_at: Optional[datetime] = None


class AdminUserStatusUpdate(BaseModel):
    is_active: Optional[bool] = None
    role: Optional[UserRole] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: UserRole
    user_id: int
    full_name: str
