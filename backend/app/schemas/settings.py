"""Account settings schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from backend.app.models.enums import UserRole


class UserSettingsRead(BaseModel):
    id: int
    full_name: str
    email: str
    username: str
    domain: str
    role: UserRole
    created_at: Optional[datetime] = None


class FullNameUpdate(BaseModel):
    full_name: str


class EmailUsernameUpdate(BaseModel):
    username: str


class PasswordUpdate(BaseModel):
    current_password: str
    new_password: str


class SettingsUpdateResponse(BaseModel):
    success: bool = True
    message: str
