"""Account settings endpoints for the signed-in user."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.api.outcomes import ensure_ok
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.user import User
from backend.app.schemas.settings import (
    EmailUsernameUpdate,
    FullNameUpdate,
    PasswordUpdate,
    SettingsUpdateResponse,
    UserSettingsRead,
)
from backend.app.services import user_settings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/", response_model=UserSettingsRead)
async def get_my_settings(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    data = user_settings.get_user_settings(db, current_user.id)
    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return data


@router.put("/profile", response_model=SettingsUpdateResponse)
async def update_full_name(
    update: FullNameUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outcome = ensure_ok(user_settings.update_full_name(db, current_user.id, update.full_name))
    return SettingsUpdateResponse(message=outcome.message)


@router.put("/email", response_model=SettingsUpdateResponse)
async def update_email(
    update: EmailUsernameUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outcome = ensure_ok(user_settings.update_email_username(db, current_user.id, update.username))
    return SettingsUpdateResponse(message=outcome.message)


@router.put("/password", response_model=SettingsUpdateResponse)
async def update_password(
    update: PasswordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outcome = ensure_ok(
        user_settings.update_password(db, current_user.id, update.current_password, update.new_password)
    )
    return SettingsUpdateResponse(message=outcome.message)
