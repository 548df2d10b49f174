"""Sign-in and identity endpoints for CRM staff."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.api.outcomes import ensure_ok
from backend.app.core.security import create_access_token
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.user import User
from backend.app.schemas.user import LoginRequest, TokenResponse, UserRead
from backend.app.services.auth import authenticate

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = ensure_ok(authenticate(db, credentials.email, credentials.password)).data["user"]
    return TokenResponse(
        access_token=create_access_token(user_id=user.id),
        role=user.role,
        user_id=user.id,
        full_name=user.full_name,
    )


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user
