"""Bootstrap registration for the first administrator account."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.db.base import Base
from backend.app.db.session import engine, get_db
from backend.app.models.enums import UserRole
from backend.app.models.user import User
from backend.app.schemas.user import UserCreate, UserRead

Base.metadata.create_all(bind=engine)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    # Only the very first account self-registers; admins create everyone else.
    if db.query(User.id).first() is not None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Registration is closed")
    hashed_password = get_password_hash(user_in.password)  # Hash password before storing
    user = User(
        full_name=user_in.full_name,
        email=user_in.email,
        hashed_password=hashed_password,
        role=UserRole.ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
