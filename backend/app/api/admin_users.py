"""Admin user management endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_back_office_user, get_current_admin
from backend.app.models.enums import UserRole
from backend.app.models.user import User
from backend.app.schemas.lead import UserSummary
from backend.app.schemas.user import AdminUserCreate, AdminUserRead, AdminUserStatusUpdate
from backend.app.services.assignment import get_active_sales_users

router = APIRouter(prefix="/admin/users", tags=["admin"])
sales_router = APIRouter(prefix="/users", tags=["users"])


def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/", response_model=list[AdminUserRead])
async def list_users(
    role: UserRole | None = None,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    query = db.query(User)
    if role is not None:
        query = query.filter(User.role == role)
    return query.order_by(User.id.asc()).all()


@router.post("/", response_model=AdminUserRead)
async def create_user(
    user_in: AdminUserCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    if db.query(User).filter(User.email == user_in.email).first():
        raise HTTPException(status_code=400, detail="Email already registered")
    user = User(
        full_name=user_in.full_name,
        email=user_in.email,
        hashed_password=get_password_hash(user_in.password),
        role=user_in.role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@router.get("/{user_id}", response_model=AdminUserRead)
async def get_user(user_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    return _get_user(db, user_id)


@router.patch("/{user_id}/status", response_model=AdminUserRead)
async def update_user_status(
    user_id: int,
    update: AdminUserStatusUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    user = _get_user(db, user_id)
    if user_id == current_admin.id and update.is_active is False:
        raise HTTPException(status_code=400, detail="Cannot deactivate your own account")
    if user_id == current_admin.id and update.role is not None and update.role != current_admin.role:
        raise HTTPException(status_code=400, detail="Cannot change your own role")

    if update.is_active is not None:
        user.is_active = update.is_active
    if update.role is not None:
        user.role = update.role
    db.commit()
    db.refresh(user)
    return user


@sales_router.get("/sales", response_model=list[UserSummary])
async def list_sales_users(db: Session = Depends(get_db), current_user: User = Depends(get_back_office_user)):
    return get_active_sales_users(db)
