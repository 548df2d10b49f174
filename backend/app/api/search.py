"""Duplicate lookups and ad hoc owner creation used by entry forms."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.api.outcomes import ensure_ok
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.user import User
from backend.app.schemas.search import SearchResultRead
from backend.app.schemas.unit import OwnerCreate, OwnerRead
from backend.app.services import duplicates

router = APIRouter(tags=["search"])


@router.get("/search/client", response_model=SearchResultRead)
async def search_client(term: str = "", db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return duplicates.search_client(db, term).as_dict()


@router.get("/search/owner", response_model=SearchResultRead)
async def search_owner(term: str = "", db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return duplicates.search_owner(db, term).as_dict()


@router.post("/owners")
async def add_owner(owner_in: OwnerCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    outcome = ensure_ok(duplicates.add_owner(db, owner_in.name, owner_in.phone, owner_in.email))
    return {
        "success": True,
        "message": outcome.message,
        "owner_id": outcome.data["owner_id"],
        "owner": OwnerRead.model_validate(outcome.data["owner"]),
    }
