"""Unit listing endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backend.app.api.outcomes import ensure_ok
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_admin, get_current_user, require_roles
from backend.app.models.enums import UnitSaleType, UnitType, UserRole
from backend.app.models.user import User
from backend.app.schemas.unit import AvailabilityUpdate, UnitCreate, UnitOption, UnitRead, UnitUpdate
from backend.app.services import units as unit_service

router = APIRouter(prefix="/units", tags=["units"])

get_inventory_user = require_roles(UserRole.ADMIN, UserRole.SALES)


@router.post("/", response_model=UnitRead)
async def create_unit(unit_in: UnitCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    outcome = ensure_ok(unit_service.add_unit(db, unit_in.model_dump(), current_user.id))
    return outcome.data["unit"]


@router.get("/", response_model=list[UnitRead])
async def list_units(
    unit_type: UnitType | None = None,
    project_id: int | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    bedrooms: int | None = None,
    bathrooms: int | None = None,
    min_area: int | None = None,
    is_available: bool | None = None,
    sale_type: UnitSaleType | None = None,
    search: str | None = None,
    created_by_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    filters = unit_service.UnitFilters(
        unit_type=unit_type,
        project_id=project_id,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        min_area=min_area,
        is_available=is_available,
        sale_type=sale_type,
        search=search,
        created_by_id=created_by_id,
    )
    return unit_service.list_units(db, filters)


@router.get("/mine", response_model=list[UnitRead])
async def my_units(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return unit_service.list_units_by_creator(db, current_user.id)


@router.get("/select", response_model=list[UnitOption])
async def unit_options(
    project_id: int = 0,
    term: str = "",
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return unit_service.units_for_select(db, project_id or None, term)


@router.get("/{unit_id}", response_model=UnitRead)
async def get_unit(unit_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    unit = unit_service.get_unit(db, unit_id)
    if not unit:
        raise HTTPException(status_code=404, detail="Unit not found")
    return unit


@router.put("/{unit_id}", response_model=UnitRead)
async def update_unit(
    unit_id: int,
    unit_in: UnitUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    unit = unit_service.get_unit(db, unit_id)
    if not unit:
        raise HTTPException(status_code=404, detail="Unit not found")
    if current_user.role != UserRole.ADMIN and unit.created_by_id != current_user.id:
        raise HTTPException(status_code=403, detail="Only the creator or an admin can edit this unit")
    outcome = ensure_ok(unit_service.update_unit(db, unit_id, unit_in.model_dump(exclude_unset=True)))
    return outcome.data["unit"]


@router.patch("/{unit_id}/availability")
async def set_availability(
    unit_id: int,
    update: AvailabilityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_inventory_user),
):
    outcome = ensure_ok(unit_service.set_availability(db, unit_id, update.is_available))
    return {"success": True, "message": outcome.message, **outcome.data}


@router.post("/{unit_id}/toggle")
async def toggle_availability(
    unit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_inventory_user),
):
    outcome = ensure_ok(unit_service.toggle_availability(db, unit_id))
    return {"success": True, "message": outcome.message, **outcome.data}


@router.delete("/{unit_id}")
async def delete_unit(unit_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    outcome = ensure_ok(unit_service.delete_unit(db, unit_id))
    return {"success": True, "message": outcome.message}
