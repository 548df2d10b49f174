"""Unit listings: creation, edits, availability and filtered lookups."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from backend.app.core.time import utc_now
from backend.app.core.transactions import transaction
from backend.app.models.enums import UnitSaleType, UnitType
from backend.app.models.owner import Owner
from backend.app.models.project import Project
from backend.app.models.unit import Unit
from backend.app.services.outcome import CONFLICT, INVALID, NOT_FOUND, Outcome

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "unit_code",
    "project_id",
    "unit_type",
    "sale_type",
    "location",
    "price",
    "currency",
    "area",
    "bedrooms",
    "bathrooms",
    "description",
    "owner_id",
    "is_available",
)
REQUIRED_FIELDS = frozenset({"unit_type", "sale_type", "location", "price", "currency", "area", "bedrooms", "bathrooms", "is_available"})


@dataclass
class UnitFilters:
    unit_type: Optional[UnitType] = None
    project_id: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    min_area: Optional[int] = None
    is_available: Optional[bool] = None
    sale_type: Optional[UnitSaleType] = None
    search: Optional[str] = None
    created_by_id: Optional[int] = None


def unit_code_exists(db: Session, unit_code: str | None, project_id: int | None, exclude_id: int | None = None) -> bool:
    if project_id is None or not unit_code or not unit_code.strip():
        return False
    query = db.query(Unit.id).filter(Unit.unit_code == unit_code.strip(), Unit.project_id == project_id)
    if exclude_id is not None:
        query = query.filter(Unit.id != exclude_id)
    return query.first() is not None


def _check_references(db: Session, project_id: int | None, owner_id: int | None) -> Outcome | None:
    if project_id is not None and db.query(Project.id).filter(Project.id == project_id).first() is None:
        return Outcome.failure(INVALID, "Selected project does not exist")
    if owner_id is not None and db.query(Owner.id).filter(Owner.id == owner_id).first() is None:
        return Outcome.failure(INVALID, "Selected owner does not exist")
    return None


def get_unit(db: Session, unit_id: int) -> Unit | None:
    return (
        db.query(Unit)
        .options(joinedload(Unit.owner), joinedload(Unit.project), joinedload(Unit.created_by))
        .filter(Unit.id == unit_id)
        .first()
    )


def add_unit(db: Session, data: dict, actor_id: int | None) -> Outcome:
    reference_error = _check_references(db, data.get("project_id"), data.get("owner_id"))
    if reference_error:
        return reference_error
    if unit_code_exists(db, data.get("unit_code"), data.get("project_id")):
        return Outcome.failure(CONFLICT, "Unit code already exists for this project.")

    unit = Unit(**{key: data[key] for key in EDITABLE_FIELDS if key in data})
    if unit.unit_code:
        unit.unit_code = unit.unit_code.strip()
    unit.created_by_id = actor_id
    unit.created_at = utc_now()
    with transaction(db):
        db.add(unit)
    logger.info("Unit %s created by user %s", unit.id, actor_id)
    return Outcome.success("Unit created", unit=get_unit(db, unit.id))


def update_unit(db: Session, unit_id: int, data: dict) -> Outcome:
    unit = db.query(Unit).filter(Unit.id == unit_id).first()
    if unit is None:
        return Outcome.failure(NOT_FOUND, "Unit not found")
    project_id = data.get("project_id", unit.project_id)
    unit_code = data.get("unit_code", unit.unit_code)
    reference_error = _check_references(db, project_id, data.get("owner_id"))
    if reference_error:
        return reference_error
    if unit_code_exists(db, unit_code, project_id, exclude_id=unit.id):
        return Outcome.failure(CONFLICT, "Unit code already exists for this project.")

    with transaction(db):
        # created_by / created_at are never editable
        for key in EDITABLE_FIELDS:
            if key not in data or (data[key] is None and key in REQUIRED_FIELDS):
                continue
            setattr(unit, key, data[key])
    return Outcome.success("Unit updated", unit=get_unit(db, unit.id))


def set_availability(db: Session, unit_id: int, is_available: bool) -> Outcome:
    unit = db.query(Unit).filter(Unit.id == unit_id).first()
    if unit is None:
        return Outcome.failure(NOT_FOUND, "Unit not found")
    with transaction(db):
        unit.is_available = is_available
    return Outcome.success("Unit availability updated", unit_id=unit.id, is_available=is_available)


def toggle_availability(db: Session, unit_id: int) -> Outcome:
    unit = db.query(Unit).filter(Unit.id == unit_id).first()
    if unit is None:
        return Outcome.failure(NOT_FOUND, "Unit not found")
    return set_availability(db, unit_id, not unit.is_available)


def delete_unit(db: Session, unit_id: int) -> Outcome:
    unit = db.query(Unit).filter(Unit.id == unit_id).first()
    if unit is None:
        return Outcome.failure(NOT_FOUND, "Unit not found")
    code = unit.unit_code
    with transaction(db):
        db.delete(unit)
    return Outcome.success(f"Unit '{code or unit_id}' deleted successfully", unit_id=unit_id)


def list_units(db: Session, filters: UnitFilters | None = None) -> List[Unit]:
    filters = filters or UnitFilters()
    query = db.query(Unit).options(joinedload(Unit.project), joinedload(Unit.owner)).outerjoin(Unit.owner)
    if filters.is_available is not None:
        query = query.filter(Unit.is_available.is_(filters.is_available))
    if filters.unit_type is not None:
        query = query.filter(Unit.unit_type == filters.unit_type)
    if filters.project_id is not None:
        query = query.filter(Unit.project_id == filters.project_id)
    if filters.min_price is not None:
        query = query.filter(Unit.price >= filters.min_price)
    if filters.max_price is not None:
        query = query.filter(Unit.price <= filters.max_price)
    if filters.bedrooms is not None:
        # 4 is the "4+" bucket
        query = query.filter(Unit.bedrooms >= 4 if filters.bedrooms == 4 else Unit.bedrooms == filters.bedrooms)
    if filters.bathrooms is not None:
        query = query.filter(Unit.bathrooms >= 3 if filters.bathrooms == 3 else Unit.bathrooms == filters.bathrooms)
    if filters.min_area is not None:
        query = query.filter(Unit.area >= filters.min_area)
    if filters.sale_type is not None:
        query = query.filter(Unit.sale_type == filters.sale_type)
    if filters.created_by_id is not None:
        query = query.filter(Unit.created_by_id == filters.created_by_id)
    if filters.search:
        term = filters.search.strip()
        query = query.filter(or_(Unit.unit_code.ilike(f"%{term}%"), Owner.phone.contains(term)))
    return query.order_by(Unit.created_at.desc(), Unit.id.desc()).all()


def list_units_by_creator(db: Session, creator_id: int) -> List[Unit]:
    """Units a user listed, ordered by unit code for the "my units" page."""
    return (
        db.query(Unit)
        .options(joinedload(Unit.project), joinedload(Unit.owner))
        .filter(Unit.created_by_id == creator_id)
        .order_by(Unit.unit_code, Unit.id)
        .all()
    )


def units_for_select(db: Session, project_id: int | None = None, term: str | None = None) -> List[dict]:
    """Options for the unit picker on lead forms."""
    query = db.query(Unit)
    if project_id:
        query = query.filter(Unit.project_id == project_id)
    else:
        query = query.filter(Unit.is_available.is_(True))
    units = query.all()
    if term and term.strip():
        needle = term.strip().lower()
        units = [
            u
            for u in units
            if any(needle in (value or "").lower() for value in (u.unit_code, u.location, u.description))
        ]
    units.sort(key=lambda u: (u.unit_code or "", u.id))
    return [
        {
            "id": u.id,
            "text": f"{u.unit_code or 'NA'} - {u.location or 'NA'}",
            "disabled": not u.is_available,
            "project_id": u.project_id,
        }
        for u in units
    ]
