"""Lead repository: creation, role-scoped queries and plain field edits.

Assignment and status fields are owned by ``assignment`` and ``lead_status``
and are never written here (except the initial ``New`` status).
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from backend.app.core.settings import get_settings
from backend.app.core.time import day_bounds, utc_now
from backend.app.core.transactions import transaction
from backend.app.models.enums import TERMINAL_STATUSES, LeadStatus, UserRole
from backend.app.models.lead import Lead
from backend.app.models.lead_assignment_history import LeadAssignmentHistory
from backend.app.models.project import Project
from backend.app.models.unit import Unit
from backend.app.models.user import User
from backend.app.services.duplicates import find_duplicate_lead
from backend.app.services.outcome import CONFLICT, INVALID, NOT_FOUND, Outcome
from backend.app.services.phone import is_phone_shaped, normalize_phone_number

logger = logging.getLogger(__name__)

CLIENT_NAME_MAX_LENGTH = 25


@dataclass
class LeadFilters:
    search: Optional[str] = None
    project_id: Optional[int] = None
    assigned_to_id: Optional[int] = None
    status: Optional[LeadStatus] = None
    created_on: Optional[date] = None
    unassigned_only: bool = False


def _with_relations(query):
    return query.options(
        joinedload(Lead.project),
        joinedload(Lead.unit),
        joinedload(Lead.created_by),
        joinedload(Lead.assigned_to),
    )


def validate_client(client_name: str | None, client_phone: str | None) -> list[str]:
    errors: list[str] = []
    if not client_name or not client_name.strip():
        errors.append("Name is Required")
    elif len(client_name.strip()) > CLIENT_NAME_MAX_LENGTH:
        errors.append(f"Client Name must be less than {CLIENT_NAME_MAX_LENGTH} CH")
    normalized = normalize_phone_number(client_phone)
    if not is_phone_shaped(client_phone) or len(normalized) < get_settings().min_phone_digits:
        errors.append("Please enter a valid phone number (at least 8 digits)")
    return errors


def _resolve_project_id(db: Session, unit: Unit, project_id: int | None) -> tuple[int | None, str | None]:
    if unit.project_id is not None:
        return unit.project_id, None
    if project_id is None:
        return None, None
    if db.query(Project.id).filter(Project.id == project_id).first() is None:
        return None, "Selected project does not exist"
    return project_id, None


def create_lead(
    db: Session,
    *,
    client_name: str,
    client_phone: str,
    unit_id: int | None,
    actor_id: int,
    comment: str | None = None,
    project_id: int | None = None,
) -> Outcome:
    errors = validate_client(client_name, client_phone)
    if unit_id is None:
        errors.append("Please select a unit")
    if errors:
        return Outcome.failure(INVALID, "; ".join(errors))

    unit = db.query(Unit).filter(Unit.id == unit_id).first()
    if unit is None:
        return Outcome.failure(INVALID, "Selected unit does not exist")
    resolved_project_id, project_error = _resolve_project_id(db, unit, project_id)
    if project_error:
        return Outcome.failure(INVALID, project_error)

    duplicate = find_duplicate_lead(db, client_phone)
    now = utc_now()
    lead = Lead(
        client_name=client_name.strip(),
        client_phone=client_phone.strip(),
        comment=comment,
        unit_id=unit.id,
        project_id=resolved_project_id,
        created_by_id=actor_id,
        current_status=LeadStatus.NEW,
        created_at=now,
        updated_at=now,
    )
    with transaction(db):
        db.add(lead)
    db.refresh(lead)

    message = "Lead saved successfully!"
    duplicate_warning = None
    if duplicate is not None:
        duplicate_warning = f"Note: This phone number is already associated with lead ID: {duplicate.id}"
        message = f"{message} {duplicate_warning}"
        logger.warning("Lead %s shares a phone number with lead %s", lead.id, duplicate.id)
    logger.info("Lead %s created by user %s", lead.id, actor_id)
    return Outcome.success(
        message,
        lead=lead,
        duplicate_warning=duplicate_warning,
        duplicate_lead_id=duplicate.id if duplicate is not None else None,
    )


def get_lead(db: Session, lead_id: int) -> Lead | None:
    return _with_relations(db.query(Lead)).filter(Lead.id == lead_id).first()


def lead_exists(db: Session, lead_id: int) -> bool:
    return db.query(Lead.id).filter(Lead.id == lead_id).first() is not None


def can_view_lead(user: User, lead: Lead) -> bool:
    if user.role == UserRole.ADMIN:
        return True
    if user.role == UserRole.MARKETING:
        return lead.created_by_id == user.id
    return lead.assigned_to_id == user.id


def _scoped_query(db: Session, user: User):
    query = _with_relations(db.query(Lead))
    if user.role == UserRole.MARKETING:
        query = query.filter(Lead.created_by_id == user.id)
    elif user.role == UserRole.SALES:
        query = query.filter(Lead.assigned_to_id == user.id)
    return query


def list_leads_for_user(
    db: Session,
    user: User,
    filters: LeadFilters | None = None,
    skip: int = 0,
    limit: int = 100,
) -> List[Lead]:
    filters = filters or LeadFilters()
    query = _scoped_query(db, user)
    if filters.search:
        term = filters.search.strip()
        query = query.filter(or_(Lead.client_name.ilike(f"%{term}%"), Lead.client_phone.contains(term)))
    if filters.project_id is not None:
        query = query.filter(Lead.project_id == filters.project_id)
    if filters.assigned_to_id is not None:
        query = query.filter(Lead.assigned_to_id == filters.assigned_to_id)
    if filters.status is not None:
        query = query.filter(Lead.current_status == filters.status)
    if filters.created_on is not None:
        start, end = day_bounds(filters.created_on)
        query = query.filter(Lead.created_at >= start, Lead.created_at < end)
    if filters.unassigned_only:
        query = query.filter(Lead.assigned_to_id.is_(None))
    return query.order_by(Lead.created_at.desc(), Lead.id.desc()).offset(skip).limit(limit).all()


def get_active_leads_for_sales(db: Session, sales_id: int) -> List[Lead]:
    return (
        _with_relations(db.query(Lead))
        .filter(Lead.assigned_to_id == sales_id, Lead.current_status.notin_(list(TERMINAL_STATUSES)))
        .order_by(Lead.created_at.desc(), Lead.id.desc())
        .all()
    )


def get_new_tasks_for_sales(db: Session, sales_id: int) -> List[Lead]:
    return (
        _with_relations(db.query(Lead))
        .filter(Lead.assigned_to_id == sales_id, Lead.current_status == LeadStatus.NEW)
        .order_by(Lead.created_at.asc(), Lead.id.asc())
        .all()
    )


def update_lead(db: Session, lead: Lead, changes: dict) -> Outcome:
    """Apply plain field edits. Unknown keys and ``None`` values are ignored."""
    client_name = changes.get("client_name") or lead.client_name
    client_phone = changes.get("client_phone") or lead.client_phone
    errors = validate_client(client_name, client_phone)
    if errors:
        return Outcome.failure(INVALID, "; ".join(errors))

    unit_id = changes.get("unit_id")
    if unit_id is not None and unit_id != lead.unit_id:
        unit = db.query(Unit).filter(Unit.id == unit_id).first()
        if unit is None:
            return Outcome.failure(INVALID, "Selected unit does not exist")
        project_id, project_error = _resolve_project_id(db, unit, changes.get("project_id"))
        if project_error:
            return Outcome.failure(INVALID, project_error)
        lead.unit_id = unit.id
        lead.project_id = project_id
    elif changes.get("project_id") is not None:
        if db.query(Project.id).filter(Project.id == changes["project_id"]).first() is None:
            return Outcome.failure(INVALID, "Selected project does not exist")
        lead.project_id = changes["project_id"]

    with transaction(db):
        lead.client_name = client_name.strip()
        lead.client_phone = client_phone.strip()
        if changes.get("comment") is not None:
            lead.comment = changes["comment"]
        lead.updated_at = utc_now()
    db.refresh(lead)
    return Outcome.success("Lead updated", lead=lead)


def delete_lead(db: Session, lead_id: int) -> Outcome:
    lead = db.query(Lead).filter(Lead.id == lead_id).first()
    if lead is None:
        return Outcome.failure(NOT_FOUND, "Lead not found")
    has_history = (
        db.query(LeadAssignmentHistory.id).filter(LeadAssignmentHistory.lead_id == lead_id).first() is not None
    )
    if has_history:
        return Outcome.failure(CONFLICT, "Cannot delete a lead with assignment history")
    with transaction(db):
        db.delete(lead)
    logger.info("Lead %s deleted", lead_id)
    return Outcome.success("Lead deleted", lead_id=lead_id)


def attach_unit_to_lead(db: Session, lead_id: int, unit_id: int, sales_id: int) -> Outcome:
    lead = db.query(Lead).filter(Lead.id == lead_id, Lead.assigned_to_id == sales_id).first()
    if lead is None:
        return Outcome.failure(NOT_FOUND, "Lead not found")
    unit = db.query(Unit).filter(Unit.id == unit_id).first()
    if unit is None or not unit.is_available:
        return Outcome.failure(INVALID, "Selected unit is not available")
    with transaction(db):
        lead.unit_id = unit.id
        lead.updated_at = utc_now()
        unit.is_available = False
    logger.info("Unit %s attached to lead %s by sales user %s", unit_id, lead_id, sales_id)
    return Outcome.success("Unit assigned successfully", lead_id=lead.id, unit_id=unit.id)
