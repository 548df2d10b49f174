"""Best-effort duplicate detection for clients and owners.

Matches are warnings only: nothing here ever blocks a save. Phone matching
compares normalized numbers; when no phone matches, a case-insensitive name
substring match is tried.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from sqlalchemy.orm import Session

from backend.app.core.transactions import transaction
from backend.app.models.lead import Lead
from backend.app.models.owner import Owner
from backend.app.services.outcome import INVALID, Outcome
from backend.app.services.phone import normalize_phone_number

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    found: bool
    id: Optional[int] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    search_type: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)


NOT_FOUND_RESULT = SearchResult(found=False)


def _first_phone_match(records, normalized: str, phone_attr: str):
    for record in records:
        phone = getattr(record, phone_attr)
        if phone and normalize_phone_number(phone) == normalized:
            return record
    return None


def find_duplicate_lead(db: Session, phone: str, exclude_id: int | None = None) -> Lead | None:
    normalized = normalize_phone_number(phone)
    if not normalized:
        return None
    query = db.query(Lead).order_by(Lead.id.asc())
    if exclude_id is not None:
        query = query.filter(Lead.id != exclude_id)
    return _first_phone_match(query.all(), normalized, "client_phone")


def search_client(db: Session, term: str | None) -> SearchResult:
    normalized = normalize_phone_number(term)
    if normalized:
        lead = find_duplicate_lead(db, term)
        if lead is not None:
            return SearchResult(found=True, id=lead.id, name=lead.client_name, phone=lead.client_phone, search_type="phone")

    if term and term.strip():
        lead = (
            db.query(Lead)
            .filter(Lead.client_name.ilike(f"%{term.strip()}%"))
            .order_by(Lead.id.asc())
            .first()
        )
        if lead is not None:
            return SearchResult(found=True, id=lead.id, name=lead.client_name, phone=lead.client_phone, search_type="name")
    return NOT_FOUND_RESULT


def search_owner(db: Session, term: str | None) -> SearchResult:
    normalized = normalize_phone_number(term)
    if normalized:
        owners = db.query(Owner).order_by(Owner.id.asc()).all()
        owner = _first_phone_match(owners, normalized, "phone")
        if owner is not None:
            return SearchResult(
                found=True, id=owner.id, name=owner.name, phone=owner.phone, email=owner.email, search_type="phone"
            )

    if term and term.strip():
        owner = (
            db.query(Owner)
            .filter(Owner.name.ilike(f"%{term.strip()}%"))
            .order_by(Owner.id.asc())
            .first()
        )
        if owner is not None:
            return SearchResult(
                found=True, id=owner.id, name=owner.name, phone=owner.phone, email=owner.email, search_type="name"
            )
    return NOT_FOUND_RESULT


def add_owner(db: Session, name: str | None, phone: str | None, email: str | None) -> Outcome:
    if not name or not name.strip():
        return Outcome.failure(INVALID, "Owner name is required")
    owner = Owner(name=name.strip(), phone=phone, email=email)
    with transaction(db):
        db.add(owner)
    db.refresh(owner)
    logger.info("Owner %s created", owner.id)
    return Outcome.success("Owner added successfully", owner_id=owner.id, owner=owner)
