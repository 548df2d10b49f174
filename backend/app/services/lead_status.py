"""Lead status transitions and their feedback trail."""

import logging
from typing import List

from sqlalchemy.orm import Session

from backend.app.core.time import utc_now
from backend.app.core.transactions import transaction
from backend.app.models.enums import LeadStatus, is_terminal
from backend.app.models.lead import Lead
from backend.app.models.lead_feedback import LeadFeedback
from backend.app.models.unit import Unit
from backend.app.services.outcome import CONFLICT, INVALID, NOT_FOUND, Outcome

logger = logging.getLogger(__name__)


def _apply_status(db: Session, lead: Lead, status: LeadStatus) -> bool:
    """Set the lead status; returns True when a linked unit was marked sold."""
    previous = lead.current_status
    lead.current_status = status
    lead.updated_at = utc_now()
    if status == LeadStatus.DONE_DEAL and previous != LeadStatus.DONE_DEAL and lead.unit_id is not None:
        unit = db.query(Unit).filter(Unit.id == lead.unit_id).first()
        if unit is not None:
            unit.is_available = False
            return True
    return False


def record_status_change(
    db: Session,
    lead_id: int,
    new_status: LeadStatus,
    actor_sales_id: int,
    comment: str | None,
) -> Outcome:
    """Sales-facing status change: only the assignee may move the lead forward."""
    lead = (
        db.query(Lead)
        .filter(Lead.id == lead_id, Lead.assigned_to_id == actor_sales_id)
        .first()
    )
    if lead is None:
        return Outcome.failure(NOT_FOUND, "Lead not found")
    if new_status == LeadStatus.NEW or new_status == lead.current_status:
        return Outcome.failure(INVALID, "Invalid status change")
    if is_terminal(lead.current_status):
        logger.warning("Rejected status change on terminal lead %s", lead.id)
        return Outcome.failure(CONFLICT, "Lead is already closed")

    previous = lead.current_status
    with transaction(db):
        db.add(
            LeadFeedback(
                lead_id=lead.id,
                sales_id=actor_sales_id,
                status=new_status,
                comment=comment or "",
                created_at=utc_now(),
            )
        )
        unit_sold = _apply_status(db, lead, new_status)
    logger.info("Lead %s status %s -> %s by sales user %s", lead.id, previous.value, new_status.value, actor_sales_id)
    return Outcome.success("Status updated successfully", lead_id=lead.id, status=new_status, unit_sold=unit_sold)


def add_follow_up(db: Session, lead_id: int, notes: str | None, status: LeadStatus, actor_id: int) -> Outcome:
    """Back-office follow-up; not limited to the assignee."""
    if not notes or not notes.strip():
        return Outcome.failure(INVALID, "Follow-up notes cannot be empty.")
    lead = db.query(Lead).filter(Lead.id == lead_id).first()
    if lead is None:
        return Outcome.failure(NOT_FOUND, "Lead not found")

    with transaction(db):
        db.add(
            LeadFeedback(
                lead_id=lead.id,
                sales_id=actor_id,
                status=status,
                comment=notes.strip(),
                created_at=utc_now(),
            )
        )
        unit_sold = _apply_status(db, lead, status)
    logger.info("Follow-up added to lead %s by user %s (status %s)", lead.id, actor_id, status.value)
    return Outcome.success("Follow-up added successfully!", lead_id=lead.id, status=status, unit_sold=unit_sold)


def update_status(db: Session, lead_id: int, status: LeadStatus, actor_id: int) -> Outcome:
    """Quick status change without a feedback note. Missing leads are ignored."""
    lead = db.query(Lead).filter(Lead.id == lead_id).first()
    if lead is None:
        return Outcome.noop("Lead not found")
    with transaction(db):
        unit_sold = _apply_status(db, lead, status)
    logger.info("Lead %s status set to %s by user %s", lead.id, status.value, actor_id)
    return Outcome.success("Status updated", lead_id=lead.id, status=status, unit_sold=unit_sold)


def get_feedback_history(db: Session, lead_id: int) -> List[LeadFeedback]:
    return (
        db.query(LeadFeedback)
        .filter(LeadFeedback.lead_id == lead_id)
        .order_by(LeadFeedback.created_at.desc(), LeadFeedback.id.desc())
        .all()
    )
