"""Lead assignment engine.

Owns ``Lead.assigned_to_id`` and the append-only ``LeadAssignmentHistory``
trail. Every mutation writes exactly one history row in the same transaction
as the lead update. Leads in a terminal status (DoneDeal, Canceled) can no
longer change hands.

Missing leads are a silent no-op for assign/reassign: callers retry these
operations freely and rely on that.
"""

import logging
from typing import List, Sequence, Tuple

from sqlalchemy.orm import Session

from backend.app.core.settings import get_settings
from backend.app.core.time import utc_now
from backend.app.core.transactions import transaction
from backend.app.models.enums import TERMINAL_STATUSES, UserRole, is_terminal
from backend.app.models.lead import Lead
from backend.app.models.lead_assignment_history import LeadAssignmentHistory
from backend.app.models.user import User
from backend.app.services.outcome import CONFLICT, INVALID, Outcome

logger = logging.getLogger(__name__)

TERMINAL_LEAD_MESSAGE = "Cannot reassign a lead that is closed as DoneDeal or Canceled"


def get_active_sales_users(db: Session) -> List[User]:
    return (
        db.query(User)
        .filter(User.role == UserRole.SALES, User.is_active.is_(True))
        .order_by(User.id.asc())
        .all()
    )


def _is_active_sales_user(db: Session, user_id: int) -> bool:
    user = db.query(User).filter(User.id == user_id).first()
    return user is not None and user.is_active and user.role == UserRole.SALES


def _record_assignment(db: Session, lead: Lead, to_sales_id: int | None, actor_id: int) -> LeadAssignmentHistory:
    now = utc_now()
    history = LeadAssignmentHistory(
        lead_id=lead.id,
        from_sales_id=lead.assigned_to_id,
        to_sales_id=to_sales_id,
        changed_by_id=actor_id,
        changed_at=now,
    )
    lead.assigned_to_id = to_sales_id
    lead.updated_at = now
    db.add(history)
    return history


def _change_assignment(db: Session, lead_id: int, to_sales_id: int | None, actor_id: int) -> Outcome:
    lead = db.query(Lead).filter(Lead.id == lead_id).first()
    if lead is None:
        logger.debug("Assignment of missing lead %s ignored", lead_id)
        return Outcome.noop("Lead not found")
    if is_terminal(lead.current_status):
        logger.warning("Rejected assignment change on terminal lead %s (%s)", lead.id, lead.current_status.value)
        return Outcome.failure(CONFLICT, TERMINAL_LEAD_MESSAGE)
    if to_sales_id is not None and not _is_active_sales_user(db, to_sales_id):
        return Outcome.failure(INVALID, "Target user is not an active sales user")

    previous = lead.assigned_to_id
    with transaction(db):
        history = _record_assignment(db, lead, to_sales_id, actor_id)
    logger.info("Lead %s assigned %s -> %s by user %s", lead.id, previous, to_sales_id, actor_id)
    return Outcome.success(
        "Lead assigned" if to_sales_id is not None else "Lead unassigned",
        lead_id=lead.id,
        from_sales_id=previous,
        to_sales_id=to_sales_id,
        history_id=history.id,
    )


def assign_lead(db: Session, lead_id: int, to_sales_id: int, actor_id: int) -> Outcome:
    return _change_assignment(db, lead_id, to_sales_id, actor_id)


def reassign_lead(db: Session, lead_id: int, new_sales_id: int | None, actor_id: int) -> Outcome:
    """Move a lead to another sales user; ``None`` leaves it unassigned."""
    return _change_assignment(db, lead_id, new_sales_id, actor_id)


def unassign_lead(db: Session, lead_id: int, actor_id: int) -> Outcome:
    return _change_assignment(db, lead_id, None, actor_id)


def plan_block_distribution(lead_ids: Sequence[int], sales_ids: Sequence[int]) -> List[Tuple[int, List[int]]]:
    """Split ``lead_ids`` into contiguous blocks, one per sales user.

    The first ``len(lead_ids) % len(sales_ids)`` sales users get one extra lead.
    """
    if not lead_ids or not sales_ids:
        return []
    base, remainder = divmod(len(lead_ids), len(sales_ids))
    plan: List[Tuple[int, List[int]]] = []
    start = 0
    for position, sales_id in enumerate(sales_ids):
        size = base + 1 if position < remainder else base
        plan.append((sales_id, list(lead_ids[start:start + size])))
        start += size
    return plan


def distribute_unassigned(db: Session, method: str, actor_id: int) -> Outcome:
    """Hand every unassigned, open lead to the active sales team, oldest first."""
    normalized_method = (method or "").strip().lower()
    if normalized_method not in get_settings().distribution_methods:
        return Outcome.failure(INVALID, f"Unsupported distribution method: {method}")

    leads = (
        db.query(Lead)
        .filter(Lead.assigned_to_id.is_(None), Lead.current_status.notin_(list(TERMINAL_STATUSES)))
        .order_by(Lead.created_at.asc(), Lead.id.asc())
        .all()
    )
    sales_users = get_active_sales_users(db)
    if not leads:
        return Outcome.noop("No unassigned leads to distribute")
    if not sales_users:
        return Outcome.noop("No sales reps available")

    leads_by_id = {lead.id: lead for lead in leads}
    plan = plan_block_distribution([lead.id for lead in leads], [user.id for user in sales_users])
    with transaction(db):
        for sales_id, block in plan:
            for lead_id in block:
                _record_assignment(db, leads_by_id[lead_id], sales_id, actor_id)

    logger.info("Distributed %s leads among %s sales reps by user %s", len(leads), len(sales_users), actor_id)
    return Outcome.success(
        f"Successfully distributed {len(leads)} leads among {len(sales_users)} sales reps",
        distributed=len(leads),
        sales_reps=len(sales_users),
        allocations={sales_id: block for sales_id, block in plan},
    )


def get_assignment_history(db: Session, lead_id: int) -> List[LeadAssignmentHistory]:
    return (
        db.query(LeadAssignmentHistory)
        .filter(LeadAssignmentHistory.lead_id == lead_id)
        .order_by(LeadAssignmentHistory.changed_at.desc(), LeadAssignmentHistory.id.desc())
        .all()
    )
