"""Lead status and feedback endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backend.app.api.outcomes import ensure_ok
from backend.app.db.session import get_db
from backend.app.dependencies.auth import (
    get_back_office_user,
    get_current_admin,
    get_current_sales_user,
    get_current_user,
)
from backend.app.models.user import User
from backend.app.schemas.feedback import (
    FeedbackRead,
    FollowUpRequest,
    QuickStatusRequest,
    StatusChangeRequest,
    StatusChangeResponse,
)
from backend.app.services import lead_status
from backend.app.services.leads import can_view_lead, get_lead
from backend.app.services.outcome import Outcome

router = APIRouter(prefix="/leads", tags=["leads"])


def _status_response(outcome: Outcome) -> StatusChangeResponse:
    ensure_ok(outcome)
    return StatusChangeResponse(
        changed=outcome.changed,
        message=outcome.message,
        lead_id=outcome.data.get("lead_id"),
        status=outcome.data.get("status"),
        unit_sold=outcome.data.get("unit_sold", False),
    )


@router.post("/{lead_id}/status", response_model=StatusChangeResponse)
async def change_status(
    lead_id: int,
    request: StatusChangeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_sales_user),
):
    return _status_response(
        lead_status.record_status_change(db, lead_id, request.status, current_user.id, request.comment)
    )


@router.patch("/{lead_id}/status", response_model=StatusChangeResponse)
async def quick_status_change(
    lead_id: int,
    request: QuickStatusRequest,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return _status_response(lead_status.update_status(db, lead_id, request.status, current_admin.id))


@router.post("/{lead_id}/follow-up", response_model=StatusChangeResponse)
async def add_follow_up(
    lead_id: int,
    request: FollowUpRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_back_office_user),
):
    return _status_response(lead_status.add_follow_up(db, lead_id, request.notes, request.status, current_user.id))


@router.get("/{lead_id}/feedback", response_model=list[FeedbackRead])
async def list_feedback(
    lead_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lead = get_lead(db, lead_id)
    if not lead or not can_view_lead(current_user, lead):
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead_status.get_feedback_history(db, lead_id)
