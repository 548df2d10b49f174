"""Lead management endpoints: CRUD, assignment, distribution and export."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from backend.app.api.outcomes import ensure_ok
from backend.app.db.session import get_db
from backend.app.dependencies.auth import (
    get_back_office_user,
    get_current_admin,
    get_current_sales_user,
    get_current_user,
)
from backend.app.models.enums import LeadStatus, UserRole
from backend.app.models.lead import Lead
from backend.app.models.user import User
from backend.app.schemas.lead import (
    AssignmentHistoryRead,
    AssignmentResponse,
    AssignRequest,
    AttachUnitRequest,
    DistributeRequest,
    DistributeResponse,
    LeadCreate,
    LeadCreateResponse,
    LeadRead,
    LeadUpdate,
    ReassignRequest,
)
from backend.app.services import assignment, leads as lead_service
from backend.app.services.lead_export import export_leads_csv
from backend.app.services.outcome import Outcome

router = APIRouter(prefix="/leads", tags=["leads"])


def _get_visible_lead(db: Session, lead_id: int, user: User) -> Lead:
    lead = lead_service.get_lead(db, lead_id)
    if not lead or not lead_service.can_view_lead(user, lead):
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


def _assignment_response(outcome: Outcome) -> AssignmentResponse:
    ensure_ok(outcome)
    return AssignmentResponse(
        changed=outcome.changed,
        message=outcome.message,
        lead_id=outcome.data.get("lead_id"),
        from_sales_id=outcome.data.get("from_sales_id"),
        to_sales_id=outcome.data.get("to_sales_id"),
    )


@router.post("/", response_model=LeadCreateResponse)
async def create_lead(
    lead_in: LeadCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_back_office_user),
):
    outcome = ensure_ok(
        lead_service.create_lead(
            db,
            client_name=lead_in.client_name,
            client_phone=lead_in.client_phone,
            comment=lead_in.comment,
            unit_id=lead_in.unit_id,
            project_id=lead_in.project_id,
            actor_id=current_user.id,
        )
    )
    return LeadCreateResponse(
        message=outcome.message,
        lead=LeadRead.model_validate(outcome.data["lead"]),
        duplicate_warning=outcome.data["duplicate_warning"] is not None,
        duplicate_lead_id=outcome.data["duplicate_lead_id"],
    )


@router.get("/", response_model=list[LeadRead])
async def list_leads(
    search: str | None = None,
    project_id: int | None = None,
    assigned_to_id: int | None = None,
    status: LeadStatus | None = None,
    created_on: date | None = None,
    unassigned_only: bool = False,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    filters = lead_service.LeadFilters(
        search=search,
        project_id=project_id,
        assigned_to_id=assigned_to_id,
        status=status,
        created_on=created_on,
        unassigned_only=unassigned_only,
    )
    return lead_service.list_leads_for_user(db, current_user, filters, skip=skip, limit=limit)


@router.get("/export.csv")
async def export_leads(db: Session = Depends(get_db), current_user: User = Depends(get_back_office_user)):
    content = export_leads_csv(db)
    headers = {"Content-Disposition": f'attachment; filename="leads_{date.today():%Y%m%d}.csv"'}
    return Response(content=content, media_type="text/csv; charset=utf-8", headers=headers)


@router.get("/active", response_model=list[LeadRead])
async def list_active_leads(db: Session = Depends(get_db), current_user: User = Depends(get_current_sales_user)):
    return lead_service.get_active_leads_for_sales(db, current_user.id)


@router.get("/tasks", response_model=list[LeadRead])
async def list_new_tasks(db: Session = Depends(get_db), current_user: User = Depends(get_current_sales_user)):
    return lead_service.get_new_tasks_for_sales(db, current_user.id)


@router.post("/distribute", response_model=DistributeResponse)
async def distribute_leads(
    request: DistributeRequest,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    outcome = ensure_ok(assignment.distribute_unassigned(db, request.method, current_admin.id))
    return DistributeResponse(
        message=outcome.message,
        distributed=outcome.data.get("distributed", 0),
        sales_reps=outcome.data.get("sales_reps", 0),
    )


@router.get("/{lead_id}", response_model=LeadRead)
async def get_lead(lead_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_visible_lead(db, lead_id, current_user)


@router.put("/{lead_id}", response_model=LeadRead)
async def update_lead(
    lead_id: int,
    lead_in: LeadUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_back_office_user),
):
    lead = _get_visible_lead(db, lead_id, current_user)
    outcome = ensure_ok(lead_service.update_lead(db, lead, lead_in.model_dump(exclude_none=True)))
    return outcome.data["lead"]


@router.delete("/{lead_id}")
async def delete_lead(lead_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    ensure_ok(lead_service.delete_lead(db, lead_id))
    return {"status": "deleted", "id": lead_id}


@router.post("/{lead_id}/assign", response_model=AssignmentResponse)
async def assign_lead(
    lead_id: int,
    request: AssignRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_back_office_user),
):
    return _assignment_response(assignment.assign_lead(db, lead_id, request.sales_user_id, current_user.id))


@router.post("/{lead_id}/reassign", response_model=AssignmentResponse)
async def reassign_lead(
    lead_id: int,
    request: ReassignRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_back_office_user),
):
    lead = db.query(Lead).filter(Lead.id == lead_id).first()
    if lead is not None and current_user.role == UserRole.MARKETING and lead.assigned_to_id is None:
        raise HTTPException(status_code=403, detail="Marketing cannot reassign an unassigned lead")
    return _assignment_response(assignment.reassign_lead(db, lead_id, request.new_sales_user_id, current_user.id))


@router.post("/{lead_id}/unassign", response_model=AssignmentResponse)
async def unassign_lead(lead_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    return _assignment_response(assignment.unassign_lead(db, lead_id, current_admin.id))


@router.get("/{lead_id}/history", response_model=list[AssignmentHistoryRead])
async def get_assignment_history(
    lead_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_back_office_user),
):
    _get_visible_lead(db, lead_id, current_user)
    return assignment.get_assignment_history(db, lead_id)


@router.post("/{lead_id}/unit")
async def attach_unit(
    lead_id: int,
    request: AttachUnitRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_sales_user),
):
    outcome = ensure_ok(lead_service.attach_unit_to_lead(db, lead_id, request.unit_id, current_user.id))
    return {"success": True, "message": outcome.message, **outcome.data}
