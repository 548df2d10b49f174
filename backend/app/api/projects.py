"""Project endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backend.app.api.outcomes import ensure_ok
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_admin, get_current_user
from backend.app.models.project import Project
from backend.app.models.user import User
from backend.app.schemas.unit import ProjectCreate, ProjectDetail, ProjectRead
from backend.app.services import projects as project_service

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/", response_model=ProjectRead)
async def create_project(
    project_in: ProjectCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    outcome = ensure_ok(project_service.create_project(db, project_in.name))
    return outcome.data["project"]


@router.get("/", response_model=list[ProjectRead])
async def list_projects(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return project_service.list_projects(db)


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return ProjectDetail(id=project.id, name=project.name, unit_count=len(project.units), lead_count=len(project.leads))


@router.delete("/{project_id}")
async def delete_project(project_id: int, db: Session = Depends(get_db), current_admin: User = Depends(get_current_admin)):
    outcome = ensure_ok(project_service.delete_project(db, project_id))
    return {"success": True, "message": outcome.message}
