"""Project directory operations."""

import logging
from typing import List

from sqlalchemy.orm import Session

from backend.app.core.transactions import transaction
from backend.app.models.lead import Lead
from backend.app.models.project import Project
from backend.app.services.outcome import CONFLICT, INVALID, NOT_FOUND, Outcome

logger = logging.getLogger(__name__)


def create_project(db: Session, name: str) -> Outcome:
    if not name or not name.strip():
        return Outcome.failure(INVALID, "Project Name is Required")
    project = Project(name=name.strip())
    with transaction(db):
        db.add(project)
    db.refresh(project)
    return Outcome.success("Project created", project=project)


def list_projects(db: Session) -> List[Project]:
    return db.query(Project).order_by(Project.name.asc(), Project.id.asc()).all()


def delete_project(db: Session, project_id: int) -> Outcome:
    project = db.query(Project).filter(Project.id == project_id).first()
    if project is None:
        return Outcome.failure(NOT_FOUND, "Project not found")
    if db.query(Lead.id).filter(Lead.project_id == project_id).first() is not None:
        return Outcome.failure(CONFLICT, "Cannot delete project with associated leads")
    with transaction(db):
        db.delete(project)
    logger.info("Project %s deleted", project_id)
    return Outcome.success("Project deleted successfully!", project_id=project_id)
