from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from backend.app.core.security import create_access_token
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.enums import LeadStatus, UserRole
from backend.app.models.lead import Lead
from backend.app.models.lead_assignment_history import LeadAssignmentHistory
from backend.app.models.lead_feedback import LeadFeedback
from backend.app.models.project import Project
from backend.app.models.unit import Unit
from backend.app.models.user import User
from backend.app.services import assignment, lead_status, leads
from backend.app.services.outcome import CONFLICT, INVALID


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def seed(db):
    admin = User(full_name="Admin", email="admin@example.com", role=UserRole.ADMIN)
    u1 = User(full_name="Sales One", email="u1@example.com", role=UserRole.SALES)
    project = Project(name="Palm Hills")
    db.add_all([admin, u1, project])
    db.flush()
    unit = Unit(unit_code="V-1", project_id=project.id, location="October", price=Decimal("7000000"),
                area=300, bedrooms=4, bathrooms=3)
    db.add(unit)
    db.commit()
    return admin, u1, unit


def test_lead_lifecycle_through_services():
    with SessionLocal() as db:
        admin, u1, unit = seed(db)
        lead = leads.create_lead(
            db, client_name="Mona", client_phone="01001234567", unit_id=unit.id, actor_id=admin.id
        ).data["lead"]
        assert lead.current_status == LeadStatus.NEW and lead.assigned_to_id is None

        distributed = assignment.distribute_unassigned(db, "roundrobin", admin.id)
        assert distributed.data["distributed"] == 1
        db.refresh(lead)
        assert lead.assigned_to_id == u1.id
        history = assignment.get_assignment_history(db, lead.id)
        assert [(h.from_sales_id, h.to_sales_id) for h in history] == [(None, u1.id)]

        follow_up = lead_status.record_status_change(db, lead.id, LeadStatus.FOLLOW_UP, u1.id, "called, interested")
        assert follow_up.ok
        assert db.query(LeadFeedback).filter(LeadFeedback.lead_id == lead.id).count() == 1

        back_to_new = lead_status.record_status_change(db, lead.id, LeadStatus.NEW, u1.id, None)
        assert back_to_new.code == INVALID

        done = lead_status.record_status_change(db, lead.id, LeadStatus.DONE_DEAL, u1.id, "signed")
        assert done.ok
        db.refresh(lead)
        db.refresh(unit)
        assert lead.current_status == LeadStatus.DONE_DEAL
        assert unit.is_available is False

        u2 = User(full_name="Sales Two", email="u2@example.com", role=UserRole.SALES)
        db.add(u2)
        db.commit()
        rejected = assignment.reassign_lead(db, lead.id, u2.id, admin.id)
        assert rejected.code == CONFLICT
        assert db.query(LeadAssignmentHistory).filter(LeadAssignmentHistory.lead_id == lead.id).count() == 1


def test_lead_lifecycle_through_api():
    client = TestClient(app)
    with SessionLocal() as db:
        admin, u1, unit = seed(db)
        u2 = User(full_name="Sales Two", email="u2@example.com", role=UserRole.SALES, is_active=False)
        db.add(u2)
        db.commit()
        admin_id, u1_id, u2_id, unit_id = admin.id, u1.id, u2.id, unit.id
    admin_headers = {"Authorization": f"Bearer {create_access_token(user_id=admin_id)}"}
    sales_headers = {"Authorization": f"Bearer {create_access_token(user_id=u1_id)}"}

    created = client.post(
        "/leads/",
        json={"client_name": "Mona", "client_phone": "01001234567", "unit_id": unit_id},
        headers=admin_headers,
    )
    assert created.status_code == 200
    lead_id = created.json()["lead"]["id"]

    distributed = client.post("/leads/distribute", json={"method": "roundrobin"}, headers=admin_headers)
    assert distributed.json()["distributed"] == 1
    assert distributed.json()["sales_reps"] == 1

    assert client.post(
        f"/leads/{lead_id}/status", json={"status": "FollowUp", "comment": "called, interested"}, headers=sales_headers
    ).status_code == 200
    done = client.post(f"/leads/{lead_id}/status", json={"status": "DoneDeal", "comment": "signed"}, headers=sales_headers)
    assert done.status_code == 200
    assert done.json()["unit_sold"] is True
    assert client.get(f"/units/{unit_id}", headers=admin_headers).json()["is_available"] is False

    with SessionLocal() as db:
        db.query(User).filter(User.id == u2_id).update({"is_active": True})
        db.commit()
    rejected = client.post(f"/leads/{lead_id}/reassign", json={"new_sales_user_id": u2_id}, headers=admin_headers)
    assert rejected.status_code == 409

    history = client.get(f"/leads/{lead_id}/history", headers=admin_headers).json()
    assert len(history) == 1
    assert history[0]["from_sales_id"] is None and history[0]["to_sales_id"] == u1_id

    with SessionLocal() as db:
        lead = db.get(Lead, lead_id)
        assert lead.current_status == LeadStatus.DONE_DEAL
        assert len(lead.feedbacks) == 2
