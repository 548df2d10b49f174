import csv
import io
from datetime import datetime

import pytest

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.enums import LeadStatus, UserRole
from backend.app.models.lead import Lead
from backend.app.models.project import Project
from backend.app.models.unit import Unit
from backend.app.models.user import User
from backend.app.services.lead_export import CSV_HEADER, build_lead_row, build_leads_csv, export_leads_csv


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_row_quotes_every_field_and_formats_date():
    lead = Lead(
        client_name='Mona "VIP"',
        client_phone="01001234567",
        current_status=LeadStatus.FOLLOW_UP,
        updated_at=datetime(2024, 3, 5, 14, 7),
    )
    lead.project = Project(name="Palm, Hills")
    lead.unit = Unit(unit_code="A-1")
    lead.created_by = User(full_name="Marketer")

    row = build_lead_row(lead)

    assert row == (
        '"Mona ""VIP""","01001234567","Palm, Hills","A-1","Follow Up","Marketer","Unassigned","05 Mar 2024 14:07"'
    )


def test_row_with_missing_relations():
    lead = Lead(client_name="Solo", client_phone="0100", current_status=LeadStatus.NEW)
    assert build_lead_row(lead) == '"Solo","0100","","","New Lead","","Unassigned",""'


def test_unit_code_with_delimiters_keeps_columns_aligned():
    lead = Lead(client_name="Mona", client_phone="01012345678", current_status=LeadStatus.NEW)
    lead.project = Project(name="Palm Hills")
    lead.unit = Unit(unit_code='B,12 "north"')

    content = build_leads_csv([lead])
    header, row = list(csv.reader(io.StringIO(content)))

    assert len(row) == len(header) == 8
    assert row[3] == 'B,12 "north"'
    assert row[4] == "New Lead"


def test_empty_export_is_header_only():
    assert build_leads_csv([]) == CSV_HEADER + "\n"


def test_export_orders_by_last_update():
    with SessionLocal() as db:
        creator = User(full_name="Marketer", email="mkt@example.com", role=UserRole.MARKETING)
        seller = User(full_name="Seller", email="sales@example.com", role=UserRole.SALES)
        db.add_all([creator, seller])
        db.flush()
        db.add_all(
            [
                Lead(client_name="Older", client_phone="0101", created_by_id=creator.id,
                     updated_at=datetime(2024, 1, 1, 8, 0)),
                Lead(client_name="Newer", client_phone="0102", created_by_id=creator.id,
                     assigned_to_id=seller.id, updated_at=datetime(2024, 2, 1, 8, 0)),
            ]
        )
        db.commit()

        content = export_leads_csv(db).decode("utf-8")

    lines = content.splitlines()
    assert lines[0] == CSV_HEADER
    assert lines[1].startswith('"Newer"')
    assert '"Seller"' in lines[1]
    assert lines[2].startswith('"Older"')
    assert len(lines) == 3
