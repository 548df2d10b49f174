"""Export leads as a CSV snapshot."""

import csv
import io
from typing import Iterable, List

from sqlalchemy.orm import Session, joinedload

from backend.app.models.enums import status_display_name
from backend.app.models.lead import Lead

CSV_COLUMNS = [
    "Client Name",
    "Client Phone",
    "Project",
    "Unit Code",
    "Status",
    "Created By",
    "Assigned To",
    "Last Updated",
]
CSV_HEADER = ",".join(CSV_COLUMNS)
DATE_FORMAT = "%d %b %Y %H:%M"


def lead_row_values(lead: Lead) -> List[str]:
    """Flatten one lead; absent relations become empty strings."""
    return [
        lead.client_name or "",
        lead.client_phone or "",
        lead.project.name if lead.project else "",
        lead.unit.unit_code if lead.unit and lead.unit.unit_code else "",
        status_display_name(lead.current_status),
        lead.created_by.full_name if lead.created_by else "",
        lead.assigned_to.full_name if lead.assigned_to else "Unassigned",
        lead.updated_at.strftime(DATE_FORMAT) if lead.updated_at else "",
    ]


def _writer(output: io.StringIO):
    return csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")


def build_lead_row(lead: Lead) -> str:
    output = io.StringIO()
    _writer(output).writerow(lead_row_values(lead))
    return output.getvalue().rstrip("\n")


def build_leads_csv(leads: Iterable[Lead]) -> str:
    """Render leads in the order given, one row each, after the header row."""
    output = io.StringIO()
    output.write(CSV_HEADER + "\n")
    writer = _writer(output)
    for lead in leads:
        writer.writerow(lead_row_values(lead))
    return output.getvalue()


def export_leads_csv(db: Session) -> bytes:
    leads = (
        db.query(Lead)
        .options(
            joinedload(Lead.project),
            joinedload(Lead.unit),
            joinedload(Lead.created_by),
            joinedload(Lead.assigned_to),
        )
        .order_by(Lead.updated_at.is_(None), Lead.updated_at.desc(), Lead.id.desc())
        .all()
    )
    return build_leads_csv(leads).encode("utf-8")
