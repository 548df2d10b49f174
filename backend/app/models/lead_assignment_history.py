"""Append-only audit trail of lead ownership changes."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class LeadAssignmentHistory(Base):
    __tablename__ = "lead_assignment_histories"

    id = Column(Integer, primary_key=True, index=True)
    lead_id = Column(Integer, ForeignKey("leads.id"), nullable=False, index=True)
    # None on either side means "unassigned"
    from_sales_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    to_sales_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    changed_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    changed_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    lead = relationship("Lead", back_populates="assignment_history")
    from_sales = relationship("User", foreign_keys=[from_sales_id])
    to_sales = relationship("User", foreign_keys=[to_sales_id])
    changed_by = relationship("User", foreign_keys=[changed_by_id])
