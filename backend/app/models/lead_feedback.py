"""Feedback notes recorded alongside lead status changes."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base
from backend.app.models.enums import LeadStatus, enum_values


class LeadFeedback(Base):
    __tablename__ = "lead_feedbacks"

    id = Column(Integer, primary_key=True, index=True)
    lead_id = Column(Integer, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False, index=True)
    sales_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    status = Column(
        Enum(LeadStatus, name="lead_status", native_enum=False, values_callable=enum_values),
        nullable=False,
    )
    comment = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    lead = relationship("Lead", back_populates="feedbacks")
    sales = relationship("User")
