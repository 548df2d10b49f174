"""Lead model for the Estate Leads CRM."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base
from backend.app.models.enums import LeadStatus, enum_values


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)
    client_name = Column(String(25), nullable=False)
    client_phone = Column(String(50), nullable=False)
    comment = Column(Text, nullable=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="RESTRICT"), nullable=True, index=True)
    unit_id = Column(Integer, ForeignKey("units.id", ondelete="SET NULL"), nullable=True, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    assigned_to_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    current_status = Column(
        Enum(LeadStatus, name="lead_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=LeadStatus.NEW,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=True, default=utc_now)

    project = relationship("Project", back_populates="leads")
    unit = relationship("Unit")
    created_by = relationship("User", back_populates="created_leads", foreign_keys=[created_by_id])
    assigned_to = relationship("User", back_populates="assigned_leads", foreign_keys=[assigned_to_id])
    feedbacks = relationship(
        "LeadFeedback",
        back_populates="lead",
        cascade="all, delete-orphan",
        order_by="LeadFeedback.created_at.desc()",
    )
    assignment_history = relationship(
        "LeadAssignmentHistory",
        back_populates="lead",
        order_by="LeadAssignmentHistory.changed_at.desc()",
    )
