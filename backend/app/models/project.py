"""Project model grouping units and leads."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    units = relationship("Unit", back_populates="project", cascade="all, delete-orphan")
    leads = relationship("Lead", back_populates="project")
