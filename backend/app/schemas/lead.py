"""Lead schemas for create, update and read operations."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.enums import LeadStatus


class LeadBase(BaseModel):
    client_name: str = Field(min_length=1, max_length=25)
    client_phone: str = Field(min_length=1, max_length=50)
    comment: Optional[str] = None


class LeadCreate(LeadBase):
    """Schema for lead creation requests."""

    unit_id: Optional[int] = None
    project_id: Optional[int] = None


class LeadUpdate(BaseModel):
    """Schema for lead updates with partial fields."""

    client_name: Optional[str] = Field(default=None, min_length=1, max_length=25)
    client_phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    comment: Optional[str] = None
    unit_id: Optional[int] = None
    project_id: Optional[int] = None


class UserSummary(BaseModel):
    id: int
    full_name: str

    model_config = ConfigDict(from_attributes=True)


class LeadRead(LeadBase):
    """Schema for lead responses."""

    id: int
    project_id: Optional[int] = None
    unit_id: Optional[int] = None
    created_by_id: int
    assigned_to_id: Optional[int] = None
    current_status: LeadStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    assigned_to: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)


class LeadCreateResponse(BaseModel):
    success: bool = True
    message: str
    lead: LeadRead
    duplicate_warning: bool = False
    duplicate_lead_id: Optional[int] = None


class AssignRequest(BaseModel):
    sales_user_id: int


class ReassignRequest(BaseModel):
    new_sales_user_id: Optional[int] = None


class DistributeRequest(BaseModel):
    method: str = "roundrobin"


class DistributeResponse(BaseModel):
    success: bool = True
    message: str
    distributed: int = 0
    sales_reps: int = 0


class AssignmentResponse(BaseModel):
    success: bool = True
    changed: bool
    message: str
    lead_id: Optional[int] = None
    from_sales_id: Optional[int] = None
    to_sales_id: Optional[int] = None


class AssignmentHistoryRead(BaseModel):
    id: int
    lead_id: int
    from_sales_id: Optional[int] = None
    to_sales_id: Optional[int] = None
    changed_by_id: int
    changed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AttachUnitRequest(BaseModel):
    unit_id: int
