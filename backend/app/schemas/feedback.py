"""Feedback schemas for lead status changes."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from backend.app.models.enums import LeadStatus


class StatusChangeRequest(BaseModel):
    status: LeadStatus
    comment: Optional[str] = None


class FollowUpRequest(BaseModel):
    notes: str
    status: LeadStatus


class QuickStatusRequest(BaseModel):
    status: LeadStatus


class StatusChangeResponse(BaseModel):
    success: bool = True
    changed: bool = True
    message: str
    lead_id: Optional[int] = None
    status: Optional[LeadStatus] = None
    unit_sold: bool = False


class FeedbackRead(BaseModel):
    id: int
    lead_id: int
    sales_id: int
    status: LeadStatus
    comment: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
