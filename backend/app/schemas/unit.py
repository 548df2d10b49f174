"""Unit, project and owner schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from backend.app.models.enums import Currency, UnitSaleType, UnitType


class UnitBase(BaseModel):
    unit_code: Optional[str] = Field(default=None, max_length=50)
    project_id: Optional[int] = None
    unit_type: UnitType = UnitType.APARTMENT
    sale_type: UnitSaleType = UnitSaleType.SALE
    location: str = Field(min_length=1, max_length=200)
    price: Decimal = Field(ge=0)
    currency: Currency = Currency.EGP
    area: int = Field(ge=1)
    bedrooms: int = Field(ge=1)
    bathrooms: int = Field(ge=1)
    description: Optional[str] = Field(default=None, max_length=1000)
    owner_id: Optional[int] = None


class UnitCreate(UnitBase):
    """Schema for unit creation requests."""


class UnitUpdate(BaseModel):
    unit_code: Optional[str] = Field(default=None, max_length=50)
    project_id: Optional[int] = None
    unit_type: Optional[UnitType] = None
    sale_type: Optional[UnitSaleType] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=200)
    price: Optional[Decimal] = Field(default=None, ge=0)
    currency: Optional[Currency] = None
    area: Optional[int] = Field(default=None, ge=1)
    bedrooms: Optional[int] = Field(default=None, ge=1)
    bathrooms: Optional[int] = Field(default=None, ge=1)
    description: Optional[str] = Field(default=None, max_length=1000)
    owner_id: Optional[int] = None
    is_available: Optional[bool] = None


class OwnerRead(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UnitRead(UnitBase):
    id: int
    is_available: bool
    created_by_id: Optional[int] = None
    created_at: datetime
    owner: Optional[OwnerRead] = None

    model_config = ConfigDict(from_attributes=True)


class AvailabilityUpdate(BaseModel):
    is_available: bool


class UnitOption(BaseModel):
    id: int
    text: str
    disabled: bool
    project_id: Optional[int] = None


class OwnerCreate(BaseModel):
    name: str
    phone: Optional[str] = None
    email: Optional[EmailStr] = None


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class ProjectRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProjectDetail(ProjectRead):
    unit_count: int = 0
    lead_count: int = 0
