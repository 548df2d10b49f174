"""Duplicate lookup payloads."""

from typing import Optional

from pydantic import BaseModel


class SearchResultRead(BaseModel):
    found: bool
    id: Optional[int] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    search_type: Optional[str] = None
