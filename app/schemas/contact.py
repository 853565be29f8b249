"""Vendor contact Pydantic schemas."""


from datetime import datetime

from app.schemas.common import ApiModel

class ContactCreate(ApiModel):
    contact_type: str
    first_name: str
    last_name: str
    title: str | None = None
    email: str | None = None
    phone: str | None = None
    mobile: str | None = None
    is_primary: bool = False
    notes: str | None = None

class ContactOut(ApiModel):
    id: str
    vendor_id: str
    contact_type: str
    first_name: str
    last_name: str
    title: str | None = None
    email: str | None = None
    phone: str | None = None
    mobile: str | None = None
    is_primary: bool
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
