"""Vendor Pydantic schemas (request DTOs and response models).

Enumerated and length-checked fields are typed as plain strings: the service
layer owns those rules and reports violations as InvalidInputError naming the
field.
"""


from datetime import datetime

from pydantic import Field

from app.schemas.common import ApiModel

class VendorFields(ApiModel):
    """Every caller-supplied vendor field (shared by create and full-replace update)."""

    entity_id: str
    vendor_code: str
    vendor_name: str
    legal_name: str | None = None
    vendor_type: str
    tax_id: str | None = None
    is_tax_exempt: bool = False
    is_1099_vendor: bool = False
    email: str | None = None
    phone: str | None = None
    fax: str | None = None
    website: str | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    city: str | None = None
    state_province: str | None = None
    postal_code: str | None = None
    country: str
    payment_terms: str = "NET30"
    payment_method: str | None = None
    currency: str
    credit_limit: int | None = None
    bank_name: str | None = None
    bank_account_number: str | None = None
    bank_routing_number: str | None = None
    swift_code: str | None = None
    iban: str | None = None
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)

class VendorCreate(VendorFields):
    """New vendor. Any status sent by the caller is ignored (always pending_approval)."""

class VendorUpdate(VendorFields):
    """Full replacement of a vendor's fields. current_balance is deliberately absent."""

    status: str

class VendorOut(ApiModel):
    id: str
    entity_id: str
    vendor_code: str
    vendor_name: str
    legal_name: str | None = None
    vendor_type: str
    status: str
    tax_id: str | None = None
    is_tax_exempt: bool
    is_1099_vendor: bool
    email: str | None = None
    phone: str | None = None
    fax: str | None = None
    website: str | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    city: str | None = None
    state_province: str | None = None
    postal_code: str | None = None
    country: str
    payment_terms: str
    payment_method: str | None = None
    currency: str
    credit_limit: int | None = None
    current_balance: int
    bank_name: str | None = None
    bank_account_number: str | None = None
    bank_routing_number: str | None = None
    swift_code: str | None = None
    iban: str | None = None
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime
    updated_at: datetime

class VendorValidationOut(ApiModel):
    valid: bool
    message: str

class BalanceUpdate(ApiModel):
    entity_id: str
    amount: int = Field(description="Signed delta in the smallest currency unit")
