"""Request/response messages of the VendorsService RPC contract."""


from pydantic import Field

from app.core.pagination import DEFAULT_PAGE_SIZE
from app.schemas.common import ApiModel
from app.schemas.contact import ContactCreate, ContactOut
from app.schemas.payment_term import PaymentTermOut
from app.schemas.vendor import VendorCreate, VendorOut, VendorUpdate

class Response(ApiModel):
    """Generic acknowledgement for calls that return no resource."""
    success: bool = True
    message: str = ""

class VendorRef(ApiModel):
    id: str
    entity_id: str

class CreateVendorRequest(VendorCreate):
    pass

class GetVendorRequest(VendorRef):
    pass

class GetVendorByCodeRequest(ApiModel):
    vendor_code: str
    entity_id: str

class UpdateVendorRequest(VendorUpdate):
    id: str

class DeleteVendorRequest(VendorRef):
    pass

class ActivateVendorRequest(VendorRef):
    pass

class DeactivateVendorRequest(VendorRef):
    pass

class ListVendorsRequest(ApiModel):
    entity_id: str
    status: str | None = None
    vendor_type: str | None = None
    active_only: bool = False
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

class ListVendorsResponse(ApiModel):
    vendors: list[VendorOut]
    total: int
    page: int
    page_size: int

class ValidateVendorRequest(VendorRef):
    pass

class ValidateVendorResponse(ApiModel):
    valid: bool
    message: str = ""

class UpdateBalanceRequest(ApiModel):
    vendor_id: str
    entity_id: str
    amount: int

class GetVendorContactsRequest(ApiModel):
    vendor_id: str

class GetVendorContactsResponse(ApiModel):
    contacts: list[ContactOut]

class AddVendorContactRequest(ContactCreate):
    vendor_id: str
    entity_id: str

class GetPaymentTermsRequest(ApiModel):
    pass

class GetPaymentTermsResponse(ApiModel):
    payment_terms: list[PaymentTermOut] = Field(default_factory=list)
