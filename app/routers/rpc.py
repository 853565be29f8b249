"""VendorsService RPC endpoints — POST /rpc/VendorsService/{Method}.

Every call needs an authenticated caller. Mutating calls also require the
caller's entity to match the request's entity_id and record the caller as
creator / updater. Errors leave through one mapping table so each failure
kind keeps its own RPC status instead of collapsing to INTERNAL.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import UserContext, get_current_user, require_entity
from app.core.exceptions import AppException
from app.core.pagination import clamp_page, clamp_page_size
from app.db.base import get_db
from app.schemas.contact import ContactCreate, ContactOut
from app.schemas.payment_term import PaymentTermOut
from app.schemas.rpc import (
    ActivateVendorRequest,
    AddVendorContactRequest,
    CreateVendorRequest,
    DeactivateVendorRequest,
    DeleteVendorRequest,
    GetPaymentTermsRequest,
    GetPaymentTermsResponse,
    GetVendorByCodeRequest,
    GetVendorContactsRequest,
    GetVendorContactsResponse,
    GetVendorRequest,
    ListVendorsRequest,
    ListVendorsResponse,
    Response,
    UpdateBalanceRequest,
    UpdateVendorRequest,
    ValidateVendorRequest,
    ValidateVendorResponse,
)
from app.schemas.vendor import VendorCreate, VendorOut, VendorUpdate
from app.services.contact import VendorContactService
from app.services.payment_term import PaymentTermService
from app.services.vendor import VendorService

logger = logging.getLogger(__name__)

# AppException.code -> (RPC status, HTTP status)
RPC_STATUS_BY_CODE: dict[str, tuple[str, int]] = {
    "NOT_FOUND": ("NOT_FOUND", 404),
    "ALREADY_EXISTS": ("ALREADY_EXISTS", 409),
    "CONFLICT": ("FAILED_PRECONDITION", 400),
    "INVALID_INPUT": ("INVALID_ARGUMENT", 400),
    "CONSTRAINT_VIOLATION": ("FAILED_PRECONDITION", 400),
    "UNAUTHORIZED": ("UNAUTHENTICATED", 401),
    "FORBIDDEN": ("PERMISSION_DENIED", 403),
    "TIMEOUT": ("DEADLINE_EXCEEDED", 504),
    "INTERNAL_ERROR": ("INTERNAL", 500),
}


RPC_PREFIX = "/rpc/"


def rpc_error(rpc_status: str, http_status: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=http_status,
        content={"error": {"status": rpc_status, "message": message}},
    )


def render_rpc_error(exc: Exception) -> JSONResponse:
    """Error renderer registered for RPC_PREFIX in the app's exception handlers."""
    if isinstance(exc, AppException):
        rpc_status, http_status = RPC_STATUS_BY_CODE.get(exc.code, ("INTERNAL", 500))
        logger.info("RPC call failed: %s %s", rpc_status, exc.message)
        return rpc_error(rpc_status, http_status, exc.message)
    if isinstance(exc, RequestValidationError):
        fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) for err in exc.errors())
        return rpc_error("INVALID_ARGUMENT", 400, f"malformed request: {fields}")
    return rpc_error("INTERNAL", 500, "An unexpected error occurred")


router = APIRouter(prefix="/rpc/VendorsService", tags=["RPC"])


def _svc(request: Request, session: AsyncSession) -> VendorService:
    return VendorService(session, request.app.state.obligations)


# ------------------------------------------------------------------
# Vendors
# ------------------------------------------------------------------

@router.post("/CreateVendor", response_model=VendorOut)
async def create_vendor(
    request: Request,
    req: CreateVendorRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    logger.info(
        "RPC CreateVendor entity_id=%s vendor_code=%s user_id=%s",
        req.entity_id, req.vendor_code, user.user_id,
    )
    require_entity(user, req.entity_id)
    data = VendorCreate.model_validate(req.model_dump())
    vendor = await _svc(request, session).create_vendor(data, actor=user.user_id)
    return VendorOut.model_validate(vendor)


@router.post("/GetVendor", response_model=VendorOut)
async def get_vendor(
    request: Request,
    req: GetVendorRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    vendor = await _svc(request, session).get_vendor(req.id, req.entity_id)
    return VendorOut.model_validate(vendor)


@router.post("/GetVendorByCode", response_model=VendorOut)
async def get_vendor_by_code(
    request: Request,
    req: GetVendorByCodeRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    vendor = await _svc(request, session).get_vendor_by_code(req.vendor_code, req.entity_id)
    return VendorOut.model_validate(vendor)


@router.post("/UpdateVendor", response_model=VendorOut)
async def update_vendor(
    request: Request,
    req: UpdateVendorRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    require_entity(user, req.entity_id)
    data = VendorUpdate.model_validate(req.model_dump(exclude={"id"}))
    vendor = await _svc(request, session).update_vendor(req.id, data, actor=user.user_id)
    return VendorOut.model_validate(vendor)


@router.post("/DeleteVendor", response_model=Response)
async def delete_vendor(
    request: Request,
    req: DeleteVendorRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    require_entity(user, req.entity_id)
    await _svc(request, session).delete_vendor(req.id, req.entity_id)
    return Response(message="vendor deleted")


@router.post("/ListVendors", response_model=ListVendorsResponse)
async def list_vendors(
    request: Request,
    req: ListVendorsRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    page, page_size = clamp_page(req.page), clamp_page_size(req.page_size)
    items, total = await _svc(request, session).list_vendors(
        req.entity_id,
        status=req.status or None,
        vendor_type=req.vendor_type or None,
        active_only=req.active_only,
        page=page,
        page_size=page_size,
    )
    return ListVendorsResponse(
        vendors=[VendorOut.model_validate(v) for v in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("/ActivateVendor", response_model=Response)
async def activate_vendor(
    request: Request,
    req: ActivateVendorRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    require_entity(user, req.entity_id)
    await _svc(request, session).activate_vendor(req.id, req.entity_id, actor=user.user_id)
    return Response(message="vendor activated")


@router.post("/DeactivateVendor", response_model=Response)
async def deactivate_vendor(
    request: Request,
    req: DeactivateVendorRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    require_entity(user, req.entity_id)
    await _svc(request, session).deactivate_vendor(req.id, req.entity_id, actor=user.user_id)
    return Response(message="vendor deactivated")


@router.post("/ValidateVendor", response_model=ValidateVendorResponse)
async def validate_vendor(
    request: Request,
    req: ValidateVendorRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    valid, message = await _svc(request, session).validate_vendor(req.id, req.entity_id)
    return ValidateVendorResponse(valid=valid, message=message)


@router.post("/UpdateBalance", response_model=Response)
async def update_balance(
    request: Request,
    req: UpdateBalanceRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    require_entity(user, req.entity_id)
    await _svc(request, session).update_balance(req.vendor_id, req.entity_id, req.amount)
    return Response(message="balance updated")


# ------------------------------------------------------------------
# Contacts and payment terms
# ------------------------------------------------------------------

@router.post("/GetVendorContacts", response_model=GetVendorContactsResponse)
async def get_vendor_contacts(
    req: GetVendorContactsRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    contacts = await VendorContactService(session).list_contacts(req.vendor_id)
    return GetVendorContactsResponse(contacts=[ContactOut.model_validate(c) for c in contacts])


@router.post("/AddVendorContact", response_model=ContactOut)
async def add_vendor_contact(
    req: AddVendorContactRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    require_entity(user, req.entity_id)
    data = ContactCreate.model_validate(req.model_dump(exclude={"vendor_id", "entity_id"}))
    contact = await VendorContactService(session).add_contact(req.vendor_id, data)
    return ContactOut.model_validate(contact)


@router.post("/GetPaymentTerms", response_model=GetPaymentTermsResponse)
async def get_payment_terms(
    req: GetPaymentTermsRequest,
    user: UserContext = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    terms = await PaymentTermService(session).list_active()
    return GetPaymentTermsResponse(payment_terms=[PaymentTermOut.model_validate(t) for t in terms])
