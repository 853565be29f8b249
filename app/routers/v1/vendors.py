"""Vendor REST router — /api/v1/vendors/*.

Pattern:
  1. Inject DB session (+ optional caller) via Depends
  2. Instantiate the service with the session
  3. Call service methods and wrap result in response envelope
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import UserContext, get_optional_user
from app.core.pagination import PaginationParams
from app.core.response import DataResponse, ItemsResponse, ListResponse, paginated
from app.db.base import get_db
from app.schemas.common import StatusResponse
from app.schemas.contact import ContactCreate, ContactOut
from app.schemas.vendor import (
    BalanceUpdate,
    VendorCreate,
    VendorOut,
    VendorUpdate,
    VendorValidationOut,
)
from app.services.contact import VendorContactService
from app.services.vendor import VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"])


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _svc(request: Request, session: AsyncSession) -> VendorService:
    return VendorService(session, request.app.state.obligations)


def _actor(user: UserContext | None) -> str | None:
    return user.user_id if user else None


# ------------------------------------------------------------------
# Vendors
# ------------------------------------------------------------------

@router.get("", response_model=ListResponse[VendorOut])
async def list_vendors(
    request: Request,
    entity_id: str = Query(..., description="Entity scope"),
    filter_status: Optional[str] = Query(default=None, alias="status", description="Filter by status"),
    vendor_type: Optional[str] = Query(default=None, description="Filter by vendor type"),
    active_only: bool = Query(default=False, description="Only active vendors (overrides status)"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    """List vendors ordered by name (paginated)."""
    items, total = await _svc(request, session).list_vendors(
        entity_id,
        status=filter_status or None,
        vendor_type=vendor_type or None,
        active_only=active_only,
        page=pagination.page,
        page_size=pagination.page_size,
    )
    return paginated(
        [VendorOut.model_validate(v) for v in items],
        total, pagination.page, pagination.page_size,
    )


@router.post("", response_model=DataResponse[VendorOut], status_code=status.HTTP_201_CREATED)
async def create_vendor(
    request: Request,
    body: VendorCreate,
    user: UserContext | None = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db),
):
    """Create a new vendor (always starts in pending_approval)."""
    vendor = await _svc(request, session).create_vendor(body, actor=_actor(user))
    return {"data": VendorOut.model_validate(vendor)}


@router.get("/code/{vendor_code}", response_model=DataResponse[VendorOut])
async def get_vendor_by_code(
    request: Request,
    vendor_code: str,
    entity_id: str = Query(...),
    session: AsyncSession = Depends(get_db),
):
    vendor = await _svc(request, session).get_vendor_by_code(vendor_code, entity_id)
    return {"data": VendorOut.model_validate(vendor)}


@router.get("/{vendor_id}", response_model=DataResponse[VendorOut])
async def get_vendor(
    request: Request,
    vendor_id: str,
    entity_id: str = Query(...),
    session: AsyncSession = Depends(get_db),
):
    vendor = await _svc(request, session).get_vendor(vendor_id, entity_id)
    return {"data": VendorOut.model_validate(vendor)}


@router.put("/{vendor_id}", response_model=DataResponse[VendorOut])
async def update_vendor(
    request: Request,
    vendor_id: str,
    body: VendorUpdate,
    user: UserContext | None = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db),
):
    """Replace every field of a vendor. current_balance is not writable here."""
    vendor = await _svc(request, session).update_vendor(vendor_id, body, actor=_actor(user))
    return {"data": VendorOut.model_validate(vendor)}


@router.delete("/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vendor(
    request: Request,
    vendor_id: str,
    entity_id: str = Query(...),
    session: AsyncSession = Depends(get_db),
):
    await _svc(request, session).delete_vendor(vendor_id, entity_id)


@router.post("/{vendor_id}/activate", response_model=DataResponse[VendorOut])
async def activate_vendor(
    request: Request,
    vendor_id: str,
    entity_id: str = Query(...),
    user: UserContext | None = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db),
):
    vendor = await _svc(request, session).activate_vendor(vendor_id, entity_id, actor=_actor(user))
    return {"data": VendorOut.model_validate(vendor)}


@router.post("/{vendor_id}/deactivate", response_model=DataResponse[VendorOut])
async def deactivate_vendor(
    request: Request,
    vendor_id: str,
    entity_id: str = Query(...),
    user: UserContext | None = Depends(get_optional_user),
    session: AsyncSession = Depends(get_db),
):
    vendor = await _svc(request, session).deactivate_vendor(vendor_id, entity_id, actor=_actor(user))
    return {"data": VendorOut.model_validate(vendor)}


@router.get("/{vendor_id}/validate", response_model=VendorValidationOut)
async def validate_vendor(
    request: Request,
    vendor_id: str,
    entity_id: str = Query(...),
    session: AsyncSession = Depends(get_db),
):
    """Invoice-creation gate: active and under credit limit."""
    valid, message = await _svc(request, session).validate_vendor(vendor_id, entity_id)
    return VendorValidationOut(valid=valid, message=message)


@router.post("/{vendor_id}/balance", response_model=StatusResponse)
async def update_balance(
    request: Request,
    vendor_id: str,
    body: BalanceUpdate,
    session: AsyncSession = Depends(get_db),
):
    """Adjust current_balance by a signed amount (invoices / payments service)."""
    await _svc(request, session).update_balance(vendor_id, body.entity_id, body.amount)
    return StatusResponse(status="updated")


# ------------------------------------------------------------------
# Contacts
# ------------------------------------------------------------------

@router.get("/{vendor_id}/contacts", response_model=ItemsResponse[ContactOut])
async def list_vendor_contacts(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
):
    """Primary contacts first, then by name."""
    contacts = await VendorContactService(session).list_contacts(vendor_id)
    return {"data": [ContactOut.model_validate(c) for c in contacts]}


@router.post(
    "/{vendor_id}/contacts",
    response_model=DataResponse[ContactOut],
    status_code=status.HTTP_201_CREATED,
)
async def add_vendor_contact(
    vendor_id: str,
    body: ContactCreate,
    session: AsyncSession = Depends(get_db),
):
    contact = await VendorContactService(session).add_contact(vendor_id, body)
    return {"data": ContactOut.model_validate(contact)}
