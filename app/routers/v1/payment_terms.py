"""Payment-terms REST router — /api/v1/payment-terms."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import ItemsResponse
from app.db.base import get_db
from app.schemas.payment_term import PaymentTermOut
from app.services.payment_term import PaymentTermService

router = APIRouter(prefix="/payment-terms", tags=["Payment Terms"])


@router.get("", response_model=ItemsResponse[PaymentTermOut])
async def list_payment_terms(session: AsyncSession = Depends(get_db)):
    """Active payment terms ordered by net days."""
    terms = await PaymentTermService(session).list_active()
    return {"data": [PaymentTermOut.model_validate(t) for t in terms]}
