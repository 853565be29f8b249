"""Vendor service — admission rules and CRUD orchestration for vendor records.

Rule: No FastAPI here. Callers pass an already-authenticated actor id and the
entity scope as plain arguments.

Uniqueness of (entity_id, vendor_code) is pre-checked for a friendlier error,
but the pre-check is not atomic with the write: the store's unique constraint
is the final arbiter and its rejection surfaces as the same AlreadyExistsError.
"""


import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AlreadyExistsError, ConflictError, NotFoundError
from app.domain.enums import VendorStatus
from app.domain.vendor import Vendor
from app.repositories.vendor import VendorRepository
from app.schemas.vendor import VendorCreate, VendorUpdate
from app.services import rules
from app.services.obligations import NoOpenObligations, ObligationsChecker

logger = logging.getLogger(__name__)

class VendorService:
    def __init__(self, session: AsyncSession, obligations: ObligationsChecker | None = None):
        self._repo = VendorRepository(session)
        self._obligations = obligations or NoOpenObligations()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_vendor(self, vendor_id: str, entity_id: str) -> Vendor:
        vendor = await self._repo.get_by_id(vendor_id, entity_id)
        if not vendor:
            raise NotFoundError("vendor", vendor_id)
        return vendor

    async def get_vendor_by_code(self, vendor_code: str, entity_id: str) -> Vendor:
        code = rules.normalize_vendor_code(vendor_code)
        vendor = await self._repo.get_by_code(code, entity_id)
        if not vendor:
            raise NotFoundError("vendor", code)
        return vendor

    async def list_vendors(
        self,
        entity_id: str,
        *,
        status: str | None = None,
        vendor_type: str | None = None,
        active_only: bool = False,
        page: int = 1,
        page_size: int = 50,
    ) -> tuple[list[Vendor], int]:
        """Filtered, name-ordered page. page/page_size arrive already clamped."""
        return await self._repo.list_vendors(
            entity_id,
            status=status,
            vendor_type=vendor_type,
            active_only=active_only,
            offset=(page - 1) * page_size,
            limit=page_size,
        )

    async def validate_vendor(self, vendor_id: str, entity_id: str) -> tuple[bool, str]:
        """Can an invoice be created against this vendor right now? Read-only."""
        vendor = await self._repo.get_by_id(vendor_id, entity_id)
        if not vendor:
            return False, "vendor not found"
        return rules.evaluate_invoice_eligibility(
            vendor.status, vendor.current_balance, vendor.credit_limit
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_vendor(self, data: VendorCreate, actor: str | None = None) -> Vendor:
        code = rules.normalize_vendor_code(data.vendor_code)
        if await self._repo.get_by_code(code, data.entity_id):
            raise AlreadyExistsError("vendor", code)

        fields = data.model_dump()
        fields.update(
            vendor_code=code,
            vendor_type=rules.normalize_vendor_type(data.vendor_type),
            currency=rules.normalize_currency(data.currency),
            country=rules.normalize_country(data.country),
            credit_limit=rules.check_credit_limit(data.credit_limit),
            payment_method=rules.normalize_payment_method(data.payment_method),
            status=VendorStatus.PENDING_APPROVAL.value,
            current_balance=0,
            created_by=actor,
        )
        vendor = await self._repo.create(key=code, **fields)

        logger.info(
            "Vendor created vendor_id=%s vendor_code=%s entity_id=%s",
            vendor.id, vendor.vendor_code, vendor.entity_id,
        )
        return vendor

    async def update_vendor(
        self, vendor_id: str, data: VendorUpdate, actor: str | None = None
    ) -> Vendor:
        """Full replace: every field in ``data`` overwrites the stored value."""
        vendor = await self.get_vendor(vendor_id, data.entity_id)

        code = rules.normalize_vendor_code(data.vendor_code)
        if code != vendor.vendor_code and await self._repo.get_by_code(code, data.entity_id):
            raise AlreadyExistsError("vendor", code)

        fields = data.model_dump(exclude={"entity_id"})
        fields.update(
            vendor_code=code,
            vendor_type=rules.normalize_vendor_type(data.vendor_type),
            status=rules.normalize_vendor_status(data.status),
            credit_limit=rules.check_credit_limit(data.credit_limit),
            country=rules.normalize_country(data.country),
            currency=rules.normalize_currency(data.currency),
            payment_method=rules.normalize_payment_method(data.payment_method),
            updated_by=actor,
            updated_at=datetime.now(timezone.utc),
        )
        for name, value in fields.items():
            setattr(vendor, name, value)
        vendor = await self._repo.save(vendor, key=code)

        logger.info(
            "Vendor updated vendor_id=%s vendor_code=%s entity_id=%s",
            vendor.id, vendor.vendor_code, vendor.entity_id,
        )
        return vendor

    async def delete_vendor(self, vendor_id: str, entity_id: str) -> None:
        """Hard delete; contacts and documents go with it (store cascade)."""
        vendor = await self.get_vendor(vendor_id, entity_id)
        await self._ensure_no_open_obligations(vendor, "deleted")

        if not await self._repo.delete(vendor_id, entity_id):
            raise NotFoundError("vendor", vendor_id)

        logger.info(
            "Vendor deleted vendor_id=%s vendor_code=%s entity_id=%s",
            vendor_id, vendor.vendor_code, entity_id,
        )

    async def activate_vendor(self, vendor_id: str, entity_id: str, actor: str | None = None) -> Vendor:
        vendor = await self.get_vendor(vendor_id, entity_id)
        return await self._set_status(vendor, VendorStatus.ACTIVE, actor)

    async def deactivate_vendor(self, vendor_id: str, entity_id: str, actor: str | None = None) -> Vendor:
        vendor = await self.get_vendor(vendor_id, entity_id)
        await self._ensure_no_open_obligations(vendor, "deactivated")
        return await self._set_status(vendor, VendorStatus.INACTIVE, actor)

    async def update_balance(self, vendor_id: str, entity_id: str, delta: int) -> None:
        """Add a signed delta to current_balance in one statement.

        No pre-validation: a delta that would drive the balance below zero is
        rejected by the store and raised as ConstraintViolationError.
        """
        if not await self._repo.adjust_balance(vendor_id, entity_id, delta):
            raise NotFoundError("vendor", vendor_id)

        logger.info(
            "Vendor balance adjusted vendor_id=%s entity_id=%s delta=%d",
            vendor_id, entity_id, delta,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _set_status(self, vendor: Vendor, status: VendorStatus, actor: str | None) -> Vendor:
        vendor.status = status.value
        vendor.updated_by = actor
        vendor.updated_at = datetime.now(timezone.utc)
        vendor = await self._repo.save(vendor)

        logger.info(
            "Vendor status changed vendor_id=%s entity_id=%s status=%s",
            vendor.id, vendor.entity_id, vendor.status,
        )
        return vendor

    async def _ensure_no_open_obligations(self, vendor: Vendor, action: str) -> None:
        if await self._obligations.has_open_obligations(vendor.id, vendor.entity_id):
            raise ConflictError(
                f"vendor '{vendor.vendor_code}' has open obligations and cannot be {action}"
            )
