"""Vendor repository — entity-scoped reads and single-statement writes."""


from app.domain.enums import VendorStatus
from app.domain.vendor import Vendor
from app.repositories.base import BaseRepository


class VendorRepository(BaseRepository[Vendor]):
    model = Vendor
    entity_label = "vendor"

    async def get_by_code(self, vendor_code: str, entity_id: str) -> Vendor | None:
        with self._store_errors("get vendor by code"):
            result = await self._session.execute(
                self._base_query(entity_id).where(Vendor.vendor_code == vendor_code)
            )
            return result.scalars().first()

    async def list_vendors(
        self,
        entity_id: str,
        *,
        status: str | None = None,
        vendor_type: str | None = None,
        active_only: bool = False,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[Vendor], int]:
        # active_only replaces any explicit status filter
        if active_only:
            status = VendorStatus.ACTIVE.value
        return await self.list(
            entity_id=entity_id,
            offset=offset,
            limit=limit,
            order_by=(Vendor.vendor_name.asc(), Vendor.id.asc()),
            filters={"status": status, "vendor_type": vendor_type},
        )

    async def adjust_balance(self, vendor_id: str, entity_id: str, delta: int) -> bool:
        """Atomic ``current_balance = current_balance + delta``; False when no row matched.

        A result below zero is rejected by vendors_current_balance_check and
        surfaces as ConstraintViolationError with the row left unchanged.
        """
        return await self.update_values(
            vendor_id, entity_id, current_balance=Vendor.current_balance + delta
        )
