"""Vendor contact repository."""


from app.domain.contact import VendorContact
from app.repositories.base import BaseRepository


class VendorContactRepository(BaseRepository[VendorContact]):
    model = VendorContact
    entity_label = "vendor contact"

    async def list_for_vendor(self, vendor_id: str) -> list[VendorContact]:
        """Primary contacts first, then alphabetical by first/last name."""
        items, _ = await self.list(
            limit=None,
            order_by=(
                VendorContact.is_primary.desc(),
                VendorContact.first_name.asc(),
                VendorContact.last_name.asc(),
            ),
            filters={"vendor_id": vendor_id},
        )
        return items
