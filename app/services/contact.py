"""Vendor contact service — append-only contact management.

Neither vendor existence nor (vendor_id, contact_type, email) uniqueness is
pre-checked: the store's foreign key and unique constraint are the guards, and
their rejections surface as ConstraintViolationError / AlreadyExistsError.
"""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.contact import VendorContact
from app.repositories.contact import VendorContactRepository
from app.schemas.contact import ContactCreate
from app.services import rules

logger = logging.getLogger(__name__)

class VendorContactService:
    def __init__(self, session: AsyncSession):
        self._repo = VendorContactRepository(session)

    async def list_contacts(self, vendor_id: str) -> list[VendorContact]:
        return await self._repo.list_for_vendor(vendor_id)

    async def add_contact(self, vendor_id: str, data: ContactCreate) -> VendorContact:
        contact_type = rules.normalize_contact_type(data.contact_type)
        fields = data.model_dump()
        fields.update(vendor_id=vendor_id, contact_type=contact_type)

        contact = await self._repo.create(
            key=f"{contact_type}/{data.email or ''}", **fields
        )

        logger.info(
            "Vendor contact added vendor_id=%s contact_id=%s contact_type=%s",
            vendor_id, contact.id, contact.contact_type,
        )
        return contact
