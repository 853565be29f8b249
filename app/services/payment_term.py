"""Payment-terms catalog service."""


from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.payment_term import PaymentTerm
from app.repositories.payment_term import PaymentTermRepository

class PaymentTermService:
    def __init__(self, session: AsyncSession):
        self._repo = PaymentTermRepository(session)

    async def list_active(self) -> list[PaymentTerm]:
        """Active terms ordered by ascending net_days."""
        return await self._repo.list_active()
