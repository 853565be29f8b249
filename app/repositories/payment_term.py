"""Payment-terms repository (read-only lookup table)."""


from app.domain.payment_term import PaymentTerm
from app.repositories.base import BaseRepository


class PaymentTermRepository(BaseRepository[PaymentTerm]):
    model = PaymentTerm
    entity_label = "payment term"

    async def list_active(self) -> list[PaymentTerm]:
        items, _ = await self.list(
            limit=None,
            order_by=(PaymentTerm.net_days.asc(), PaymentTerm.code.asc()),
            filters={"is_active": True},
        )
        return items
