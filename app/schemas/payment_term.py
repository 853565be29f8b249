"""Payment-term Pydantic schemas."""


from decimal import Decimal

from app.schemas.common import ApiModel

class PaymentTermOut(ApiModel):
    id: str
    code: str
    description: str
    net_days: int
    discount_percent: Decimal | None = None
    discount_days: int | None = None
    is_active: bool
