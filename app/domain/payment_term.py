"""SQLAlchemy ORM model for the payment-terms lookup table (not tenant-scoped)."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class PaymentTerm(Base):
    __tablename__ = "payment_terms"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    code: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    net_days: Mapped[int] = mapped_column(Integer, nullable=False)
    discount_percent: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    discount_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
    )


# Seeded once at schema creation
DEFAULT_PAYMENT_TERMS: list[dict] = [
    {"code": "NET30", "description": "Net 30 days", "net_days": 30},
    {"code": "NET60", "description": "Net 60 days", "net_days": 60},
    {"code": "NET90", "description": "Net 90 days", "net_days": 90},
    {
        "code": "2/10N30", "description": "2% 10 days, Net 30", "net_days": 30,
        "discount_percent": Decimal("2.00"), "discount_days": 10,
    },
    {
        "code": "1/10N30", "description": "1% 10 days, Net 30", "net_days": 30,
        "discount_percent": Decimal("1.00"), "discount_days": 10,
    },
    {"code": "DUE", "description": "Due on receipt", "net_days": 0},
    {"code": "COD", "description": "Cash on delivery", "net_days": 0},
    {"code": "CIA", "description": "Cash in advance", "net_days": 0},
]
