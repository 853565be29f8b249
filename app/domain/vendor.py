"""SQLAlchemy ORM model for Vendors — the aggregate root of this service.

Store-level guarantees live here, not in the service layer:
  - (entity_id, vendor_code) is unique
  - credit_limit is NULL or >= 0, current_balance is always >= 0
  - contacts and documents are removed with their vendor (ON DELETE CASCADE)
"""

from __future__ import annotations

import uuid
from typing import Any, List, Optional

from sqlalchemy import JSON, BigInteger, Boolean, CheckConstraint, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.domain.enums import PaymentMethod, VendorStatus, VendorType, db_enum
from app.domain.mixins import EntityMixin, TimestampMixin


class Vendor(Base, EntityMixin, TimestampMixin):
    __tablename__ = "vendors"
    __table_args__ = (
        UniqueConstraint("entity_id", "vendor_code", name="vendors_entity_code_unique"),
        CheckConstraint(
            "credit_limit IS NULL OR credit_limit >= 0", name="vendors_credit_limit_check"
        ),
        CheckConstraint("current_balance >= 0", name="vendors_current_balance_check"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    vendor_code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    vendor_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    legal_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    vendor_type: Mapped[str] = mapped_column(
        db_enum(VendorType, "vendor_type"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        db_enum(VendorStatus, "vendor_status"),
        default=VendorStatus.PENDING_APPROVAL.value,
        nullable=False,
        index=True,
    )

    # Tax
    tax_id: Mapped[Optional[str]] = mapped_column(String(50), index=True, nullable=True)
    is_tax_exempt: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_1099_vendor: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Contact information
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    fax: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Address
    address_line1: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address_line2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state_province: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    country: Mapped[str] = mapped_column(String(2), default="US", nullable=False)

    # Payment (amounts in smallest currency unit)
    payment_terms: Mapped[str] = mapped_column(String(50), default="NET30", nullable=False)
    payment_method: Mapped[Optional[str]] = mapped_column(
        db_enum(PaymentMethod, "payment_method"), nullable=True
    )
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    credit_limit: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    current_balance: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)

    # Banking (opaque, never validated)
    bank_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    bank_account_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    bank_routing_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    swift_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    iban: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[List[Any]] = mapped_column(JSON, default=list, nullable=False)

    created_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    updated_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    contacts: Mapped[List["VendorContact"]] = relationship(
        back_populates="vendor", lazy="raise", passive_deletes=True
    )
    documents: Mapped[List["VendorDocument"]] = relationship(
        back_populates="vendor", lazy="raise", passive_deletes=True
    )
