"""Enumerated values shared by the ORM (store-level enum types) and the domain rules."""

from __future__ import annotations

import enum

from sqlalchemy import Enum


class VendorType(str, enum.Enum):
    SUPPLIER = "supplier"
    CONTRACTOR = "contractor"
    SERVICE_PROVIDER = "service_provider"
    CONSULTANT = "consultant"
    UTILITY = "utility"


class VendorStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    PENDING_APPROVAL = "pending_approval"


class PaymentMethod(str, enum.Enum):
    CHECK = "check"
    ACH = "ach"
    WIRE = "wire"
    CREDIT_CARD = "credit_card"
    CASH = "cash"


class ContactType(str, enum.Enum):
    PRIMARY = "primary"
    BILLING = "billing"
    SHIPPING = "shipping"
    TECHNICAL = "technical"
    OTHER = "other"


def values(enum_cls: type[enum.Enum]) -> tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


def db_enum(enum_cls: type[enum.Enum], name: str) -> Enum:
    """Named string enum column type; native ENUM on PostgreSQL, CHECK elsewhere."""
    return Enum(*values(enum_cls), name=name, create_constraint=True)
