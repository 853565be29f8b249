"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  vendor.py        — Vendor aggregate root (entity-scoped)
  contact.py       — Contact persons owned by a vendor
  document.py      — Document references owned by a vendor (no operations here)
  payment_term.py  — Payment-terms lookup table and its seed catalog
  enums.py         — Enumerated values backing the store-level enum types
  mixins.py        — Shared TimestampMixin, EntityMixin
"""

from app.domain.contact import VendorContact
from app.domain.document import VendorDocument
from app.domain.payment_term import PaymentTerm
from app.domain.vendor import Vendor

__all__ = [
    "PaymentTerm",
    "Vendor",
    "VendorContact",
    "VendorDocument",
]
