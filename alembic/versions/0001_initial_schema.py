"""Initial schema: vendors, contacts, documents, payment terms (+ seeded catalog).

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import uuid

import sqlalchemy as sa
from alembic import op

from app.domain.enums import ContactType, PaymentMethod, VendorStatus, VendorType, db_enum
from app.domain.payment_term import DEFAULT_PAYMENT_TERMS

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "vendors",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("entity_id", sa.String(36), nullable=False, index=True),
        sa.Column("vendor_code", sa.String(50), nullable=False, index=True),
        sa.Column("vendor_name", sa.String(255), nullable=False, index=True),
        sa.Column("legal_name", sa.String(255)),
        sa.Column("vendor_type", db_enum(VendorType, "vendor_type"), nullable=False, index=True),
        sa.Column(
            "status", db_enum(VendorStatus, "vendor_status"),
            nullable=False, server_default="pending_approval", index=True,
        ),
        sa.Column("tax_id", sa.String(50), index=True),
        sa.Column("is_tax_exempt", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_1099_vendor", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(50)),
        sa.Column("fax", sa.String(50)),
        sa.Column("website", sa.String(255)),
        sa.Column("address_line1", sa.String(255)),
        sa.Column("address_line2", sa.String(255)),
        sa.Column("city", sa.String(100)),
        sa.Column("state_province", sa.String(100)),
        sa.Column("postal_code", sa.String(20)),
        sa.Column("country", sa.String(2), nullable=False, server_default="US"),
        sa.Column("payment_terms", sa.String(50), nullable=False, server_default="NET30"),
        sa.Column("payment_method", db_enum(PaymentMethod, "payment_method")),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column("credit_limit", sa.BigInteger),
        sa.Column("current_balance", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("bank_name", sa.String(255)),
        sa.Column("bank_account_number", sa.String(100)),
        sa.Column("bank_routing_number", sa.String(50)),
        sa.Column("swift_code", sa.String(20)),
        sa.Column("iban", sa.String(50)),
        sa.Column("notes", sa.Text),
        sa.Column("tags", sa.JSON, nullable=False),
        sa.Column("created_by", sa.String(36)),
        sa.Column("updated_by", sa.String(36)),
        *_timestamps(),
        sa.UniqueConstraint("entity_id", "vendor_code", name="vendors_entity_code_unique"),
        sa.CheckConstraint(
            "credit_limit IS NULL OR credit_limit >= 0", name="vendors_credit_limit_check"
        ),
        sa.CheckConstraint("current_balance >= 0", name="vendors_current_balance_check"),
    )

    op.create_table(
        "vendor_contacts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "vendor_id", sa.String(36),
            sa.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("contact_type", db_enum(ContactType, "contact_type"), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("title", sa.String(100)),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(50)),
        sa.Column("mobile", sa.String(50)),
        sa.Column("is_primary", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.Text),
        *_timestamps(),
        sa.UniqueConstraint(
            "vendor_id", "contact_type", "email", name="vendor_contacts_vendor_type_unique"
        ),
    )

    op.create_table(
        "vendor_documents",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "vendor_id", sa.String(36),
            sa.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column("document_type", sa.String(50), nullable=False),
        sa.Column("document_name", sa.String(255), nullable=False),
        sa.Column("document_url", sa.Text, nullable=False),
        sa.Column("file_size", sa.BigInteger),
        sa.Column("mime_type", sa.String(100)),
        sa.Column("expiration_date", sa.Date),
        sa.Column("uploaded_by", sa.String(36)),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint(
            "vendor_id", "document_type", "document_name",
            name="vendor_documents_vendor_type_unique",
        ),
    )

    payment_terms = op.create_table(
        "payment_terms",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("code", sa.String(20), nullable=False, unique=True),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("net_days", sa.Integer, nullable=False),
        sa.Column("discount_percent", sa.Numeric(5, 2)),
        sa.Column("discount_days", sa.Integer),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.bulk_insert(
        payment_terms,
        [
            {
                "id": str(uuid.uuid4()),
                "discount_percent": None,
                "discount_days": None,
                "is_active": True,
                **term,
            }
            for term in DEFAULT_PAYMENT_TERMS
        ],
    )


def downgrade() -> None:
    op.drop_table("payment_terms")
    op.drop_table("vendor_documents")
    op.drop_table("vendor_contacts")
    op.drop_table("vendors")
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for name in ("contact_type", "payment_method", "vendor_status", "vendor_type"):
            op.execute(f"DROP TYPE IF EXISTS {name}")
