"""Vendor validation and normalization rules.

Pure functions, no I/O. Each rule either returns the normalized value or raises
:class:`InvalidInputError` naming the offending field.
"""


from app.core.exceptions import InvalidInputError
from app.domain.enums import ContactType, PaymentMethod, VendorStatus, VendorType, values

VENDOR_TYPES = frozenset(values(VendorType))
VENDOR_STATUSES = frozenset(values(VendorStatus))
PAYMENT_METHODS = frozenset(values(PaymentMethod))
CONTACT_TYPES = frozenset(values(ContactType))


def _one_of(field: str, value: str | None, allowed: frozenset[str], label: str) -> str:
    normalized = (value or "").strip().lower()
    if normalized not in allowed:
        raise InvalidInputError(field, f"invalid {label}")
    return normalized


def normalize_vendor_type(value: str | None) -> str:
    return _one_of("vendor_type", value, VENDOR_TYPES, "vendor type")


def normalize_vendor_status(value: str | None) -> str:
    return _one_of("status", value, VENDOR_STATUSES, "vendor status")


def normalize_contact_type(value: str | None) -> str:
    return _one_of("contact_type", value, CONTACT_TYPES, "contact type")


def normalize_payment_method(value: str | None) -> str | None:
    """Optional field: None or blank stays None."""
    if value is None or not value.strip():
        return None
    return _one_of("payment_method", value, PAYMENT_METHODS, "payment method")


def normalize_vendor_code(value: str | None) -> str:
    code = (value or "").strip().upper()
    if not code:
        raise InvalidInputError("vendor_code", "vendor code is required")
    return code


def normalize_country(value: str | None) -> str:
    if value is None or len(value) != 2:
        raise InvalidInputError("country", "country must be 2-letter ISO code")
    return value.upper()


def normalize_currency(value: str | None) -> str:
    if value is None or len(value) != 3:
        raise InvalidInputError("currency", "currency must be 3-letter ISO code")
    return value.upper()


def check_credit_limit(value: int | None) -> int | None:
    if value is not None and value < 0:
        raise InvalidInputError("credit_limit", "credit limit cannot be negative")
    return value


def evaluate_invoice_eligibility(
    status: str, current_balance: int, credit_limit: int | None
) -> tuple[bool, str]:
    """Decide whether an invoice may be raised against a vendor in this state.

    Valid iff the vendor is active and, when a credit limit is set, the balance
    is still strictly below it.
    """
    if status != VendorStatus.ACTIVE.value:
        return False, f"vendor status is '{status}', must be active"
    if credit_limit is not None and current_balance >= credit_limit:
        return False, (
            f"vendor has exceeded credit limit: balance={current_balance}, limit={credit_limit}"
        )
    return True, ""
