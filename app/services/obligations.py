"""Open-obligations check consulted before a vendor is deleted or deactivated.

The invoices service owns the answer. Until it exposes one, the default
checker reports no obligations; deployments can inject a real client through
``create_app(obligations=...)``.
"""


from typing import Protocol


class ObligationsChecker(Protocol):
    async def has_open_obligations(self, vendor_id: str, entity_id: str) -> bool:
        """True when the vendor still has outstanding invoices or balance."""
        ...


class NoOpenObligations:
    """Stub checker: every vendor is free of obligations."""

    async def has_open_obligations(self, vendor_id: str, entity_id: str) -> bool:
        return False
