"""VendorService against a real (SQLite) store: admission rules and store guarantees."""

import pytest

from app.core.exceptions import (
    AlreadyExistsError,
    ConflictError,
    ConstraintViolationError,
    InvalidInputError,
    NotFoundError,
)
from app.repositories.vendor import VendorRepository
from app.schemas.contact import ContactCreate
from app.schemas.vendor import VendorCreate, VendorUpdate
from app.services.contact import VendorContactService
from app.services.vendor import VendorService

from tests.conftest import ENTITY, OTHER_ENTITY, FakeObligations, vendor_payload


async def _create(service: VendorService, session, **overrides):
    vendor = await service.create_vendor(VendorCreate(**vendor_payload(**overrides)), actor="user-1")
    await session.commit()
    return vendor


@pytest.fixture
def service(session) -> VendorService:
    return VendorService(session)


# ------------------------------------------------------------------
# Create
# ------------------------------------------------------------------

async def test_create_normalizes_codes_and_forces_pending(service, session):
    vendor = await _create(service, session, vendor_code="v001", country="us", currency="usd")

    assert vendor.vendor_code == "V001"
    assert vendor.country == "US"
    assert vendor.currency == "USD"
    assert vendor.status == "pending_approval"
    assert vendor.current_balance == 0
    assert vendor.created_by == "user-1"
    assert vendor.id


async def test_create_ignores_caller_supplied_status(service):
    data = VendorCreate.model_validate({**vendor_payload(), "status": "active"})
    vendor = await service.create_vendor(data)
    assert vendor.status == "pending_approval"


async def test_create_then_read_back_by_id_and_code(service, session):
    created = await _create(service, session, vendor_code="acme-01", tags=["steel", "local"])

    by_id = await service.get_vendor(created.id, ENTITY)
    by_code = await service.get_vendor_by_code(" acme-01 ", ENTITY)

    assert by_id.id == by_code.id == created.id
    for field in ("vendor_code", "vendor_name", "vendor_type", "country", "currency", "tags"):
        assert getattr(by_id, field) == getattr(by_code, field) == getattr(created, field)


async def test_duplicate_code_is_rejected_case_insensitively(service, session):
    await _create(service, session, vendor_code="V001")

    with pytest.raises(AlreadyExistsError) as exc_info:
        await service.create_vendor(VendorCreate(**vendor_payload(vendor_code="v001")))
    assert exc_info.value.code == "ALREADY_EXISTS"


async def test_same_code_in_another_entity_is_allowed(service, session):
    await _create(service, session, vendor_code="V001")
    other = await _create(service, session, vendor_code="V001", entity_id=OTHER_ENTITY)
    assert other.entity_id == OTHER_ENTITY


async def test_store_unique_constraint_reports_already_exists(service, session, monkeypatch):
    """A create that slips past the pre-check is still rejected by the store."""
    await _create(service, session, vendor_code="V001")

    async def no_match(self, vendor_code, entity_id):
        return None

    monkeypatch.setattr(VendorRepository, "get_by_code", no_match)

    with pytest.raises(AlreadyExistsError):
        await service.create_vendor(VendorCreate(**vendor_payload(vendor_code="v001")))
    await session.rollback()

    items, total = await service.list_vendors(ENTITY)
    assert total == 1


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"vendor_type": "wholesaler"}, "vendor_type"),
        ({"currency": "US"}, "currency"),
        ({"country": "USA"}, "country"),
        ({"credit_limit": -1}, "credit_limit"),
        ({"payment_method": "barter"}, "payment_method"),
        ({"vendor_code": "  "}, "vendor_code"),
    ],
)
async def test_create_rejects_invalid_fields(service, overrides, field):
    with pytest.raises(InvalidInputError) as exc_info:
        await service.create_vendor(VendorCreate(**vendor_payload(**overrides)))
    assert exc_info.value.field == field

    _, total = await service.list_vendors(ENTITY)
    assert total == 0


# ------------------------------------------------------------------
# Reads
# ------------------------------------------------------------------

async def test_get_is_entity_scoped(service, session):
    vendor = await _create(service, session)

    with pytest.raises(NotFoundError):
        await service.get_vendor(vendor.id, OTHER_ENTITY)
    with pytest.raises(NotFoundError):
        await service.get_vendor_by_code("V001", OTHER_ENTITY)


async def test_list_orders_by_name_and_paginates(service, session):
    for code, name in (("C", "Charlie"), ("A", "Alpha"), ("B", "Bravo")):
        await _create(service, session, vendor_code=code, vendor_name=name)

    items, total = await service.list_vendors(ENTITY, page=1, page_size=2)
    assert total == 3
    assert [v.vendor_name for v in items] == ["Alpha", "Bravo"]

    items, _ = await service.list_vendors(ENTITY, page=2, page_size=2)
    assert [v.vendor_name for v in items] == ["Charlie"]


async def test_active_only_takes_precedence_over_status(service, session):
    active = await _create(service, session, vendor_code="A1", vendor_name="Active One")
    suspended = await _create(service, session, vendor_code="S1", vendor_name="Suspended One")
    await _create(service, session, vendor_code="P1", vendor_name="Pending One")

    await service.activate_vendor(active.id, ENTITY)
    await service.update_vendor(
        suspended.id,
        VendorUpdate(**vendor_payload(vendor_code="S1", vendor_name="Suspended One", status="suspended")),
    )

    items, total = await service.list_vendors(ENTITY, status="suspended", active_only=True)
    assert total == 1
    assert [v.id for v in items] == [active.id]

    items, _ = await service.list_vendors(ENTITY, status="suspended")
    assert [v.id for v in items] == [suspended.id]


async def test_list_filters_by_vendor_type(service, session):
    await _create(service, session, vendor_code="S1", vendor_type="supplier")
    await _create(service, session, vendor_code="U1", vendor_type="utility")

    items, total = await service.list_vendors(ENTITY, vendor_type="utility")
    assert total == 1
    assert items[0].vendor_code == "U1"


# ------------------------------------------------------------------
# Update
# ------------------------------------------------------------------

async def test_update_replaces_fields_but_not_balance(service, session):
    vendor = await _create(service, session, legal_name="Acme Supplies LLC", credit_limit=1000)
    await service.update_balance(vendor.id, ENTITY, 250)
    await session.commit()

    updated = await service.update_vendor(
        vendor.id,
        VendorUpdate(**vendor_payload(vendor_name="Acme Global", currency="eur", status="active")),
        actor="user-2",
    )

    assert updated.vendor_name == "Acme Global"
    assert updated.legal_name is None
    assert updated.credit_limit is None
    assert updated.currency == "EUR"
    assert updated.status == "active"
    assert updated.current_balance == 250
    assert updated.updated_by == "user-2"
    assert updated.created_by == "user-1"


async def test_update_to_taken_code_is_rejected(service, session):
    await _create(service, session, vendor_code="V001")
    second = await _create(service, session, vendor_code="V002")

    with pytest.raises(AlreadyExistsError):
        await service.update_vendor(
            second.id, VendorUpdate(**vendor_payload(vendor_code="v001", status="active"))
        )


async def test_update_rejects_unknown_status(service, session):
    vendor = await _create(service, session)
    with pytest.raises(InvalidInputError) as exc_info:
        await service.update_vendor(vendor.id, VendorUpdate(**vendor_payload(status="archived")))
    assert exc_info.value.field == "status"


async def test_update_missing_vendor(service):
    with pytest.raises(NotFoundError):
        await service.update_vendor("nope", VendorUpdate(**vendor_payload(status="active")))


# ------------------------------------------------------------------
# Status, balance, validation
# ------------------------------------------------------------------

async def test_activate_and_deactivate(service, session):
    vendor = await _create(service, session)

    activated = await service.activate_vendor(vendor.id, ENTITY, actor="user-2")
    assert activated.status == "active"
    assert activated.updated_by == "user-2"

    deactivated = await service.deactivate_vendor(vendor.id, ENTITY)
    assert deactivated.status == "inactive"


async def test_negative_balance_is_rejected_and_balance_unchanged(service, session):
    vendor = await _create(service, session)
    await service.update_balance(vendor.id, ENTITY, 50)
    await session.commit()

    with pytest.raises(ConstraintViolationError):
        await service.update_balance(vendor.id, ENTITY, -100)
    await session.rollback()

    reloaded = await service.get_vendor(vendor.id, ENTITY)
    assert reloaded.current_balance == 50


async def test_balance_accumulates_signed_deltas(service, session):
    vendor = await _create(service, session)
    await service.update_balance(vendor.id, ENTITY, 700)
    await service.update_balance(vendor.id, ENTITY, -200)
    await session.commit()

    assert (await service.get_vendor(vendor.id, ENTITY)).current_balance == 500


async def test_balance_update_for_missing_vendor(service):
    with pytest.raises(NotFoundError):
        await service.update_balance("nope", ENTITY, 10)


async def test_validate_vendor(service, session):
    assert await service.validate_vendor("nope", ENTITY) == (False, "vendor not found")

    vendor = await _create(service, session, credit_limit=5_000_000)
    assert await service.validate_vendor(vendor.id, ENTITY) == (
        False, "vendor status is 'pending_approval', must be active",
    )

    await service.activate_vendor(vendor.id, ENTITY)
    assert await service.validate_vendor(vendor.id, ENTITY) == (True, "")

    await service.update_balance(vendor.id, ENTITY, 5_000_000)
    await session.commit()
    assert await service.validate_vendor(vendor.id, ENTITY) == (
        False, "vendor has exceeded credit limit: balance=5000000, limit=5000000",
    )


# ------------------------------------------------------------------
# Delete and obligations
# ------------------------------------------------------------------

async def test_delete_cascades_to_contacts(service, session):
    vendor = await _create(service, session)
    contacts = VendorContactService(session)
    await contacts.add_contact(
        vendor.id, ContactCreate(contact_type="billing", first_name="Ada", last_name="Ng", email="ada@acme.test")
    )
    await session.commit()

    await service.delete_vendor(vendor.id, ENTITY)
    await session.commit()

    with pytest.raises(NotFoundError):
        await service.get_vendor(vendor.id, ENTITY)
    assert await contacts.list_contacts(vendor.id) == []


async def test_delete_missing_vendor(service):
    with pytest.raises(NotFoundError):
        await service.delete_vendor("nope", ENTITY)


async def test_open_obligations_block_delete_and_deactivate(session):
    obligations = FakeObligations()
    service = VendorService(session, obligations)
    vendor = await _create(service, session)
    await service.activate_vendor(vendor.id, ENTITY)
    obligations.blocked.add(vendor.id)

    with pytest.raises(ConflictError, match="open obligations"):
        await service.delete_vendor(vendor.id, ENTITY)
    with pytest.raises(ConflictError, match="open obligations"):
        await service.deactivate_vendor(vendor.id, ENTITY)

    assert (await service.get_vendor(vendor.id, ENTITY)).status == "active"
