"""Seeded payment-terms catalog."""

from decimal import Decimal

from sqlalchemy import func, select

from app.db.bootstrap import seed_payment_terms
from app.domain.payment_term import PaymentTerm
from app.services.payment_term import PaymentTermService


async def test_catalog_is_seeded_and_ordered_by_net_days(session):
    terms = await PaymentTermService(session).list_active()

    assert len(terms) == 8
    assert {t.code for t in terms} == {
        "NET30", "NET60", "NET90", "2/10N30", "1/10N30", "DUE", "COD", "CIA",
    }
    net_days = [t.net_days for t in terms]
    assert net_days == sorted(net_days)
    assert terms[-1].code == "NET90"


async def test_early_payment_discount_terms(session):
    terms = {t.code: t for t in await PaymentTermService(session).list_active()}

    assert terms["2/10N30"].discount_percent == Decimal("2.00")
    assert terms["2/10N30"].discount_days == 10
    assert terms["NET30"].discount_percent is None


async def test_inactive_terms_are_hidden(session):
    term = (await session.execute(select(PaymentTerm).where(PaymentTerm.code == "COD"))).scalar_one()
    term.is_active = False
    await session.commit()

    codes = [t.code for t in await PaymentTermService(session).list_active()]
    assert "COD" not in codes
    assert len(codes) == 7


async def test_seeding_is_idempotent(session):
    assert await seed_payment_terms(session) == 0
    await session.commit()

    count = (await session.execute(select(func.count()).select_from(PaymentTerm))).scalar_one()
    assert count == 8
