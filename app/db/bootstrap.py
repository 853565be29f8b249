"""Schema creation and payment-term seeding for local/dev databases.

Production schemas are managed by Alembic (``alembic/versions``); this path
mirrors the initial revision so SQLite dev databases and tests get the same
tables and catalog.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.db.base import Base

logger = logging.getLogger(__name__)


async def seed_payment_terms(session: AsyncSession) -> int:
    """Insert any missing catalog codes. Returns the number of rows added."""
    from app.domain.payment_term import DEFAULT_PAYMENT_TERMS, PaymentTerm

    existing = set((await session.execute(select(PaymentTerm.code))).scalars().all())
    added = 0
    for term in DEFAULT_PAYMENT_TERMS:
        if term["code"] in existing:
            continue
        session.add(PaymentTerm(**term))
        added += 1
    await session.flush()
    return added


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables and seed the payment-term catalog."""
    import app.domain  # noqa: F401  (register models on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with session_factory() as session:
        added = await seed_payment_terms(session)
        await session.commit()
    if added:
        logger.info("Seeded %d payment terms", added)
