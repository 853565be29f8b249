"""Generic async repository with pagination, entity scoping, and store-error translation."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AlreadyExistsError, ConstraintViolationError, InternalError
from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)

UNIQUE_VIOLATION = "unique"
CHECK_VIOLATION = "check"
FOREIGN_KEY_VIOLATION = "foreign_key"

# PostgreSQL SQLSTATE codes, exposed as .sqlstate (asyncpg) or .pgcode (psycopg)
_SQLSTATE_KINDS = {
    "23505": UNIQUE_VIOLATION,
    "23514": CHECK_VIOLATION,
    "23503": FOREIGN_KEY_VIOLATION,
}
# SQLite reports the kind only in the message text
_MESSAGE_KINDS = (
    ("unique constraint", UNIQUE_VIOLATION),
    ("duplicate key", UNIQUE_VIOLATION),
    ("check constraint", CHECK_VIOLATION),
    ("foreign key constraint", FOREIGN_KEY_VIOLATION),
)


def classify_integrity_error(exc: IntegrityError) -> str | None:
    """Return which kind of constraint the store reported, or None if unknown."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code in _SQLSTATE_KINDS:
        return _SQLSTATE_KINDS[code]
    text = str(orig).lower()
    for needle, kind in _MESSAGE_KINDS:
        if needle in text:
            return kind
    return None


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Models carrying an ``entity_id`` column are always read and written within
    one entity scope. Every store error leaves this class as an AppException:
    unique violations become AlreadyExistsError, check and foreign-key
    violations become ConstraintViolationError, anything else InternalError.
    """

    model: type[ModelT]
    entity_label: str = "record"

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self, entity_id: str | None = None):
        """Return a SELECT filtered by entity_id when the model is entity-scoped."""
        q = select(self.model).execution_options(populate_existing=True)
        if entity_id is not None and hasattr(self.model, "entity_id"):
            q = q.where(self.model.entity_id == entity_id)
        return q

    def _constraint_name(self, exc: IntegrityError) -> str | None:
        text = str(exc.orig)
        for constraint in self.model.__table__.constraints:
            if constraint.name and constraint.name in text:
                return constraint.name
        return None

    @contextmanager
    def _store_errors(self, action: str, key: str | None = None) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            kind = classify_integrity_error(exc)
            if kind == UNIQUE_VIOLATION:
                raise AlreadyExistsError(self.entity_label, key) from exc
            if kind in (CHECK_VIOLATION, FOREIGN_KEY_VIOLATION):
                constraint = self._constraint_name(exc) or f"{kind.replace('_', ' ')} constraint"
                raise ConstraintViolationError(
                    f"failed to {action}: rejected by {constraint}"
                ) from exc
            raise InternalError(f"failed to {action}: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise InternalError(f"failed to {action}: {exc}") from exc

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, record_id: str, entity_id: str | None = None) -> ModelT | None:
        with self._store_errors(f"get {self.entity_label}"):
            result = await self._session.execute(
                self._base_query(entity_id).where(self.model.id == record_id)
            )
            return result.scalars().first()

    async def list(
        self,
        *,
        entity_id: str | None = None,
        offset: int = 0,
        limit: int | None = 50,
        order_by: tuple[Any, ...] = (),
        filters: dict[str, Any] | None = None,
    ) -> tuple[list[ModelT], int]:
        """Return (items, total_count) with pagination and optional column filters."""
        q = self._base_query(entity_id)

        # Apply simple equality filters
        if filters:
            for col_name, value in filters.items():
                if value is not None and hasattr(self.model, col_name):
                    q = q.where(getattr(self.model, col_name) == value)

        with self._store_errors(f"list {self.entity_label}s"):
            count_q = select(func.count()).select_from(q.subquery())
            total = (await self._session.execute(count_q)).scalar_one()

            if order_by:
                q = q.order_by(*order_by)
            if limit is not None:
                q = q.offset(offset).limit(limit)

            items = (await self._session.execute(q)).scalars().all()
        return list(items), total

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, *, key: str | None = None, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        with self._store_errors(f"create {self.entity_label}", key):
            self._session.add(instance)
            await self._session.flush()  # populate id, surface constraint errors
            await self._session.refresh(instance)
        return instance

    async def save(self, instance: ModelT, *, key: str | None = None) -> ModelT:
        """Flush in-place attribute changes on a loaded instance."""
        with self._store_errors(f"update {self.entity_label}", key):
            await self._session.flush()
            await self._session.refresh(instance)
        return instance

    async def update_values(self, record_id: str, entity_id: str | None = None, **values: Any) -> bool:
        """Single UPDATE statement; returns False when no row matched."""
        if "updated_at" not in values and hasattr(self.model, "updated_at"):
            values["updated_at"] = datetime.now(timezone.utc)

        stmt = update(self.model).where(self.model.id == record_id)
        if entity_id is not None and hasattr(self.model, "entity_id"):
            stmt = stmt.where(self.model.entity_id == entity_id)

        with self._store_errors(f"update {self.entity_label}"):
            result = await self._session.execute(
                stmt.values(**values).execution_options(synchronize_session=False)
            )
        return result.rowcount > 0

    async def delete(self, record_id: str, entity_id: str | None = None) -> bool:
        stmt = delete(self.model).where(self.model.id == record_id)
        if entity_id is not None and hasattr(self.model, "entity_id"):
            stmt = stmt.where(self.model.entity_id == entity_id)

        with self._store_errors(f"delete {self.entity_label}"):
            result = await self._session.execute(
                stmt.execution_options(synchronize_session=False)
            )
        return result.rowcount > 0
