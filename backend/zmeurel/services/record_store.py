"""Record store: tenant-scoped create/read/update/delete over the farm tables.

``RecordStore`` is the interface everything else depends on; records cross
it as plain dicts keyed by column name.  ``SqlRecordStore`` implements it
over an AsyncSession.

Error contract:
  - a failed query raises StoreUnavailableError (never an empty result)
  - an unknown id within the tenant raises RecordNotFoundError
  - an insert that loses the (tenant_id, display_id) unique constraint
    raises DisplayIdConflictError so the caller can regenerate and retry
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from fastapi import Depends
from sqlalchemy import inspect as sa_inspect, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from zmeurel.database import AFTER_COMMIT, get_db
from zmeurel.entities import EntityType, get_entity_config
from zmeurel.middleware.exceptions import (
    BusinessLogicError,
    DisplayIdConflictError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from zmeurel.models import MODELS

logger = logging.getLogger(__name__)

FILTER_OPS = ("eq", "ne", "gte", "lte", "is_null", "not_null")


@dataclass(frozen=True)
class Filter:
    """One column predicate, e.g. ``Filter("sale_date", "gte", date(2026, 1, 1))``."""
    column: str
    op: str = "eq"
    value: Any = None

    def __post_init__(self):
        if self.op not in FILTER_OPS:
            raise BusinessLogicError(f"Unsupported filter operator: {self.op!r}")

    def matches(self, record: dict) -> bool:
        current = record.get(self.column)
        if self.op == "is_null":
            return current is None
        if self.op == "not_null":
            return current is not None
        if self.op == "eq":
            return current == self.value
        if self.op == "ne":
            return current != self.value
        if current is None:
            return False
        if self.op == "gte":
            return current >= self.value
        return current <= self.value


class RecordStore(ABC):
    """Tenant-partitioned persistence used by the CRUD layer."""

    @abstractmethod
    async def list(
        self,
        entity: EntityType | str,
        tenant_id: str,
        filters: list[Filter] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict]:
        """Return every matching row of the tenant; no implicit row cap."""

    @abstractmethod
    async def list_display_ids(self, entity: EntityType | str, tenant_id: str) -> list[str | None]:
        """Return the display_id of every row of the tenant."""

    @abstractmethod
    async def get_by_id(self, entity: EntityType | str, tenant_id: str, record_id: str) -> dict:
        ...

    @abstractmethod
    async def insert(self, entity: EntityType | str, fields: dict) -> dict:
        """Persist a new row; the result carries the store-assigned id and created_at."""

    @abstractmethod
    async def update(
        self, entity: EntityType | str, tenant_id: str, record_id: str, fields: dict
    ) -> dict:
        ...

    @abstractmethod
    async def delete(self, entity: EntityType | str, tenant_id: str, record_id: str) -> None:
        ...

    async def after_commit(self, callback: Callable[[], Awaitable[None]]) -> None:
        """Run ``callback`` once the current writes are durable.

        Stores without a surrounding transaction commit on every write and
        run it straight away.
        """
        await callback()



# ── SQLAlchemy implementation ────────────────────────────────

_STORE_ERRORS = (DBAPIError, PoolTimeoutError, OSError)


def _is_display_id_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return "display_id" in message


class SqlRecordStore(RecordStore):
    def __init__(self, session: AsyncSession):
        self.session = session

    # ── helpers ──────────────────────────────────────────────

    @staticmethod
    def _model(entity: EntityType | str):
        return MODELS[get_entity_config(entity).entity_type]

    @staticmethod
    def _to_dict(obj) -> dict:
        mapper = sa_inspect(obj).mapper
        return {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}

    @staticmethod
    def _column(model, name: str):
        column = getattr(model, name, None)
        if column is None:
            raise BusinessLogicError(
                f"Unknown column {name!r} for {model.__tablename__}",
                error_code="UNKNOWN_COLUMN",
            )
        return column

    def _clause(self, model, f: Filter):
        column = self._column(model, f.column)
        if f.op == "eq":
            return column == f.value
        if f.op == "ne":
            return column.is_distinct_from(f.value)
        if f.op == "gte":
            return column >= f.value
        if f.op == "lte":
            return column <= f.value
        if f.op == "is_null":
            return column.is_(None)
        return column.is_not(None)

    async def _execute(self, stmt):
        try:
            return await self.session.execute(stmt)
        except IntegrityError:
            raise
        except _STORE_ERRORS as exc:
            logger.error("Record store query failed: %s", exc)
            raise StoreUnavailableError(f"Record store query failed: {exc}") from exc

    async def _flush(self):
        try:
            await self.session.flush()
        except IntegrityError:
            raise
        except _STORE_ERRORS as exc:
            logger.error("Record store write failed: %s", exc)
            raise StoreUnavailableError(f"Record store write failed: {exc}") from exc

    async def _load(self, entity, tenant_id: str, record_id: str):
        config = get_entity_config(entity)
        model = self._model(entity)
        result = await self._execute(
            select(model).where(model.id == record_id, model.tenant_id == tenant_id)
        )
        obj = result.scalar_one_or_none()
        if obj is None:
            raise RecordNotFoundError(config.label, record_id)
        return obj

    # ── interface ────────────────────────────────────────────

    async def list(self, entity, tenant_id, filters=None, order_by=None, descending=False):
        config = get_entity_config(entity)
        model = self._model(entity)

        stmt = select(model).where(model.tenant_id == tenant_id)
        for f in filters or []:
            stmt = stmt.where(self._clause(model, f))

        order_column = self._column(model, order_by or config.order_by)
        stmt = stmt.order_by(
            order_column.desc() if descending else order_column.asc(),
            model.created_at.asc(),
        )

        result = await self._execute(stmt)
        return [self._to_dict(obj) for obj in result.scalars().all()]

    async def list_display_ids(self, entity, tenant_id):
        model = self._model(entity)
        result = await self._execute(
            select(model.display_id).where(model.tenant_id == tenant_id)
        )
        return list(result.scalars().all())

    async def get_by_id(self, entity, tenant_id, record_id):
        return self._to_dict(await self._load(entity, tenant_id, record_id))

    async def insert(self, entity, fields):
        config = get_entity_config(entity)
        obj = self._model(entity)(**fields)

        # SAVEPOINT: a losing insert must not poison the request transaction
        try:
            async with self.session.begin_nested():
                self.session.add(obj)
                await self.session.flush()
        except IntegrityError as exc:
            if _is_display_id_violation(exc):
                raise DisplayIdConflictError(config.label, fields.get("display_id")) from exc
            raise
        except _STORE_ERRORS as exc:
            logger.error("Record store insert failed: %s", exc)
            raise StoreUnavailableError(f"Record store insert failed: {exc}") from exc

        return self._to_dict(obj)

    async def update(self, entity, tenant_id, record_id, fields):
        obj = await self._load(entity, tenant_id, record_id)
        for key, value in fields.items():
            setattr(obj, key, value)
        await self._flush()
        return self._to_dict(obj)

    async def delete(self, entity, tenant_id, record_id):
        obj = await self._load(entity, tenant_id, record_id)
        await self.session.delete(obj)
        await self._flush()

    async def after_commit(self, callback):
        # get_db awaits these after session.commit()
        self.session.info.setdefault(AFTER_COMMIT, []).append(callback)


async def get_record_store(db: AsyncSession = Depends(get_db)) -> RecordStore:
    """FastAPI dependency: a store bound to the request's session."""
    return SqlRecordStore(db)
