"""Entity CRUD: one set of operations for all nine record types.

Creation is the only non-trivial path:

  1. generate the next display ID for the tenant + entity
  2. insert the row with tenant_id and display_id embedded
  3. if another request claimed the same display ID in between, the
     (tenant_id, display_id) unique constraint rejects the insert; start
     over from step 1, at most settings.display_id_max_attempts times

No locks are taken; the database constraint is the arbiter.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date

from zmeurel.config import settings
from zmeurel.entities import EntityType, get_entity_config
from zmeurel.middleware.exceptions import BusinessLogicError, DisplayIdConflictError
from zmeurel.services.record_store import Filter, RecordStore
from zmeurel.utils.numbering import generate_next_display_id

logger = logging.getLogger(__name__)

# Assigned once at creation, never part of an update
IMMUTABLE_FIELDS = frozenset({"id", "tenant_id", "display_id", "created_at"})


async def create_record(
    store: RecordStore,
    tenant_id: str,
    entity: EntityType | str,
    fields: dict,
) -> dict:
    """Insert a record under the next free display ID.

    Raises:
        DisplayIdConflictError: every attempt lost the race (retryable)
        StoreUnavailableError: the store failed
    """
    config = get_entity_config(entity)
    payload = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
    attempts = max(1, settings.display_id_max_attempts)

    last_conflict: DisplayIdConflictError | None = None
    for attempt in range(1, attempts + 1):
        display_id = await generate_next_display_id(store, tenant_id, config.entity_type)
        try:
            record = await store.insert(
                config.entity_type,
                {**payload, "tenant_id": tenant_id, "display_id": display_id},
            )
        except DisplayIdConflictError as exc:
            last_conflict = exc
            logger.warning(
                "Display ID %s for %s (tenant %s) taken concurrently, attempt %d/%d",
                display_id, config.table, tenant_id, attempt, attempts,
            )
            continue

        logger.info("Created %s %s (tenant %s)", config.label, display_id, tenant_id)
        return record

    raise last_conflict


async def get_record(
    store: RecordStore, tenant_id: str, entity: EntityType | str, record_id: str
) -> dict:
    return await store.get_by_id(entity, tenant_id, record_id)


async def list_records(
    store: RecordStore,
    tenant_id: str,
    entity: EntityType | str,
    filters: list[Filter] | None = None,
    order_by: str | None = None,
    descending: bool | None = None,
) -> list[dict]:
    """List a tenant's records, in the entity's default order unless overridden."""
    config = get_entity_config(entity)
    if order_by is None:
        order_by = config.order_by
        if descending is None:
            descending = config.descending
    return await store.list(
        config.entity_type,
        tenant_id,
        filters=filters,
        order_by=order_by,
        descending=bool(descending),
    )


async def update_record(
    store: RecordStore,
    tenant_id: str,
    entity: EntityType | str,
    record_id: str,
    fields: dict,
) -> dict:
    """Apply a partial update; id, tenant_id, display_id and created_at are ignored."""
    changes = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
    if not changes:
        return await store.get_by_id(entity, tenant_id, record_id)
    return await store.update(entity, tenant_id, record_id, changes)


async def delete_record(
    store: RecordStore, tenant_id: str, entity: EntityType | str, record_id: str
) -> None:
    """Hard delete. Records referencing this one keep the dangling id."""
    await store.delete(entity, tenant_id, record_id)
    logger.info("Deleted %s %s (tenant %s)", get_entity_config(entity).label, record_id, tenant_id)


# ── Date windows ─────────────────────────────────────────────


def month_range(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    if not 1 <= month <= 12:
        raise BusinessLogicError(f"Invalid month: {month}", error_code="INVALID_PERIOD")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def period_filters(column: str, start: date, end: date) -> list[Filter]:
    """Inclusive [start, end] window on a date column."""
    if start > end:
        raise BusinessLogicError(
            f"Period start {start} is after end {end}", error_code="INVALID_PERIOD"
        )
    return [Filter(column, "gte", start), Filter(column, "lte", end)]


async def list_by_month(
    store: RecordStore,
    tenant_id: str,
    entity: EntityType | str,
    year: int,
    month: int,
) -> list[dict]:
    start, end = month_range(year, month)
    return await list_by_period(store, tenant_id, entity, start, end)


async def list_by_period(
    store: RecordStore,
    tenant_id: str,
    entity: EntityType | str,
    start: date,
    end: date,
    extra_filters: list[Filter] | None = None,
) -> list[dict]:
    config = get_entity_config(entity)
    if config.date_column is None:
        raise BusinessLogicError(
            f"{config.label} records have no date to filter on",
            error_code="NO_DATE_COLUMN",
        )
    filters = period_filters(config.date_column, start, end) + list(extra_filters or [])
    return await list_records(store, tenant_id, config.entity_type, filters=filters)
