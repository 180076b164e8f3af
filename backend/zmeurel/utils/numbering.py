"""Sequential display IDs: one generator for every record type.

Format:
  <prefix><n zero-padded to settings.display_id_width>

  parcel P001, picker C001, client CL001, harvest R001, fruit sale V001,
  cutting sale VB001, activity AA001, investment INV001, expense CH001

The next number is the largest existing number of the tenant + entity plus
one.  All display IDs of the tenant are read and compared as integers, so
"P1000" correctly follows "P999" even though it sorts before it as a
string.  Gaps left by deletes are not reused.

Rows whose display ID does not parse (wrong prefix, stray characters,
manual edits) are skipped with a warning: one bad legacy row must not
block every future insert.  A failed store query is not skipped: it
propagates, because treating it as "no rows" would hand out <prefix>001
again.

The read-then-insert sequence is not atomic; see services/crud.py for the
unique-constraint retry that closes the race.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from zmeurel.config import settings
from zmeurel.entities import EntityType, get_entity_config
from zmeurel.services.record_store import RecordStore

logger = logging.getLogger(__name__)

_pattern_cache: dict[str, re.Pattern] = {}


def _display_id_pattern(prefix: str) -> re.Pattern:
    pattern = _pattern_cache.get(prefix)
    if pattern is None:
        # ASCII digits only; \d would accept other scripts' digits
        pattern = re.compile(rf"^{re.escape(prefix)}([0-9]+)$")
        _pattern_cache[prefix] = pattern
    return pattern


def parse_display_id(display_id: str | None, prefix: str) -> int | None:
    """Return the numeric part of ``display_id``, or None if it is malformed.

    Zero is malformed: sequences start at 1.
    """
    if not isinstance(display_id, str):
        return None
    match = _display_id_pattern(prefix).match(display_id.strip())
    if not match:
        return None
    number = int(match.group(1))
    return number if number > 0 else None


def format_display_id(prefix: str, number: int, width: int | None = None) -> str:
    """Render ``number`` with ``prefix``; ``width`` is a minimum, not a cap."""
    if number < 1:
        raise ValueError(f"Display ID numbers start at 1, got {number}")
    width = settings.display_id_width if width is None else width
    return f"{prefix}{number:0{width}d}"


def next_display_id(
    existing: Iterable[str | None],
    prefix: str,
    width: int | None = None,
    *,
    context: str = "",
) -> str:
    """Compute the display ID following the highest well-formed one in ``existing``."""
    highest = 0
    for display_id in existing:
        number = parse_display_id(display_id, prefix)
        if number is None:
            logger.warning(
                "Skipping malformed display ID %r (expected %s<digits>)%s",
                display_id, prefix, f" for {context}" if context else "",
            )
            continue
        if number > highest:
            highest = number
    return format_display_id(prefix, highest + 1, width)


async def generate_next_display_id(
    store: RecordStore, tenant_id: str, entity: EntityType | str
) -> str:
    """Next display ID for ``entity`` within ``tenant_id``.

    Args:
        store: RecordStore to read existing display IDs from
        tenant_id: Owning farm account
        entity: EntityType (or its string value) selecting prefix and table

    Returns:
        e.g. "P004" after P001 and P003

    Raises:
        StoreUnavailableError: the store query failed
    """
    config = get_entity_config(entity)
    existing = await store.list_display_ids(config.entity_type, tenant_id)
    return next_display_id(
        existing,
        config.prefix,
        context=f"{config.table} (tenant {tenant_id})",
    )


# ── Auditing ─────────────────────────────────────────────────


@dataclass
class DisplayIdAudit:
    """Result of scanning one tenant + entity for display-ID problems."""
    entity: str
    total: int = 0
    highest: int = 0
    malformed: list[str | None] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.malformed and not self.duplicates


def audit_display_ids(
    display_ids: Iterable[str | None], prefix: str, entity: str = ""
) -> DisplayIdAudit:
    """Report malformed display IDs and numbers claimed more than once.

    "P7" and "P007" count as the same number.
    """
    audit = DisplayIdAudit(entity=entity)
    numbers: Counter[int] = Counter()
    for display_id in display_ids:
        audit.total += 1
        number = parse_display_id(display_id, prefix)
        if number is None:
            audit.malformed.append(display_id)
            continue
        numbers[number] += 1
        audit.highest = max(audit.highest, number)

    audit.duplicates = [
        format_display_id(prefix, number)
        for number, count in sorted(numbers.items())
        if count > 1
    ]
    return audit
