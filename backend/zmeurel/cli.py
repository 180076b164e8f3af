"""Management CLI for display-ID maintenance.

Usage:
    python -m zmeurel.cli next-id <tenant> <entity>   # Next display ID, e.g. "P004"
    python -m zmeurel.cli audit-ids <tenant>          # Malformed / duplicate IDs per entity
"""

import asyncio
import sys

from zmeurel.database import async_session, engine
from zmeurel.entities import ENTITY_CONFIGS, get_entity_config
from zmeurel.services.record_store import SqlRecordStore
from zmeurel.tenancy import validate_tenant_id
from zmeurel.utils.numbering import audit_display_ids, generate_next_display_id


async def next_id(tenant_id: str, entity: str) -> str:
    async with async_session() as session:
        return await generate_next_display_id(SqlRecordStore(session), tenant_id, entity)


async def audit_ids(tenant_id: str) -> bool:
    """Print one line per entity; returns True when every entity is clean."""
    clean = True
    async with async_session() as session:
        store = SqlRecordStore(session)
        for entity, config in ENTITY_CONFIGS.items():
            display_ids = await store.list_display_ids(entity, tenant_id)
            audit = audit_display_ids(display_ids, config.prefix, entity=entity.value)
            status = "OK" if audit.is_clean else "PROBLEMS"
            print(f"  {config.table:<25} {audit.total:>5} rows  highest={audit.highest:<5} {status}")
            if audit.malformed:
                print(f"      malformed:  {', '.join(repr(d) for d in audit.malformed)}")
            if audit.duplicates:
                print(f"      duplicates: {', '.join(audit.duplicates)}")
            clean = clean and audit.is_clean
    return clean


async def _run(coro):
    try:
        return await coro
    finally:
        await engine.dispose()


def main(argv: list[str]) -> int:
    cmd = argv[1] if len(argv) > 1 else ""
    if cmd == "next-id" and len(argv) == 4:
        tenant_id = validate_tenant_id(argv[2])
        get_entity_config(argv[3])
        print(asyncio.run(_run(next_id(tenant_id, argv[3]))))
        return 0
    if cmd == "audit-ids" and len(argv) == 3:
        tenant_id = validate_tenant_id(argv[2])
        clean = asyncio.run(_run(audit_ids(tenant_id)))
        return 0 if clean else 1

    print("Usage: python -m zmeurel.cli [next-id <tenant> <entity>|audit-ids <tenant>]")
    return 2


if __name__ == "__main__":
    sys.exit(main(sys.argv))
