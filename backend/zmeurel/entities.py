"""Registry of the nine farm record types.

Each entry fixes the display-ID prefix, the backing table and the default
list ordering. Everything that is generic over record types (display IDs,
the record store, CRUD, routers) looks the entity up here instead of
carrying its own copy of these constants.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from zmeurel.middleware.exceptions import BusinessLogicError


class EntityType(str, enum.Enum):
    PARCEL = "parcel"
    PICKER = "picker"
    CLIENT = "client"
    HARVEST = "harvest"
    FRUIT_SALE = "fruit_sale"
    CUTTING_SALE = "cutting_sale"
    ACTIVITY = "activity"
    INVESTMENT = "investment"
    EXPENSE = "expense"


@dataclass(frozen=True)
class EntityConfig:
    entity_type: EntityType
    prefix: str
    table: str
    label: str
    order_by: str = "display_id"
    descending: bool = False
    # Date column used by the by-month / by-period listings
    date_column: str | None = None


ENTITY_CONFIGS: dict[EntityType, EntityConfig] = {
    EntityType.PARCEL: EntityConfig(
        EntityType.PARCEL, "P", "parcels", "Parcel",
    ),
    EntityType.PICKER: EntityConfig(
        EntityType.PICKER, "C", "pickers", "Picker",
    ),
    EntityType.CLIENT: EntityConfig(
        EntityType.CLIENT, "CL", "clients", "Client",
    ),
    EntityType.HARVEST: EntityConfig(
        EntityType.HARVEST, "R", "harvests", "Harvest",
        order_by="harvest_date", descending=True, date_column="harvest_date",
    ),
    EntityType.FRUIT_SALE: EntityConfig(
        EntityType.FRUIT_SALE, "V", "fruit_sales", "Fruit sale",
        order_by="sale_date", descending=True, date_column="sale_date",
    ),
    EntityType.CUTTING_SALE: EntityConfig(
        EntityType.CUTTING_SALE, "VB", "cutting_sales", "Cutting sale",
        order_by="sale_date", descending=True, date_column="sale_date",
    ),
    EntityType.ACTIVITY: EntityConfig(
        EntityType.ACTIVITY, "AA", "agricultural_activities", "Agricultural activity",
        order_by="application_date", descending=True, date_column="application_date",
    ),
    EntityType.INVESTMENT: EntityConfig(
        EntityType.INVESTMENT, "INV", "investments", "Investment",
        order_by="investment_date", descending=True, date_column="investment_date",
    ),
    EntityType.EXPENSE: EntityConfig(
        EntityType.EXPENSE, "CH", "expenses", "Expense",
        order_by="expense_date", descending=True, date_column="expense_date",
    ),
}


def get_entity_config(entity: EntityType | str) -> EntityConfig:
    """Look up an entity by enum member or by its string value."""
    try:
        return ENTITY_CONFIGS[EntityType(entity)]
    except ValueError:
        raise BusinessLogicError(
            f"Unknown entity type: {entity!r}", error_code="UNKNOWN_ENTITY"
        ) from None
