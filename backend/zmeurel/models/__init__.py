"""Aggregate model imports for Alembic auto-detection and the SQL record store."""

from zmeurel.entities import EntityType
from zmeurel.models.parcel import Parcel
from zmeurel.models.picker import Picker
from zmeurel.models.client import Client
from zmeurel.models.harvest import Harvest
from zmeurel.models.fruit_sale import FruitSale
from zmeurel.models.cutting_sale import CuttingSale
from zmeurel.models.activity import AgriculturalActivity
from zmeurel.models.investment import Investment
from zmeurel.models.expense import Expense

MODELS = {
    EntityType.PARCEL: Parcel,
    EntityType.PICKER: Picker,
    EntityType.CLIENT: Client,
    EntityType.HARVEST: Harvest,
    EntityType.FRUIT_SALE: FruitSale,
    EntityType.CUTTING_SALE: CuttingSale,
    EntityType.ACTIVITY: AgriculturalActivity,
    EntityType.INVESTMENT: Investment,
    EntityType.EXPENSE: Expense,
}
