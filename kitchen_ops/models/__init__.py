"""SQLAlchemy models for kitchen-ops."""
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import JSON

Base = declarative_base()

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")

# Import all models to register them with Base.metadata
from .schedule import ProductionSchedule
from .recipe import RecipeLine
from .inventory import BranchInventory, IngredientMapping
from .inventory_check import InventoryCheck, IngredientShortage

__all__ = [
    "Base",
    "JSONDocument",
    "ProductionSchedule",
    "RecipeLine",
    "BranchInventory",
    "IngredientMapping",
    "InventoryCheck",
    "IngredientShortage",
]
