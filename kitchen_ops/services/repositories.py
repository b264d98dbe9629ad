"""Database reads the inventory checker depends on.

Each repository wraps one table and hands back plain values, so the
checking logic can also run against in-memory fakes.
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy import func, inspect
from sqlalchemy.orm import Session

from kitchen_ops.models.inventory import BranchInventory, IngredientMapping
from kitchen_ops.models.recipe import RecipeLine
from kitchen_ops.models.schedule import ProductionSchedule
from kitchen_ops.services.inventory_matcher import InventoryItem
from kitchen_ops.services.recipe_flattener import IngredientLine, RecipeEntry, SubRecipeLine
from kitchen_ops.services.units import to_decimal

logger = logging.getLogger(__name__)


class ScheduleRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, schedule_id: str) -> Optional[ProductionSchedule]:
        return (
            self.db.query(ProductionSchedule)
            .filter(ProductionSchedule.schedule_id == schedule_id)
            .first()
        )


def to_recipe_entry(row: RecipeLine) -> RecipeEntry:
    """Turn a stored row into an ingredient or sub-recipe entry."""
    quantity = to_decimal(row.quantity)
    unit = row.unit or ""
    if (row.item_type or "").strip().lower() == RecipeLine.TYPE_SUBRECIPE:
        return SubRecipeLine(name=row.ingredient_name, quantity=quantity, unit=unit)
    return IngredientLine(name=row.ingredient_name, quantity=quantity, unit=unit)


class RecipeRepository:
    """Recipe rows keyed by recipe name."""

    def __init__(self, db: Session):
        self.db = db

    def exists(self, recipe_name: str) -> bool:
        count = (
            self.db.query(func.count(RecipeLine.id))
            .filter(RecipeLine.item == recipe_name)
            .scalar()
        )
        return bool(count)

    def get_lines(self, recipe_name: str) -> list[RecipeEntry]:
        rows = (
            self.db.query(RecipeLine)
            .filter(RecipeLine.item == recipe_name)
            .order_by(RecipeLine.item_type.desc(), RecipeLine.ingredient_name)
            .all()
        )
        return [to_recipe_entry(row) for row in rows]


class CachedRecipeRepository:
    """Memoizes recipe lookups for the lifetime of one check.

    Create a new one per run; recipes may be edited between runs.
    """

    def __init__(self, recipes):
        self.recipes = recipes
        self._lines: dict[str, list[RecipeEntry]] = {}
        self._exists: dict[str, bool] = {}

    def exists(self, recipe_name: str) -> bool:
        if recipe_name in self._lines:
            return bool(self._lines[recipe_name])
        if recipe_name not in self._exists:
            self._exists[recipe_name] = self.recipes.exists(recipe_name)
        return self._exists[recipe_name]

    def get_lines(self, recipe_name: str) -> list[RecipeEntry]:
        if recipe_name not in self._lines:
            self._lines[recipe_name] = self.recipes.get_lines(recipe_name)
        return self._lines[recipe_name]


class InventoryRepository:
    """Stock counts for a single location."""

    def __init__(self, db: Session, location: str):
        self.db = db
        self.location = location

    def latest_snapshot(self, as_of: Optional[date] = None) -> list[InventoryItem]:
        """All items counted on the most recent inventory date (at or before ``as_of``)."""
        latest_query = self.db.query(func.max(BranchInventory.inventory_date)).filter(
            BranchInventory.branch == self.location
        )
        if as_of is not None:
            latest_query = latest_query.filter(BranchInventory.inventory_date <= as_of)
        latest_date = latest_query.scalar()

        if latest_date is None:
            logger.warning(f"No inventory found for {self.location}")
            return []

        rows = (
            self.db.query(BranchInventory)
            .filter(
                BranchInventory.branch == self.location,
                BranchInventory.inventory_date == latest_date,
            )
            .order_by(BranchInventory.id)
            .all()
        )
        return [
            InventoryItem(
                item=row.item,
                quantity=to_decimal(row.quantity),
                unit=row.unit or "",
                inventory_date=row.inventory_date,
            )
            for row in rows
        ]


class MappingRepository:
    """Recipe-ingredient to inventory-item aliases, loaded once per check.

    The mapping table is optional; when it has not been created every
    lookup returns None.
    """

    def __init__(self, db: Session):
        self.db = db
        self._aliases: Optional[dict[str, str]] = None

    def _load(self) -> dict[str, str]:
        if not inspect(self.db.connection()).has_table(IngredientMapping.__tablename__):
            logger.info("ingredient_mappings table not found, skipping alias matching")
            return {}
        rows = self.db.query(
            IngredientMapping.recipe_ingredient_name,
            IngredientMapping.inventory_item_name,
        ).all()
        return {name.lower().strip(): mapped for name, mapped in rows}

    def lookup(self, ingredient_name: str) -> Optional[str]:
        if self._aliases is None:
            self._aliases = self._load()
        return self._aliases.get(ingredient_name.lower().strip())
