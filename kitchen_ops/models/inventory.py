"""BranchInventory and IngredientMapping models."""
import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, Text, TIMESTAMP, DATE,
    Numeric, UniqueConstraint, Index
)

from . import Base


class BranchInventory(Base):
    """Daily stock count per branch, synced from the inventory spreadsheets."""

    __tablename__ = "branch_inventory"
    __table_args__ = (
        UniqueConstraint("inventory_date", "branch", "item", name="unique_branch_inventory"),
        Index("idx_branch_inventory_branch", "branch"),
        Index("idx_branch_inventory_date", "inventory_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    inventory_date = Column(DATE, nullable=False)
    branch = Column(String(100), nullable=False)
    item = Column(String(255), nullable=False)
    category = Column(String(100))
    quantity = Column(Numeric(12, 2))
    unit = Column(String(50))
    product_expiry_date = Column(DATE)
    unit_cost = Column(Numeric(10, 2))
    total_cost = Column(Numeric(10, 2))
    source_file = Column(String(255))
    last_synced = Column(TIMESTAMP, default=datetime.utcnow)

    def __repr__(self):
        return f"<BranchInventory(branch='{self.branch}', item='{self.item}', date={self.inventory_date})>"


def _mapping_id() -> str:
    return f"mapping-{uuid.uuid4().hex}"


class IngredientMapping(Base):
    """Alias from a recipe ingredient name to the inventory item that stocks it.

    Example: recipe ingredient "Unsalted Butter" is counted as "Butter Block 2.5kg".
    """

    __tablename__ = "ingredient_mappings"
    __table_args__ = (
        Index("idx_mappings_recipe_name", "recipe_ingredient_name"),
    )

    mapping_id = Column(Text, primary_key=True, default=_mapping_id)
    recipe_ingredient_name = Column(Text, nullable=False, unique=True)
    inventory_item_name = Column(Text, nullable=False)
    category = Column(Text)
    notes = Column(Text)
    created_by = Column(Text)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<IngredientMapping('{self.recipe_ingredient_name}' -> '{self.inventory_item_name}')>"
