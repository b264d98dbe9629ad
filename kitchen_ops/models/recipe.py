"""RecipeLine model."""
import uuid

from sqlalchemy import Column, String, Numeric, Index
from sqlalchemy.dialects.postgresql import UUID

from . import Base


class RecipeLine(Base):
    """One ingredient row of a recipe, synced from the ERP recipe export.

    A row either names a raw ingredient or another recipe (a sub-recipe),
    discriminated by ``item_type``.
    """

    __tablename__ = "recipe_lines"
    __table_args__ = (
        Index("idx_recipe_lines_item", "item"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    item = Column(String(255), nullable=False)  # Recipe this row belongs to
    ingredient_name = Column(String(255), nullable=False)
    item_type = Column(String(20), nullable=False, default="ingredient")  # 'ingredient', 'subrecipe'
    quantity = Column(Numeric(12, 4), nullable=False, default=0)
    unit = Column(String(20))

    TYPE_INGREDIENT = "ingredient"
    TYPE_SUBRECIPE = "subrecipe"

    def __repr__(self):
        return f"<RecipeLine(item='{self.item}', ingredient='{self.ingredient_name}')>"
