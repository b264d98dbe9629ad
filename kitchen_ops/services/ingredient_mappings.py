"""Manage recipe-ingredient to inventory-item aliases."""
from typing import Optional

from sqlalchemy.orm import Session

from kitchen_ops.models.inventory import IngredientMapping


def list_mappings(db: Session) -> list[IngredientMapping]:
    return db.query(IngredientMapping).order_by(IngredientMapping.recipe_ingredient_name).all()


def upsert_mapping(
    db: Session,
    recipe_ingredient_name: str,
    inventory_item_name: str,
    category: Optional[str] = None,
    notes: Optional[str] = None,
    created_by: Optional[str] = None,
) -> IngredientMapping:
    """Create an alias, or repoint the existing alias for this ingredient name."""
    name = recipe_ingredient_name.strip()
    mapping = (
        db.query(IngredientMapping)
        .filter(IngredientMapping.recipe_ingredient_name == name)
        .first()
    )
    if mapping is None:
        mapping = IngredientMapping(recipe_ingredient_name=name, created_by=created_by)
        db.add(mapping)

    mapping.inventory_item_name = inventory_item_name.strip()
    mapping.category = category
    mapping.notes = notes

    db.commit()
    db.refresh(mapping)
    return mapping


def delete_mapping(db: Session, mapping_id: str) -> bool:
    """Delete an alias. Returns False if it did not exist."""
    mapping = db.query(IngredientMapping).filter(IngredientMapping.mapping_id == mapping_id).first()
    if not mapping:
        return False
    db.delete(mapping)
    db.commit()
    return True
