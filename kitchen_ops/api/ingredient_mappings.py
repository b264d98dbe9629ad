"""Ingredient mapping (alias) endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from kitchen_ops.database import get_db
from kitchen_ops.schemas.inventory_check import (
    IngredientMappingCreate,
    IngredientMappingList,
    IngredientMappingResponse,
)
from kitchen_ops.services.ingredient_mappings import delete_mapping, list_mappings, upsert_mapping

router = APIRouter(prefix="/ingredient-mappings", tags=["ingredient-mappings"])


@router.get("", response_model=IngredientMappingList)
def get_mappings(db: Session = Depends(get_db)):
    """List all ingredient aliases."""
    mappings = list_mappings(db)
    return IngredientMappingList(mappings=mappings, count=len(mappings))


@router.post("", response_model=IngredientMappingResponse, status_code=201)
def create_mapping(
    data: IngredientMappingCreate,
    db: Session = Depends(get_db),
):
    """Create or repoint the alias for a recipe ingredient name."""
    return upsert_mapping(db, **data.model_dump())


@router.delete("/{mapping_id}", status_code=204)
def remove_mapping(
    mapping_id: str,
    db: Session = Depends(get_db),
):
    """Delete an ingredient alias."""
    if not delete_mapping(db, mapping_id):
        raise HTTPException(status_code=404, detail="Mapping not found")
