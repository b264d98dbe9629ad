"""Pydantic schemas for inventory checks, shortages, and ingredient mappings."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from kitchen_ops.services.inventory_checker import OverallStatus
from kitchen_ops.services.shortage_classifier import ShortagePriority, ShortageStatus


# ============================================================================
# Inventory Check Schemas
# ============================================================================


class RunCheckRequest(BaseModel):
    """Request to run an inventory check."""

    model_config = ConfigDict(populate_by_name=True)

    schedule_id: str = Field(..., min_length=1, alias="scheduleId")
    user_id: Optional[str] = Field(None, alias="userId", description="Omit for automatic checks")


class ShortageResponse(BaseModel):
    """A shortage found by a check. Quantities are in the base unit."""

    model_config = ConfigDict(from_attributes=True)

    shortage_id: Optional[str] = None
    ingredient: str
    inventory_item: Optional[str] = None
    required: float
    available: float
    shortfall: float
    unit: str
    status: ShortageStatus
    priority: ShortagePriority
    affected_recipes: list[str] = []
    affected_items: list[str] = []
    production_date: str
    resolution_status: Optional[str] = None


class CheckResultResponse(BaseModel):
    """Full inventory check result."""

    model_config = ConfigDict(from_attributes=True)

    check_id: str
    schedule_id: str
    production_dates: list[str]
    overall: OverallStatus
    total_ingredients: int
    missing: int
    partial: int
    sufficient: int
    shortages: list[ShortageResponse] = []
    inventory_date: Optional[str] = None
    checked_by: Optional[str] = None
    check_type: Optional[str] = None
    check_date: Optional[datetime] = None


class CheckResultEnvelope(BaseModel):
    success: bool = True
    result: CheckResultResponse


class DeletedCounts(BaseModel):
    checks: int
    shortages: int


class DeleteChecksResponse(BaseModel):
    success: bool = True
    message: str
    deleted: DeletedCounts


# ============================================================================
# Shortage Board Schemas
# ============================================================================


class ShortageRecord(BaseModel):
    """Stored shortage row with its resolution state."""

    model_config = ConfigDict(from_attributes=True)

    shortage_id: str
    check_id: str
    schedule_id: str
    production_date: str
    ingredient_name: str
    inventory_item_name: Optional[str] = None
    required_quantity: float
    available_quantity: float
    shortfall_amount: float
    unit: str
    status: ShortageStatus
    priority: ShortagePriority
    affected_recipes: list[str] = []
    affected_production_items: list[str] = []
    resolution_status: Optional[str] = None
    resolution_action: Optional[str] = None
    resolution_notes: Optional[str] = None
    resolved_by: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class ShortageBoardItem(ShortageRecord):
    """Shortage row joined with the check that found it."""

    check_date: Optional[datetime] = None
    overall_status: Optional[OverallStatus] = None


class ShortageList(BaseModel):
    success: bool = True
    shortages: list[ShortageBoardItem]
    count: int


class ResolveShortageRequest(BaseModel):
    """Record how a shortage was handled."""

    model_config = ConfigDict(populate_by_name=True)

    resolution_status: str = Field(..., alias="resolutionStatus", description="RESOLVED, CANNOT_FULFILL, ...")
    resolved_by: str = Field(..., min_length=1, alias="resolvedBy")
    resolution_action: Optional[str] = Field(
        None, alias="resolutionAction", description="ORDERED, IN_STOCK_ERROR, SUBSTITUTED, RESCHEDULED, CANCELLED"
    )
    resolution_notes: Optional[str] = Field(None, alias="resolutionNotes")


class ResolveShortageResponse(BaseModel):
    success: bool = True
    shortage: ShortageRecord


# ============================================================================
# Ingredient Mapping Schemas
# ============================================================================


class IngredientMappingCreate(BaseModel):
    """Alias a recipe ingredient name to an inventory item."""

    recipe_ingredient_name: str = Field(..., min_length=1)
    inventory_item_name: str = Field(..., min_length=1)
    category: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None


class IngredientMappingResponse(IngredientMappingCreate):
    model_config = ConfigDict(from_attributes=True)

    mapping_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class IngredientMappingList(BaseModel):
    mappings: list[IngredientMappingResponse]
    count: int
