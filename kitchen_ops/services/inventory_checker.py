"""Automated inventory checking for production schedules.

For each production day in a schedule:
1. Flatten every scheduled recipe (sub-recipes included) into raw ingredients
2. Aggregate that day's requirements per ingredient
3. Compare against the latest central kitchen stock count
4. Record the shortages

Days are checked independently, so surplus on one day never hides a
shortage on another.
"""
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import case
from sqlalchemy.orm import Session

from kitchen_ops.config import get_settings
from kitchen_ops.models.inventory_check import InventoryCheck, IngredientShortage
from kitchen_ops.services.errors import ScheduleNotFoundError
from kitchen_ops.services.ingredient_aggregator import aggregate_ingredients
from kitchen_ops.services.inventory_matcher import InventoryMatcher
from kitchen_ops.services.recipe_flattener import FlattenedIngredient, flatten_recipe
from kitchen_ops.services.repositories import (
    CachedRecipeRepository,
    InventoryRepository,
    MappingRepository,
    RecipeRepository,
    ScheduleRepository,
)
from kitchen_ops.services.shortage_classifier import (
    ShortagePriority,
    ShortageResult,
    ShortageStatus,
    compare_with_inventory,
)
from kitchen_ops.services.units import to_decimal

logger = logging.getLogger(__name__)


class OverallStatus(str, Enum):
    ALL_GOOD = "ALL_GOOD"
    PARTIAL_SHORTAGE = "PARTIAL_SHORTAGE"
    CRITICAL_SHORTAGE = "CRITICAL_SHORTAGE"


@dataclass
class CheckResult:
    """Outcome of one inventory check."""
    check_id: str
    schedule_id: str
    production_dates: list[str]
    overall: OverallStatus
    total_ingredients: int
    missing: int
    partial: int
    sufficient: int
    shortages: list[ShortageResult] = field(default_factory=list)
    inventory_date: Optional[str] = None
    checked_by: Optional[str] = None
    check_type: Optional[str] = None
    check_date: Optional[datetime] = None


def generate_check_id(schedule_id: str) -> str:
    return f"check-{schedule_id}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def generate_shortage_id(check_id: str) -> str:
    return f"shortage-{check_id}-{uuid.uuid4().hex[:12]}"


def overall_status(missing: int, partial: int) -> OverallStatus:
    if missing > 0:
        return OverallStatus.CRITICAL_SHORTAGE
    if partial > 0:
        return OverallStatus.PARTIAL_SHORTAGE
    return OverallStatus.ALL_GOOD


def production_quantity(item: dict):
    """Adjusted quantity when the head chef set one, otherwise the planned quantity."""
    return to_decimal(item.get("adjustedQuantity") or item.get("quantity"))


class InventoryChecker:
    """Runs shortage checks against injected data sources.

    Args:
        schedules: ``get(schedule_id)`` returning an object with ``days``
        recipes: ``exists(name)`` and ``get_lines(name)``
        inventory: ``latest_snapshot(as_of)`` returning InventoryItems
        matcher: resolves ingredient names to inventory items
        max_depth: sub-recipe nesting limit
    """

    def __init__(self, schedules, recipes, inventory, matcher: InventoryMatcher, max_depth: int = 10):
        self.schedules = schedules
        self.recipes = recipes
        self.inventory = inventory
        self.matcher = matcher
        self.max_depth = max_depth

    @classmethod
    def from_session(cls, db: Session) -> "InventoryChecker":
        settings = get_settings()
        return cls(
            schedules=ScheduleRepository(db),
            recipes=CachedRecipeRepository(RecipeRepository(db)),
            inventory=InventoryRepository(db, settings.INVENTORY_LOCATION),
            matcher=InventoryMatcher(MappingRepository(db).lookup),
            max_depth=settings.RECIPE_MAX_DEPTH,
        )

    def flatten_day(self, day: dict) -> list[FlattenedIngredient]:
        """Raw ingredients for every item scheduled on one day."""
        ingredients = []
        for item in day.get("items") or []:
            recipe_name = item.get("recipeName")
            if not recipe_name or not self.recipes.exists(recipe_name):
                logger.warning(f"Recipe not found: {recipe_name}")
                continue

            ingredients.extend(flatten_recipe(
                self.recipes,
                recipe_name,
                production_quantity(item),
                recipe_name,
                max_depth=self.max_depth,
            ))
        return ingredients

    def check(self, schedule_id: str, user_id: Optional[str] = None, today: Optional[date] = None) -> CheckResult:
        """Compute the check result for a schedule without saving it."""
        logger.info(f"Running inventory check for schedule: {schedule_id}")

        schedule = self.schedules.get(schedule_id)
        if schedule is None:
            raise ScheduleNotFoundError(schedule_id)

        today = today or date.today()
        snapshot = self.inventory.latest_snapshot(as_of=today)
        inventory_date = snapshot[0].inventory_date.isoformat() if snapshot and snapshot[0].inventory_date else None

        production_dates: list[str] = []
        shortages: list[ShortageResult] = []
        total_ingredients = 0

        for day in schedule.days:
            day_date = str(day.get("date"))
            production_dates.append(day_date)

            aggregated = aggregate_ingredients(self.flatten_day(day))
            total_ingredients += len(aggregated)

            shortages.extend(compare_with_inventory(aggregated, snapshot, day_date, self.matcher, today))

        missing = sum(1 for s in shortages if s.status in (ShortageStatus.MISSING, ShortageStatus.CRITICAL))
        partial = sum(1 for s in shortages if s.status == ShortageStatus.PARTIAL)
        sufficient = total_ingredients - len(shortages)

        logger.info(
            f"Checked {total_ingredients} ingredient requirements across {len(production_dates)} days"
        )

        return CheckResult(
            check_id=generate_check_id(schedule_id),
            schedule_id=schedule_id,
            production_dates=production_dates,
            overall=overall_status(missing, partial),
            total_ingredients=total_ingredients,
            missing=missing,
            partial=partial,
            sufficient=sufficient,
            shortages=shortages,
            inventory_date=inventory_date,
            checked_by=user_id or "system",
            check_type="MANUAL" if user_id else "AUTOMATIC",
        )


def save_check(db: Session, result: CheckResult) -> InventoryCheck:
    """Insert the check row and one row per shortage."""
    check = InventoryCheck(
        check_id=result.check_id,
        schedule_id=result.schedule_id,
        production_dates=result.production_dates,
        status=InventoryCheck.STATUS_COMPLETED,
        total_ingredients_required=result.total_ingredients,
        missing_ingredients_count=result.missing,
        partial_ingredients_count=result.partial,
        sufficient_ingredients_count=result.sufficient,
        overall_status=result.overall.value,
        checked_by=result.checked_by,
        check_type=result.check_type,
        inventory_date=result.inventory_date,
    )
    db.add(check)

    for shortage in result.shortages:
        shortage.shortage_id = generate_shortage_id(result.check_id)
        shortage.resolution_status = IngredientShortage.RESOLUTION_PENDING
        db.add(IngredientShortage(
            shortage_id=shortage.shortage_id,
            check_id=result.check_id,
            schedule_id=result.schedule_id,
            production_date=shortage.production_date,
            ingredient_name=shortage.ingredient,
            inventory_item_name=shortage.inventory_item,
            required_quantity=shortage.required,
            available_quantity=shortage.available,
            shortfall_amount=shortage.shortfall,
            unit=shortage.unit,
            status=shortage.status.value,
            priority=shortage.priority.value,
            affected_recipes=shortage.affected_recipes,
            affected_production_items=shortage.affected_items,
            resolution_status=IngredientShortage.RESOLUTION_PENDING,
        ))

    db.flush()
    return check


def run_inventory_check(
    db: Session,
    schedule_id: str,
    user_id: Optional[str] = None,
    today: Optional[date] = None,
) -> CheckResult:
    """Run and persist an inventory check for a production schedule.

    Every call creates a new check; earlier checks are left untouched.

    Raises:
        ScheduleNotFoundError: If the schedule does not exist
    """
    try:
        result = InventoryChecker.from_session(db).check(schedule_id, user_id, today)
        check = save_check(db, result)
        db.commit()
    except Exception:
        db.rollback()
        raise

    result.check_date = check.check_date
    logger.info(
        f"Check complete: {result.overall.value} ({result.missing} missing, "
        f"{result.partial} partial, {result.sufficient} sufficient)"
    )
    return result


PRIORITY_RANK = case(
    (IngredientShortage.priority == ShortagePriority.HIGH.value, 1),
    (IngredientShortage.priority == ShortagePriority.MEDIUM.value, 2),
    (IngredientShortage.priority == ShortagePriority.LOW.value, 3),
    else_=4,
)


def shortage_from_row(row: IngredientShortage) -> ShortageResult:
    return ShortageResult(
        ingredient=row.ingredient_name,
        inventory_item=row.inventory_item_name,
        required=to_decimal(row.required_quantity),
        available=to_decimal(row.available_quantity),
        shortfall=to_decimal(row.shortfall_amount),
        unit=row.unit,
        status=ShortageStatus(row.status),
        priority=ShortagePriority(row.priority),
        affected_recipes=list(row.affected_recipes or []),
        affected_items=list(row.affected_production_items or []),
        production_date=row.production_date,
        shortage_id=row.shortage_id,
        resolution_status=row.resolution_status,
    )


def get_latest_check(db: Session, schedule_id: str) -> Optional[CheckResult]:
    """Most recent check for a schedule, most urgent shortages first."""
    check = (
        db.query(InventoryCheck)
        .filter(InventoryCheck.schedule_id == schedule_id)
        .order_by(InventoryCheck.created_at.desc(), InventoryCheck.check_date.desc())
        .first()
    )
    if not check:
        return None

    rows = (
        db.query(IngredientShortage)
        .filter(IngredientShortage.check_id == check.check_id)
        .order_by(PRIORITY_RANK, IngredientShortage.shortfall_amount.desc())
        .all()
    )

    return CheckResult(
        check_id=check.check_id,
        schedule_id=check.schedule_id,
        production_dates=list(check.production_dates or []),
        overall=OverallStatus(check.overall_status),
        total_ingredients=check.total_ingredients_required or 0,
        missing=check.missing_ingredients_count or 0,
        partial=check.partial_ingredients_count or 0,
        sufficient=check.sufficient_ingredients_count or 0,
        shortages=[shortage_from_row(row) for row in rows],
        inventory_date=check.inventory_date,
        checked_by=check.checked_by,
        check_type=check.check_type,
        check_date=check.check_date,
    )


def delete_checks_for_schedule(db: Session, schedule_id: str) -> dict[str, int]:
    """Delete every check and shortage recorded for a schedule."""
    shortages = (
        db.query(IngredientShortage)
        .filter(IngredientShortage.schedule_id == schedule_id)
        .delete(synchronize_session=False)
    )
    checks = (
        db.query(InventoryCheck)
        .filter(InventoryCheck.schedule_id == schedule_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info(f"Deleted {checks} checks and {shortages} shortages for schedule {schedule_id}")
    return {"checks": checks, "shortages": shortages}


def clear_all_checks(db: Session) -> dict[str, int]:
    """Delete all inventory check history."""
    shortages = db.query(IngredientShortage).delete(synchronize_session=False)
    checks = db.query(InventoryCheck).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Cleared {checks} checks and {shortages} shortages")
    return {"checks": checks, "shortages": shortages}
