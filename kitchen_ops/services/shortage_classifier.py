"""Classify required-vs-available quantities into shortages.

Status thresholds:
- MISSING: nothing matching is in stock
- CRITICAL: some stock, but at least 80% of the requirement is short
- PARTIAL: some stock, less than 80% short
- SUFFICIENT: enough stock (never reported as a shortage)

Priority rises as the production day approaches:
- HIGH: production within a day, or status MISSING/CRITICAL
- MEDIUM: production within three days, or status PARTIAL
- LOW: everything else
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import NamedTuple, Optional, Union

from kitchen_ops.services.ingredient_aggregator import AggregatedIngredient
from kitchen_ops.services.inventory_matcher import InventoryItem, InventoryMatcher
from kitchen_ops.services.units import convert_to_base_unit, to_decimal

logger = logging.getLogger(__name__)

CRITICAL_SHORTFALL_PERCENT = Decimal("80")
HIGH_PRIORITY_DAYS = 1
MEDIUM_PRIORITY_DAYS = 3


class ShortageStatus(str, Enum):
    MISSING = "MISSING"
    CRITICAL = "CRITICAL"
    PARTIAL = "PARTIAL"
    SUFFICIENT = "SUFFICIENT"


class ShortagePriority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Classification(NamedTuple):
    status: ShortageStatus
    priority: ShortagePriority
    shortfall: Decimal
    shortfall_percent: Decimal


@dataclass
class ShortageResult:
    """One ingredient a production day is short of."""
    ingredient: str
    inventory_item: Optional[str]
    required: Decimal
    available: Decimal
    shortfall: Decimal
    unit: str
    status: ShortageStatus
    priority: ShortagePriority
    affected_recipes: list[str] = field(default_factory=list)
    affected_items: list[str] = field(default_factory=list)
    production_date: str = ""
    # Populated when read back from the database
    shortage_id: Optional[str] = None
    resolution_status: Optional[str] = None


def round_quantity(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half up."""
    return to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_date(value: Union[date, datetime, str]) -> date:
    """Accept a date, datetime, or ISO string (time part ignored)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def days_until(production_date: Union[date, str], today: Union[date, str]) -> int:
    """Whole calendar days from today until production (negative if past)."""
    return (parse_date(production_date) - parse_date(today)).days


def classify_shortage(
    required: Decimal,
    available: Decimal,
    production_date: Union[date, str],
    today: Union[date, str],
) -> Classification:
    """Decide status and priority for one ingredient on one production day."""
    required = to_decimal(required)
    available = to_decimal(available)
    shortfall = required - available

    if required == 0:
        status = ShortageStatus.SUFFICIENT
        shortfall_percent = Decimal("0")
    else:
        shortfall_percent = shortfall / required * 100
        if available == 0:
            status = ShortageStatus.MISSING
        elif shortfall > 0:
            if shortfall_percent >= CRITICAL_SHORTFALL_PERCENT:
                status = ShortageStatus.CRITICAL
            else:
                status = ShortageStatus.PARTIAL
        else:
            status = ShortageStatus.SUFFICIENT

    days = days_until(production_date, today)
    if days <= HIGH_PRIORITY_DAYS or status in (ShortageStatus.MISSING, ShortageStatus.CRITICAL):
        priority = ShortagePriority.HIGH
    elif days <= MEDIUM_PRIORITY_DAYS or status == ShortageStatus.PARTIAL:
        priority = ShortagePriority.MEDIUM
    else:
        priority = ShortagePriority.LOW

    return Classification(status, priority, shortfall, shortfall_percent)


def compare_with_inventory(
    required_ingredients: list[AggregatedIngredient],
    inventory: list[InventoryItem],
    production_date: str,
    matcher: InventoryMatcher,
    today: Union[date, str],
) -> list[ShortageResult]:
    """Return the shortages for one production day's requirements.

    Ingredients with enough stock are left out of the result.
    """
    shortages = []

    for ingredient in required_ingredients:
        inventory_item = matcher.match(ingredient.name, inventory)

        available = Decimal("0")
        if inventory_item:
            available, available_unit = convert_to_base_unit(inventory_item.quantity, inventory_item.unit)
            if available_unit != ingredient.base_unit:
                logger.debug(
                    f"'{ingredient.name}' needed in {ingredient.base_unit} "
                    f"but stocked as '{inventory_item.item}' in {available_unit}"
                )

        result = classify_shortage(ingredient.base_quantity, available, production_date, today)
        if result.status == ShortageStatus.SUFFICIENT:
            continue

        shortages.append(ShortageResult(
            ingredient=ingredient.name,
            inventory_item=inventory_item.item if inventory_item else None,
            required=round_quantity(ingredient.base_quantity),
            available=round_quantity(available),
            shortfall=round_quantity(result.shortfall),
            unit=ingredient.base_unit,
            status=result.status,
            priority=result.priority,
            affected_recipes=ingredient.affected_recipes,
            affected_items=ingredient.affected_items,
            production_date=production_date,
        ))

    return shortages
