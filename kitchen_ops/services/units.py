"""Unit conversion for comparing recipe quantities against stock counts.

Every quantity is converted to one of three base units before comparison:
- Weight: grams (GM)
- Volume: milliliters (ML)
- Count: UNIT

Units that are not recognized pass through unchanged so a check can still
compare an ingredient against stock counted in the same odd unit.
"""
import logging
from decimal import Decimal
from enum import Enum
from typing import NamedTuple, Optional, Union

logger = logging.getLogger(__name__)


class BaseUnit(str, Enum):
    """Base units that required and available quantities are compared in."""
    GRAM = "GM"
    MILLILITER = "ML"
    UNIT = "UNIT"


# Unit -> (factor to base unit, base unit)
UNIT_CONVERSIONS: dict[str, tuple[Decimal, BaseUnit]] = {
    # Weight
    "GM": (Decimal("1"), BaseUnit.GRAM),
    "G": (Decimal("1"), BaseUnit.GRAM),
    "KG": (Decimal("1000"), BaseUnit.GRAM),
    "LB": (Decimal("453.592"), BaseUnit.GRAM),
    "OZ": (Decimal("28.3495"), BaseUnit.GRAM),
    # Volume
    "ML": (Decimal("1"), BaseUnit.MILLILITER),
    "L": (Decimal("1000"), BaseUnit.MILLILITER),
    "LITER": (Decimal("1000"), BaseUnit.MILLILITER),
    "LITRE": (Decimal("1000"), BaseUnit.MILLILITER),
    "CUP": (Decimal("240"), BaseUnit.MILLILITER),
    "TBSP": (Decimal("15"), BaseUnit.MILLILITER),
    "TSP": (Decimal("5"), BaseUnit.MILLILITER),
    # Count
    "UNIT": (Decimal("1"), BaseUnit.UNIT),
    "PIECE": (Decimal("1"), BaseUnit.UNIT),
    "EA": (Decimal("1"), BaseUnit.UNIT),
    "UNITS": (Decimal("1"), BaseUnit.UNIT),
}

# Upper bound for any converted quantity; keeps runaway sub-recipe
# multipliers from overflowing the shortage columns.
MAX_BASE_QUANTITY = Decimal("100000000000")


class BaseQuantity(NamedTuple):
    """A quantity expressed in its base unit."""
    base_quantity: Decimal
    base_unit: str


def to_decimal(value: Union[Decimal, int, float, str, None]) -> Decimal:
    """Coerce a stored or JSON quantity to Decimal, treating junk as zero."""
    if value is None:
        return Decimal("0")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except ArithmeticError:
        return Decimal("0")
    return Decimal("0") if result.is_nan() else result


def normalize_unit(unit: Optional[str]) -> str:
    """Normalize unit string for lookup.

    Args:
        unit: Raw unit string from a recipe or stock count

    Returns:
        Trimmed uppercase unit string
    """
    return (unit or "").strip().upper()


def get_base_unit(unit: Optional[str]) -> Optional[BaseUnit]:
    """Return the base unit a unit converts to, or None if unknown."""
    conversion = UNIT_CONVERSIONS.get(normalize_unit(unit))
    return conversion[1] if conversion else None


def convert_to_base_unit(quantity: Union[Decimal, int, float, str], unit: Optional[str]) -> BaseQuantity:
    """Convert a quantity to its base unit (GM/ML/UNIT).

    Args:
        quantity: Amount to convert
        unit: Source unit (e.g., "KG", "tbsp", "ea")

    Returns:
        BaseQuantity. Unknown units are returned unconverted with the
        normalized unit string as the base unit.
    """
    quantity = to_decimal(quantity)
    normalized = normalize_unit(unit)
    conversion = UNIT_CONVERSIONS.get(normalized)

    if conversion is None:
        logger.warning(f"Unknown unit: {unit}, keeping original")
        base_quantity, base_unit = quantity, normalized
    else:
        factor, base = conversion
        base_quantity, base_unit = quantity * factor, base.value

    if base_quantity > MAX_BASE_QUANTITY:
        logger.warning(
            f"Extremely large quantity detected: {base_quantity} {base_unit}, "
            f"capping at {MAX_BASE_QUANTITY}"
        )
        base_quantity = MAX_BASE_QUANTITY

    return BaseQuantity(base_quantity, base_unit)
