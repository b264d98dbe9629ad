"""Resolve recipe ingredient names to stock-count items."""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InventoryItem:
    """One counted item in the latest stock snapshot."""
    item: str
    quantity: Decimal
    unit: str
    inventory_date: Optional[date] = None


AliasLookup = Callable[[str], Optional[str]]


def _clean(name: str) -> str:
    return (name or "").lower().strip()


class InventoryMatcher:
    """First-match resolver: exact name, then alias table, then substring.

    Args:
        alias_lookup: Maps a lowercased recipe ingredient name to the
            inventory item name it is stocked as, or None when unmapped.
    """

    def __init__(self, alias_lookup: Optional[AliasLookup] = None):
        self.alias_lookup = alias_lookup

    def match(self, ingredient_name: str, inventory: list[InventoryItem]) -> Optional[InventoryItem]:
        normalized = _clean(ingredient_name)

        match = self._find_exact(normalized, inventory)
        if match:
            return match

        mapped_name = self.alias_lookup(normalized) if self.alias_lookup else None
        if mapped_name:
            match = self._find_exact(_clean(mapped_name), inventory)
            if match:
                return match
            logger.debug(f"Mapped item '{mapped_name}' for '{ingredient_name}' is not in stock")

        # Substring either way, e.g. "Cocoa Powder 500g Pack" ~ "Cocoa Powder"
        for item in inventory:
            item_name = _clean(item.item)
            if not item_name:
                continue
            if item_name in normalized or normalized in item_name:
                return item

        return None

    @staticmethod
    def _find_exact(normalized: str, inventory: list[InventoryItem]) -> Optional[InventoryItem]:
        for item in inventory:
            if _clean(item.item) == normalized:
                return item
        return None


def find_inventory_match(
    ingredient_name: str,
    inventory: list[InventoryItem],
    alias_lookup: Optional[AliasLookup] = None,
) -> Optional[InventoryItem]:
    """Match a single ingredient without building a matcher."""
    return InventoryMatcher(alias_lookup).match(ingredient_name, inventory)
