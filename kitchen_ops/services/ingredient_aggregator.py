"""Sum flattened ingredient requirements per ingredient and base unit."""
from dataclasses import dataclass, field
from decimal import Decimal

from kitchen_ops.services.recipe_flattener import FlattenedIngredient


@dataclass
class IngredientSource:
    """One contribution to an aggregated requirement."""
    recipe: str
    production_item: str
    quantity: Decimal


@dataclass
class AggregatedIngredient:
    """Total requirement for one ingredient in one base unit."""
    name: str
    total_quantity: Decimal
    unit: str
    base_quantity: Decimal
    base_unit: str
    sources: list[IngredientSource] = field(default_factory=list)

    @property
    def affected_recipes(self) -> list[str]:
        return list(dict.fromkeys(s.recipe for s in self.sources))

    @property
    def affected_items(self) -> list[str]:
        return list(dict.fromkeys(s.production_item for s in self.sources))


def aggregation_key(name: str, base_unit: str) -> str:
    """Ingredients aggregate together when name (case-insensitive) and base unit match."""
    return f"{name.lower()}:{base_unit}"


def aggregate_ingredients(ingredients: list[FlattenedIngredient]) -> list[AggregatedIngredient]:
    """Merge flattened ingredients into one total per ingredient.

    The same name in two different base units (e.g. eggs counted and eggs
    weighed) stays as two separate totals. Sources are kept in full, so an
    ingredient used twice by the same recipe lists that recipe twice.
    """
    aggregated: dict[str, AggregatedIngredient] = {}

    for ingredient in ingredients:
        key = aggregation_key(ingredient.name, ingredient.base_unit)
        source = IngredientSource(
            recipe=ingredient.source_recipe,
            production_item=ingredient.source_production_item,
            quantity=ingredient.quantity,
        )

        existing = aggregated.get(key)
        if existing:
            existing.base_quantity += ingredient.base_quantity
            existing.total_quantity += ingredient.quantity
            existing.sources.append(source)
        else:
            aggregated[key] = AggregatedIngredient(
                name=ingredient.name,
                total_quantity=ingredient.quantity,
                unit=ingredient.unit,
                base_quantity=ingredient.base_quantity,
                base_unit=ingredient.base_unit,
                sources=[source],
            )

    return list(aggregated.values())
