"""Flatten nested recipe trees into the raw ingredients they consume.

A recipe row is either a raw ingredient or a reference to another recipe.
Sub-recipes are expanded recursively, with every quantity scaled by the
amount being produced. Recipes are assumed to yield one unit, so the
production quantity is used directly as the multiplier.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from kitchen_ops.services.units import convert_to_base_unit

DEFAULT_MAX_DEPTH = 10


@dataclass(frozen=True)
class IngredientLine:
    """A recipe row naming a raw ingredient."""
    name: str
    quantity: Decimal
    unit: str
    kind: str = "ingredient"


@dataclass(frozen=True)
class SubRecipeLine:
    """A recipe row naming another recipe."""
    name: str
    quantity: Decimal
    unit: str
    kind: str = "subrecipe"


RecipeEntry = Union[IngredientLine, SubRecipeLine]


@dataclass
class FlattenedIngredient:
    """A raw ingredient requirement traced back to the recipe that uses it."""
    name: str
    quantity: Decimal  # Scaled quantity in the recipe's own unit
    unit: str
    base_quantity: Decimal  # Scaled quantity in GM/ML/UNIT
    base_unit: str
    source_recipe: str  # "Parent > Child" for sub-recipe ingredients
    source_production_item: str


def order_entries(entries: list[RecipeEntry]) -> list[RecipeEntry]:
    """Sub-recipe rows first, then ingredient rows, each by name."""
    return sorted(
        entries,
        key=lambda entry: (not isinstance(entry, SubRecipeLine), entry.name),
    )


def flatten_recipe(
    recipes,
    recipe_name: str,
    production_quantity: Decimal,
    production_item_name: str,
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
    visited: frozenset[str] = frozenset(),
) -> list[FlattenedIngredient]:
    """
    Expand a recipe into the raw ingredients needed to produce it.

    ``recipes`` is any object with ``get_lines(recipe_name) -> list[RecipeEntry]``.

    Recursion stops silently at ``max_depth`` or when a recipe reappears on
    the current path. The visited set is per path, so two sibling branches
    may both use the same sub-recipe.
    """
    if depth >= max_depth or recipe_name in visited:
        return []

    path = visited | {recipe_name}
    flattened: list[FlattenedIngredient] = []

    for entry in order_entries(recipes.get_lines(recipe_name)):
        scaled_quantity = entry.quantity * production_quantity

        if isinstance(entry, SubRecipeLine):
            children = flatten_recipe(
                recipes,
                entry.name,
                scaled_quantity,
                production_item_name,
                depth + 1,
                max_depth,
                path,
            )
            for child in children:
                child.source_recipe = f"{recipe_name} > {child.source_recipe}"
                flattened.append(child)
        else:
            base_quantity, base_unit = convert_to_base_unit(scaled_quantity, entry.unit)
            flattened.append(FlattenedIngredient(
                name=entry.name,
                quantity=scaled_quantity,
                unit=entry.unit,
                base_quantity=base_quantity,
                base_unit=base_unit,
                source_recipe=recipe_name,
                source_production_item=production_item_name,
            ))

    return flattened
