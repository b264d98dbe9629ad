"""Tests for kitchen_ops/services/recipe_flattener.py - recursive recipe expansion."""
from decimal import Decimal

from kitchen_ops.services.recipe_flattener import (
    IngredientLine,
    SubRecipeLine,
    flatten_recipe,
    order_entries,
)


class FakeRecipes:
    """In-memory recipe source that records lookups."""

    def __init__(self, recipes):
        self.recipes = recipes
        self.lookups = []

    def get_lines(self, recipe_name):
        self.lookups.append(recipe_name)
        return self.recipes.get(recipe_name, [])


def ing(name, quantity, unit="GM"):
    return IngredientLine(name=name, quantity=Decimal(str(quantity)), unit=unit)


def sub(name, quantity, unit="UNIT"):
    return SubRecipeLine(name=name, quantity=Decimal(str(quantity)), unit=unit)


class TestFlattenRecipe:
    def test_plain_ingredients_scaled_by_production_quantity(self):
        recipes = FakeRecipes({"Brownies 1 KG": [ing("Butter", 200), ing("Sugar", "0.3", "KG")]})

        result = flatten_recipe(recipes, "Brownies 1 KG", Decimal("2"), "Brownies 1 KG")

        by_name = {r.name: r for r in result}
        assert by_name["Butter"].quantity == Decimal("400")
        assert by_name["Butter"].base_quantity == Decimal("400")
        assert by_name["Butter"].base_unit == "GM"
        assert by_name["Sugar"].quantity == Decimal("0.6")
        assert by_name["Sugar"].base_quantity == Decimal("600")
        assert by_name["Sugar"].source_recipe == "Brownies 1 KG"
        assert by_name["Sugar"].source_production_item == "Brownies 1 KG"

    def test_sub_recipe_quantities_multiply_down_the_tree(self):
        recipes = FakeRecipes({
            "Cake": [sub("Frosting", "0.5"), ing("Eggs", 4, "EA")],
            "Frosting": [ing("Icing Sugar", 100)],
        })

        result = flatten_recipe(recipes, "Cake", Decimal("3"), "Cake")

        by_name = {r.name: r for r in result}
        assert by_name["Icing Sugar"].base_quantity == Decimal("150")
        assert by_name["Eggs"].base_quantity == Decimal("12")
        assert by_name["Eggs"].base_unit == "UNIT"

    def test_sub_recipe_source_path(self):
        recipes = FakeRecipes({
            "Cake": [sub("Frosting", 1)],
            "Frosting": [sub("Sugar Syrup", 1)],
            "Sugar Syrup": [ing("Sugar", 50)],
        })

        result = flatten_recipe(recipes, "Cake", Decimal("1"), "Cake Tray")

        assert len(result) == 1
        assert result[0].source_recipe == "Cake > Frosting > Sugar Syrup"
        assert result[0].source_production_item == "Cake Tray"

    def test_sub_recipes_expanded_before_plain_ingredients(self):
        recipes = FakeRecipes({
            "Cake": [ing("Eggs", 1, "EA"), sub("Frosting", 1)],
            "Frosting": [ing("Butter", 10)],
        })

        result = flatten_recipe(recipes, "Cake", Decimal("1"), "Cake")

        assert [r.name for r in result] == ["Butter", "Eggs"]

    def test_unknown_recipe_is_empty(self):
        recipes = FakeRecipes({})
        assert flatten_recipe(recipes, "Nope", Decimal("1"), "Nope") == []

    def test_self_reference_terminates(self):
        recipes = FakeRecipes({"A": [sub("A", 1), ing("Sugar", 10)]})

        result = flatten_recipe(recipes, "A", Decimal("1"), "A")

        assert [r.name for r in result] == ["Sugar"]
        assert recipes.lookups == ["A"]

    def test_indirect_cycle_terminates(self):
        recipes = FakeRecipes({
            "A": [sub("B", 1), ing("Flour", 5)],
            "B": [sub("A", 1), ing("Salt", 1)],
        })

        result = flatten_recipe(recipes, "A", Decimal("1"), "A")

        assert sorted(r.name for r in result) == ["Flour", "Salt"]

    def test_max_depth_bounds_expansion(self):
        chain = {f"R{i}": [sub(f"R{i + 1}", 1), ing(f"Ing{i}", 1)] for i in range(20)}
        recipes = FakeRecipes(chain)

        result = flatten_recipe(recipes, "R0", Decimal("1"), "R0", max_depth=10)

        assert len(result) == 10
        assert {r.name for r in result} == {f"Ing{i}" for i in range(10)}

    def test_sibling_branches_may_share_a_sub_recipe(self):
        recipes = FakeRecipes({
            "Cake": [sub("Frosting", 1), sub("Sponge", 1)],
            "Frosting": [sub("Sugar Syrup", 1)],
            "Sponge": [sub("Sugar Syrup", 2)],
            "Sugar Syrup": [ing("Sugar", 10)],
        })

        result = flatten_recipe(recipes, "Cake", Decimal("1"), "Cake")

        assert len(result) == 2
        paths = {r.source_recipe: r.base_quantity for r in result}
        assert paths == {
            "Cake > Frosting > Sugar Syrup": Decimal("10"),
            "Cake > Sponge > Sugar Syrup": Decimal("20"),
        }

    def test_unknown_unit_kept_as_is(self):
        recipes = FakeRecipes({"Salad": [ing("Parsley", 2, "bunch")]})

        result = flatten_recipe(recipes, "Salad", Decimal("3"), "Salad")

        assert result[0].base_quantity == Decimal("6")
        assert result[0].base_unit == "BUNCH"


class TestOrderEntries:
    def test_sub_recipes_first_then_by_name(self):
        entries = [ing("Zest", 1), sub("Syrup", 1), ing("Apple", 1), sub("Base", 1)]
        assert [e.name for e in order_entries(entries)] == ["Base", "Syrup", "Apple", "Zest"]
