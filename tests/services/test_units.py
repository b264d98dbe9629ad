"""Tests for kitchen_ops/services/units.py - base unit conversion."""
from decimal import Decimal

import pytest

from kitchen_ops.services.units import (
    MAX_BASE_QUANTITY,
    BaseUnit,
    convert_to_base_unit,
    get_base_unit,
    normalize_unit,
    to_decimal,
)


# ============================================================================
# normalize_unit
# ============================================================================


class TestNormalizeUnit:
    def test_uppercase(self):
        assert normalize_unit("kg") == "KG"

    def test_strip_whitespace(self):
        assert normalize_unit("  tbsp  ") == "TBSP"

    def test_none(self):
        assert normalize_unit(None) == ""


# ============================================================================
# convert_to_base_unit
# ============================================================================


class TestConvertToBaseUnit:
    @pytest.mark.parametrize(
        "unit,factor,base",
        [
            ("GM", "1", "GM"),
            ("G", "1", "GM"),
            ("KG", "1000", "GM"),
            ("LB", "453.592", "GM"),
            ("OZ", "28.3495", "GM"),
            ("ML", "1", "ML"),
            ("L", "1000", "ML"),
            ("LITER", "1000", "ML"),
            ("LITRE", "1000", "ML"),
            ("CUP", "240", "ML"),
            ("TBSP", "15", "ML"),
            ("TSP", "5", "ML"),
            ("UNIT", "1", "UNIT"),
            ("PIECE", "1", "UNIT"),
            ("EA", "1", "UNIT"),
            ("UNITS", "1", "UNIT"),
        ],
    )
    def test_one_of_each_known_unit(self, unit, factor, base):
        result = convert_to_base_unit(1, unit)
        assert result.base_quantity == Decimal(factor)
        assert result.base_unit == base

    def test_case_and_whitespace_insensitive(self):
        result = convert_to_base_unit(Decimal("2"), " kg ")
        assert result.base_quantity == Decimal("2000")
        assert result.base_unit == BaseUnit.GRAM.value

    def test_scales_quantity(self):
        result = convert_to_base_unit(Decimal("1.5"), "L")
        assert result == (Decimal("1500"), "ML")

    def test_unknown_unit_passes_through(self):
        result = convert_to_base_unit(1, "bunch")
        assert result.base_quantity == Decimal("1")
        assert result.base_unit == "BUNCH"

    def test_unknown_unit_does_not_raise_on_empty(self):
        result = convert_to_base_unit(Decimal("3"), "")
        assert result == (Decimal("3"), "")

    def test_clamps_huge_quantities(self):
        result = convert_to_base_unit(Decimal("500000000"), "KG")
        assert result.base_quantity == MAX_BASE_QUANTITY
        assert result.base_unit == "GM"

    def test_value_at_cap_is_kept(self):
        result = convert_to_base_unit(MAX_BASE_QUANTITY, "GM")
        assert result.base_quantity == MAX_BASE_QUANTITY

    def test_accepts_floats(self):
        result = convert_to_base_unit(0.25, "KG")
        assert result.base_quantity == Decimal("250")


class TestGetBaseUnit:
    def test_known(self):
        assert get_base_unit("lb") == BaseUnit.GRAM
        assert get_base_unit("cup") == BaseUnit.MILLILITER
        assert get_base_unit("ea") == BaseUnit.UNIT

    def test_unknown(self):
        assert get_base_unit("bushel") is None


class TestToDecimal:
    def test_none_is_zero(self):
        assert to_decimal(None) == Decimal("0")

    def test_garbage_is_zero(self):
        assert to_decimal("n/a") == Decimal("0")

    def test_float_uses_repr(self):
        assert to_decimal(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", ["NaN", float("nan"), Decimal("NaN")])
    def test_nan_is_zero(self, value):
        assert to_decimal(value) == Decimal("0")

    def test_nan_quantity_converts_to_zero(self):
        assert convert_to_base_unit("NaN", "KG") == (Decimal("0"), "GM")
