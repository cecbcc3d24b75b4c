"""Unit tests for the volumetric pricing calculator."""

import pytest

from salesdesk.core.entities.estimation import AddOnLineItem, LineItem, LineItemKind
from salesdesk.core.services.volumetric import (
    resolve_effective_rate,
    standard_total,
    validate_rate_bounds,
    volumetric_total,
)


def make_custom_item(**overrides) -> LineItem:
    fields = {
        "id": "7-24x13x1",
        "kind": LineItemKind.CUSTOM,
        "base_product_id": "7",
        "quantity": 2,
        "length": "24",
        "width": "13",
        "thickness": "1",
        "rate": 500,
        "base_product_weight": "120",
        "base_product_default_length": "48",
        "base_product_default_width": "26",
        "base_product_default_thickness": "1",
    }
    fields.update(overrides)
    return LineItem(**fields)


class TestStandardTotal:
    def test_rate_times_quantity(self):
        assert standard_total(250.0, 4) == 1000.0

    def test_numeric_strings(self):
        assert standard_total("1,250.50", " 2 ") == 2501.0

    @pytest.mark.parametrize(
        "rate,quantity",
        [(-1, 2), (10, -2), ("abc", 2), (10, None), (float("nan"), 1), (10, float("inf"))],
    )
    def test_not_computable_returns_zero(self, rate, quantity):
        assert standard_total(rate, quantity) == 0.0

    def test_zero_quantity_is_zero(self):
        assert standard_total(100, 0) == 0.0


class TestVolumetricTotal:
    def test_reference_scenario(self):
        """48x26x1 weighing 120 scaled to 24x13x1, 500/kg, quantity 2."""
        assert volumetric_total(make_custom_item()) == 30000.00

    def test_proportional_to_quantity(self):
        single = volumetric_total(make_custom_item(quantity=1))
        double = volumetric_total(make_custom_item(quantity=2))
        assert double == pytest.approx(single * 2)

    def test_proportional_to_rate(self):
        base = volumetric_total(make_custom_item(rate=100))
        triple = volumetric_total(make_custom_item(rate=300))
        assert triple == pytest.approx(base * 3)

    def test_zero_rate_is_zero(self):
        assert volumetric_total(make_custom_item(rate=0)) == 0.0

    def test_negative_rate_is_zero(self):
        assert volumetric_total(make_custom_item(rate=-5)) == 0.0

    @pytest.mark.parametrize(
        "field",
        [
            "base_product_default_length",
            "base_product_default_width",
            "base_product_default_thickness",
        ],
    )
    def test_zero_base_volume_is_zero(self, field):
        assert volumetric_total(make_custom_item(**{field: "0"})) == 0.0

    @pytest.mark.parametrize(
        "field,value",
        [
            ("length", ""),
            ("width", "abc"),
            ("thickness", "-1"),
            ("base_product_weight", "0"),
            ("quantity", 0),
        ],
    )
    def test_unparsable_or_non_positive_input_is_zero(self, field, value):
        assert volumetric_total(make_custom_item(**{field: value})) == 0.0

    def test_rounds_half_up_to_two_decimals(self):
        # density 1 per unit volume: weight 1.5, rate 0.67 -> 1.005
        item = make_custom_item(
            quantity=1,
            length="1.5",
            width="1",
            thickness="1",
            rate=0.67,
            base_product_weight="1",
            base_product_default_length="1",
            base_product_default_width="1",
            base_product_default_thickness="1",
        )
        assert volumetric_total(item) == 1.01

    def test_prices_add_on_from_own_geometry(self):
        add_on = AddOnLineItem(
            id="31",
            quantity=1,
            rate=300,
            length="10",
            width="2",
            thickness="1",
            base_product_weight="4",
            base_product_default_length="10",
            base_product_default_width="2",
            base_product_default_thickness="1",
        )
        assert volumetric_total(add_on) == 1200.0


class TestResolveEffectiveRate:
    def test_override_wins(self):
        assert resolve_effective_rate("450", 500) == 450.0

    def test_blank_override_uses_default(self):
        assert resolve_effective_rate("  ", "500") == 500.0

    def test_none_override_uses_default(self):
        assert resolve_effective_rate(None, 500) == 500.0

    def test_unparsable_override_uses_default(self):
        assert resolve_effective_rate("cheap", 500) == 500.0

    def test_unparsable_default_is_zero(self):
        assert resolve_effective_rate(None, "n/a") == 0.0


class TestValidateRateBounds:
    def test_below_min_cost_is_invalid(self):
        check = validate_rate_bounds(40, 50, 0)
        assert check.invalid is True
        assert check.warning is False

    def test_above_max_cost_warns(self):
        check = validate_rate_bounds(120, 50, 100)
        assert check.invalid is False
        assert check.warning is True

    def test_within_bounds(self):
        check = validate_rate_bounds(75, 50, 100)
        assert not check.invalid
        assert not check.warning

    def test_zero_bounds_are_unbounded(self):
        check = validate_rate_bounds(1_000_000, 0, 0)
        assert not check.invalid
        assert not check.warning
