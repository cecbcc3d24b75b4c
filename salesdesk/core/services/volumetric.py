"""
Pricing calculator for line items and add-ons.

Pure functions with no side effects. Inputs that cannot be priced yet
(blank, non-numeric, non-positive) yield 0 instead of raising, so a total
degrades to a visible, correctable zero rather than NaN.

Custom-cut goods are priced by estimated mass: the catalog reference shape
and weight give a density, which is applied to the requested shape.
"""

from dataclasses import dataclass
from typing import Any

from salesdesk.core.coercion import round_half_up, to_optional_number
from salesdesk.core.entities.estimation import AddOnLineItem, LineItem


@dataclass
class RateBoundCheck:
    """Outcome of checking an effective rate against catalog bounds."""

    invalid: bool  # below min cost, blocks finalization
    warning: bool  # above max cost, advisory only


def standard_total(rate: Any, quantity: Any) -> float:
    """Return ``rate * quantity``, or 0 when either is not a finite non-negative number."""
    rate_num = to_optional_number(rate)
    quantity_num = to_optional_number(quantity)
    if rate_num is None or quantity_num is None or rate_num < 0 or quantity_num < 0:
        return 0.0
    return rate_num * quantity_num


def volumetric_total(item: LineItem | AddOnLineItem) -> float:
    """
    Price ``item`` by estimated weight.

    density = base_weight / (base_length * base_width * base_thickness)
    weight = length * width * thickness * density
    total = round2(weight * rate * quantity)

    Returns 0 when any input fails to parse, any quantity / dimension /
    reference value is not positive, the rate is negative, or the reference
    volume is zero.
    """
    rate = to_optional_number(item.rate)
    parsed = [
        to_optional_number(v)
        for v in (
            item.quantity,
            item.length,
            item.width,
            item.thickness,
            item.base_product_weight,
            item.base_product_default_length,
            item.base_product_default_width,
            item.base_product_default_thickness,
        )
    ]
    if rate is None or rate < 0:
        return 0.0
    values = [v for v in parsed if v is not None and v > 0]
    if len(values) != len(parsed):
        return 0.0

    quantity, length, width, thickness, base_weight, base_length, base_width, base_thickness = values

    base_volume = base_length * base_width * base_thickness
    if base_volume == 0:
        return 0.0

    density = base_weight / base_volume
    custom_volume = length * width * thickness
    estimated_weight = custom_volume * density
    return round_half_up(estimated_weight * rate * quantity)


def resolve_effective_rate(user_override: Any, catalog_default: Any) -> float:
    """Use the override when present and numeric, else the catalog default (0 if unparsable)."""
    if user_override is not None and str(user_override).strip() != "":
        override = to_optional_number(user_override)
        if override is not None:
            return override
    default = to_optional_number(catalog_default)
    return default if default is not None else 0.0


def validate_rate_bounds(rate: float, min_cost: float, max_cost: float) -> RateBoundCheck:
    """Check ``rate`` against catalog bounds; a bound of 0 means unbounded."""
    return RateBoundCheck(
        invalid=min_cost > 0 and rate < min_cost,
        warning=max_cost > 0 and rate > max_cost,
    )
