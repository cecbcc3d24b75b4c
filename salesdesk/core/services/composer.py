"""
Line item composer.

Owns the two line item collections of an ``EstimationDocument`` and the
add-ons nested under them. Every mutation is synchronous and immediately
recomputes the totals it affects, so no line item total is ever stale.

Business-rule rejections (duplicates, non-positive quantities or
dimensions) leave the document unchanged and are reported through
``MutationResult``. Addressing an id that does not exist is an integration
bug and raises ``LineItemNotFoundError`` / ``AddOnNotFoundError``.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from salesdesk.config import CodeSettings, PricingSettings, get_logger, get_settings
from salesdesk.core.coercion import (
    is_positive_number,
    to_number,
    to_optional_number,
    to_trimmed_string,
)
from salesdesk.core.entities.catalog import CatalogBaseProduct
from salesdesk.core.entities.estimation import (
    AddOnLineItem,
    BankDetails,
    CustomerInfo,
    EstimationDocument,
    LineItem,
    LineItemKind,
    TemplateType,
    TermsDetails,
)
from salesdesk.core.exceptions import AddOnNotFoundError, LineItemNotFoundError
from salesdesk.core.services.volumetric import (
    RateBoundCheck,
    resolve_effective_rate,
    standard_total,
    validate_rate_bounds,
    volumetric_total,
)

logger = get_logger(__name__)


class Rejection(str, Enum):
    """Why a composer mutation was not applied."""

    DUPLICATE_LINE_ITEM = "duplicate_line_item"
    DUPLICATE_SIZE = "duplicate_size"
    DUPLICATE_ADD_ON = "duplicate_add_on"
    INVALID_QUANTITY = "invalid_quantity"
    INVALID_DIMENSIONS = "invalid_dimensions"
    INVALID_AMOUNT = "invalid_amount"


@dataclass
class MutationResult:
    """Outcome of a composer mutation."""

    applied: bool
    rejection: Rejection | None = None
    message: str = ""
    item: LineItem | AddOnLineItem | None = None
    rate_check: RateBoundCheck | None = None

    @classmethod
    def ok(
        cls,
        item: LineItem | AddOnLineItem | None = None,
        rate_check: RateBoundCheck | None = None,
    ) -> "MutationResult":
        return cls(applied=True, item=item, rate_check=rate_check)

    @classmethod
    def rejected(cls, rejection: Rejection, message: str) -> "MutationResult":
        logger.info("composer_mutation_rejected", rejection=rejection.value, reason=message)
        return cls(applied=False, rejection=rejection, message=message)


def _positive(value: Any) -> float | None:
    number = to_optional_number(value)
    if number is None or number <= 0:
        return None
    return number


def _dimension_key(length: str, width: str, thickness: str) -> tuple[float, float, float]:
    """Numeric identity of a size, so "24" and "24.0" compare equal."""
    return (to_number(length), to_number(width), to_number(thickness))


def custom_line_item_id(base_product_id: str, size: str) -> str:
    """Stable id of a custom line item: ``"{baseProductId}-{size without spaces}"``."""
    return f"{base_product_id}-{''.join(size.split())}"


class LineItemComposer:
    """
    Maintains standard and custom line items of one document.

    The composer is the only writer of line item totals: standard items are
    priced ``rate * quantity``, custom items and every add-on by estimated
    weight using their own geometry snapshot.
    """

    def __init__(
        self,
        document: EstimationDocument | None = None,
        codes: CodeSettings | None = None,
        pricing: PricingSettings | None = None,
    ):
        settings = get_settings() if codes is None or pricing is None else None
        self._codes = codes or settings.codes
        self._pricing = pricing or settings.pricing
        self._document = document if document is not None else self._empty_document()

    @property
    def document(self) -> EstimationDocument:
        return self._document

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_line_item(self, line_item_id: str) -> LineItem:
        item = self._document.find_line_item(line_item_id)
        if item is None:
            raise LineItemNotFoundError(line_item_id)
        return item

    def get_add_on(self, parent_id: str, add_on_id: str) -> AddOnLineItem:
        parent = self.get_line_item(parent_id)
        add_on = parent.find_add_on(add_on_id)
        if add_on is None:
            raise AddOnNotFoundError(parent_id, add_on_id)
        return add_on

    def _product_code(self, prefix: str, product_id: str) -> str:
        return f"{prefix}-{product_id.zfill(self._codes.code_width)}"

    # ------------------------------------------------------------------
    # Standard line items
    # ------------------------------------------------------------------

    def add_standard_line_item(
        self,
        product: CatalogBaseProduct,
        quantity: Any = 1,
        *,
        rate_override: Any = None,
        combo_name: str = "",
        category_name: str = "",
        remark: str | None = None,
    ) -> MutationResult:
        """Add a catalog product priced per unit; one line per catalog id."""
        if any(p.base_product_id == product.id for p in self._document.standard_line_items):
            return MutationResult.rejected(
                Rejection.DUPLICATE_LINE_ITEM,
                f'Product "{product.name}" already exists and will not be added again.',
            )
        quantity_num = _positive(quantity)
        if quantity_num is None:
            return MutationResult.rejected(
                Rejection.INVALID_QUANTITY, "Quantity must be a positive number."
            )

        rate = resolve_effective_rate(rate_override, product.rate_per_unit)
        item = LineItem(
            id=product.id,
            kind=LineItemKind.STANDARD,
            base_product_id=product.id,
            code=self._product_code(self._codes.standard_prefix, product.id),
            product_name=product.name,
            combo_name=combo_name,
            category_name=category_name,
            quantity=quantity_num,
            rate=rate,
            min_cost=product.min_cost,
            max_cost=product.max_cost,
            total_amount=standard_total(rate, quantity_num),
            remark=remark if remark is not None else product.remark,
            base_product_weight=product.default_weight or "0",
            base_product_default_length=product.default_length or "0",
            base_product_default_width=product.default_width or "0",
            base_product_default_thickness=product.default_thickness or "0",
        )
        self._document.standard_line_items.append(item)

        logger.info(
            "line_item_added",
            kind=item.kind.value,
            line_item_id=item.id,
            total=item.total_amount,
        )
        return MutationResult.ok(item, validate_rate_bounds(rate, item.min_cost, item.max_cost))

    def add_standard_line_items(
        self,
        products: Iterable[CatalogBaseProduct],
        quantity: Any = 1,
        *,
        rate_overrides: dict[str, Any] | None = None,
        combo_name: str = "",
        category_name: str = "",
        remark: str | None = None,
    ) -> list[MutationResult]:
        """Add several products of one combo/category; duplicates are reported per product."""
        overrides = rate_overrides or {}
        return [
            self.add_standard_line_item(
                product,
                quantity,
                rate_override=overrides.get(product.id),
                combo_name=combo_name,
                category_name=category_name,
                remark=remark,
            )
            for product in products
        ]

    # ------------------------------------------------------------------
    # Custom line items
    # ------------------------------------------------------------------

    def find_custom_size(
        self, base_product_id: str, length: str, width: str, thickness: str
    ) -> LineItem | None:
        """Custom item of the same product whose size is numerically equal, if any."""
        key = _dimension_key(length, width, thickness)
        for item in self._document.custom_line_items:
            if item.base_product_id != base_product_id:
                continue
            if _dimension_key(item.length, item.width, item.thickness) == key:
                return item
        return None

    def add_custom_line_item(
        self,
        product: CatalogBaseProduct,
        quantity: Any,
        length: Any,
        width: Any,
        thickness: Any,
        rate_override: Any = None,
        *,
        combo_name: str = "",
        category_name: str = "",
        remark: str | None = None,
    ) -> MutationResult:
        """Add a custom-cut product priced by estimated weight."""
        length_s, width_s, thickness_s = (
            to_trimmed_string(length),
            to_trimmed_string(width),
            to_trimmed_string(thickness),
        )
        quantity_num = _positive(quantity)
        if quantity_num is None:
            return MutationResult.rejected(
                Rejection.INVALID_QUANTITY, "Quantity must be a positive number."
            )
        if not all(is_positive_number(d) for d in (length_s, width_s, thickness_s)):
            return MutationResult.rejected(
                Rejection.INVALID_DIMENSIONS, "Length, width and thickness must be positive."
            )
        if self.find_custom_size(product.id, length_s, width_s, thickness_s) is not None:
            return MutationResult.rejected(
                Rejection.DUPLICATE_SIZE,
                f'A custom product "{product.name}" with size '
                f"{length_s} x {width_s} x {thickness_s} already exists.",
            )

        rate = resolve_effective_rate(rate_override, product.rate_per_kg)
        item = LineItem(
            id="",
            kind=LineItemKind.CUSTOM,
            base_product_id=product.id,
            code=self._product_code(self._codes.custom_prefix, product.id),
            product_name=product.name,
            combo_name=combo_name,
            category_name=category_name,
            quantity=quantity_num,
            length=length_s,
            width=width_s,
            thickness=thickness_s,
            rate=rate,
            min_cost=product.min_cost,
            max_cost=product.max_cost,
            remark=remark if remark is not None else product.remark,
            base_product_weight=product.default_weight or "0",
            base_product_default_length=product.default_length or "0",
            base_product_default_width=product.default_width or "0",
            base_product_default_thickness=product.default_thickness or "0",
        )
        item.id = custom_line_item_id(product.id, item.size)
        item.total_amount = volumetric_total(item)
        self._document.custom_line_items.append(item)

        logger.info(
            "line_item_added",
            kind=item.kind.value,
            line_item_id=item.id,
            size=item.size,
            total=item.total_amount,
        )
        return MutationResult.ok(item, validate_rate_bounds(rate, item.min_cost, item.max_cost))

    def update_custom_line_item_size(
        self, line_item_id: str, length: Any, width: Any, thickness: Any
    ) -> MutationResult:
        """Resize a custom item; its id is re-derived from the new size."""
        item = self.get_line_item(line_item_id)
        if not item.is_custom:
            raise LineItemNotFoundError(line_item_id)

        length_s, width_s, thickness_s = (
            to_trimmed_string(length),
            to_trimmed_string(width),
            to_trimmed_string(thickness),
        )
        if not all(is_positive_number(d) for d in (length_s, width_s, thickness_s)):
            return MutationResult.rejected(
                Rejection.INVALID_DIMENSIONS, "Length, width and thickness must be positive."
            )
        clash = self.find_custom_size(item.base_product_id, length_s, width_s, thickness_s)
        if clash is not None and clash is not item:
            return MutationResult.rejected(
                Rejection.DUPLICATE_SIZE,
                f'A custom product "{item.product_name}" with size '
                f"{length_s} x {width_s} x {thickness_s} already exists.",
            )

        item.length, item.width, item.thickness = length_s, width_s, thickness_s
        item.id = custom_line_item_id(item.base_product_id, item.size)
        item.total_amount = volumetric_total(item)
        return MutationResult.ok(item)

    # ------------------------------------------------------------------
    # Shared line item operations
    # ------------------------------------------------------------------

    def remove_line_item(self, line_item_id: str) -> LineItem:
        """Delete a line item together with its add-ons."""
        item = self.get_line_item(line_item_id)
        collection = (
            self._document.custom_line_items
            if item.is_custom
            else self._document.standard_line_items
        )
        collection.remove(item)
        logger.info("line_item_removed", line_item_id=line_item_id, add_ons=len(item.add_ons))
        return item

    def update_line_item_quantity(self, line_item_id: str, new_quantity: Any) -> MutationResult:
        """Change quantity and reprice with the item's own formula."""
        item = self.get_line_item(line_item_id)
        quantity_num = _positive(new_quantity)
        if quantity_num is None:
            return MutationResult.rejected(
                Rejection.INVALID_QUANTITY, "Quantity must be a positive number."
            )
        item.quantity = quantity_num
        self._reprice(item)
        return MutationResult.ok(item)

    def update_badge_text(
        self, parent_id: str, text: str, add_on_id: str | None = None
    ) -> MutationResult:
        """Set the free-text note shown under a line item or one of its add-ons."""
        target: LineItem | AddOnLineItem
        if add_on_id is None:
            target = self.get_line_item(parent_id)
        else:
            target = self.get_add_on(parent_id, add_on_id)
        target.custom_badge_text = text
        return MutationResult.ok(target)

    def _reprice(self, item: LineItem) -> None:
        if item.is_custom:
            item.total_amount = volumetric_total(item)
        else:
            item.total_amount = standard_total(item.rate, item.quantity)

    # ------------------------------------------------------------------
    # Add-ons
    # ------------------------------------------------------------------

    def add_add_on(
        self,
        parent_id: str,
        product: CatalogBaseProduct,
        quantity: Any = 1,
        *,
        length: Any = None,
        width: Any = None,
        thickness: Any = None,
        rate_override: Any = None,
        remark: str | None = None,
    ) -> MutationResult:
        """
        Attach an add-on priced by weight from its own catalog geometry.

        Requested dimensions default to the add-on's catalog dimensions; a
        catalog reference dimension left blank falls back to the requested one.
        """
        parent = self.get_line_item(parent_id)
        if parent.find_add_on(product.id) is not None:
            return MutationResult.rejected(
                Rejection.DUPLICATE_ADD_ON,
                f'Product "{product.name}" has already been added.',
            )
        quantity_num = _positive(quantity)
        if quantity_num is None:
            return MutationResult.rejected(
                Rejection.INVALID_QUANTITY, "Quantity must be a positive number."
            )

        length_s = to_trimmed_string(length) if length is not None else product.default_length
        width_s = to_trimmed_string(width) if width is not None else product.default_width
        thickness_s = (
            to_trimmed_string(thickness) if thickness is not None else product.default_thickness
        )
        if not all(is_positive_number(d) for d in (length_s, width_s, thickness_s)):
            return MutationResult.rejected(
                Rejection.INVALID_DIMENSIONS, "Length, width and thickness must be positive."
            )

        rate = resolve_effective_rate(rate_override, product.rate_per_kg)
        add_on = AddOnLineItem(
            id=product.id,
            code=self._product_code(self._codes.addon_prefix, product.id),
            product_name=product.name,
            quantity=quantity_num,
            rate=rate,
            length=length_s,
            width=width_s,
            thickness=thickness_s,
            min_cost=product.min_cost,
            max_cost=product.max_cost,
            remark=remark if remark is not None else product.remark,
            base_product_weight=product.default_weight or "0",
            base_product_default_length=product.default_length or length_s,
            base_product_default_width=product.default_width or width_s,
            base_product_default_thickness=product.default_thickness or thickness_s,
        )
        add_on.total_amount = volumetric_total(add_on)
        parent.add_ons.append(add_on)

        logger.info(
            "add_on_added",
            parent_id=parent_id,
            add_on_id=add_on.id,
            total=add_on.total_amount,
        )
        return MutationResult.ok(add_on, validate_rate_bounds(rate, add_on.min_cost, add_on.max_cost))

    def remove_add_on(self, parent_id: str, add_on_id: str) -> AddOnLineItem:
        parent = self.get_line_item(parent_id)
        add_on = self.get_add_on(parent_id, add_on_id)
        parent.add_ons.remove(add_on)
        return add_on

    def update_add_on_quantity(
        self, parent_id: str, add_on_id: str, new_quantity: Any
    ) -> MutationResult:
        """Change an add-on's quantity and reprice it from its own snapshot."""
        add_on = self.get_add_on(parent_id, add_on_id)
        quantity_num = _positive(new_quantity)
        if quantity_num is None:
            return MutationResult.rejected(
                Rejection.INVALID_QUANTITY, "Quantity must be a positive number."
            )
        add_on.quantity = quantity_num
        add_on.total_amount = volumetric_total(add_on)
        return MutationResult.ok(add_on)

    # ------------------------------------------------------------------
    # Document-level state
    # ------------------------------------------------------------------

    def recompute_all(self) -> None:
        """Reprice every line item and add-on from its inputs."""
        for item in self._document.line_items:
            self._reprice(item)
            for add_on in item.add_ons:
                add_on.total_amount = volumetric_total(add_on)

    def set_amounts(
        self, gst_percent: Any = None, discount_percent: Any = None
    ) -> MutationResult:
        """Update tax / discount percents; None leaves a value unchanged."""
        updates: dict[str, float] = {}
        for field, value in (("gst_percent", gst_percent), ("discount_percent", discount_percent)):
            if value is None:
                continue
            number = to_optional_number(value)
            if number is None or number < 0:
                return MutationResult.rejected(
                    Rejection.INVALID_AMOUNT, f"{field} must be a non-negative number."
                )
            updates[field] = number
        for field, number in updates.items():
            setattr(self._document, field, number)
        return MutationResult.ok()

    def set_customer_info(self, customer: CustomerInfo) -> None:
        self._document.customer_info = customer

    def set_bank_info(self, bank: BankDetails) -> None:
        self._document.bank_info = bank

    def set_terms_info(self, terms: TermsDetails) -> None:
        self._document.terms_info = terms

    def set_template_type(self, template_type: TemplateType) -> None:
        self._document.template_type = template_type

    def _empty_document(self, **context: Any) -> EstimationDocument:
        return EstimationDocument(
            gst_percent=self._pricing.default_gst_percent,
            discount_percent=self._pricing.default_discount_percent,
            **context,
        )

    def new_estimation(self, lead_id: int | None = None, phone: str = "") -> EstimationDocument:
        """Start a fresh document for a lead, pre-filling the customer phone."""
        self._document = self._empty_document(
            lead_id=lead_id,
            customer_info=CustomerInfo(phone=phone) if phone else None,
        )
        logger.info("estimation_started", lead_id=lead_id)
        return self._document

    def reset(self) -> None:
        """Discard the document and start over with an empty one."""
        self._document = self._empty_document()
