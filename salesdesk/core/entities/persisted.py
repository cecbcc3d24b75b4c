"""
Persisted (wire) shapes of an estimation.

The persistence API is string-typed: monetary values, quantities and
geometry travel as strings and may arrive as numbers, nulls or blanks.
Read-side models accept anything and normalise scalars to trimmed strings;
numeric interpretation happens in the mapper through the coercion helpers.
Write-side models are what the engine hands to the persistence collaborator.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from salesdesk.core.coercion import to_trimmed_string


class WireModel(BaseModel):
    """Base for camelCase, string-typed wire records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def coerce_scalars(cls, v: Any, info: ValidationInfo) -> Any:
        """Turn numbers and nulls into trimmed strings for ``str`` fields."""
        if info.field_name is None or cls.model_fields[info.field_name].annotation is not str:
            return v
        return to_trimmed_string(v)


class LineRecordFields(WireModel):
    """Fields shared by persisted products and add-ons."""

    product_id: str = ""
    name: str = ""
    prod_code: str = ""
    size: str = ""
    specification: str = ""
    quantity: str = ""
    unit_price: str = ""
    total_price: str = ""
    notes: str = ""
    min_cost: str = ""
    max_cost: str = ""
    base_product_weight: str = ""
    base_product_default_length: str = ""
    base_product_default_width: str = ""
    base_product_default_thickness: str = ""


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------


class PersistedAddon(LineRecordFields):
    """Add-on row of a stored estimation product."""

    id: str = ""
    status: str = ""


class PersistedProduct(LineRecordFields):
    """Product row of a stored estimation."""

    id: str = ""
    est_id: str = ""
    serial_number: str = ""
    category: str = ""
    combo: str = ""
    status: str = ""
    addons: list[PersistedAddon] = Field(default_factory=list)

    @field_validator("addons", mode="before")
    @classmethod
    def coerce_addons(cls, v: Any) -> Any:
        return v or []


class EstimationHeaderFields(WireModel):
    """Header fields shared by stored records and outgoing payloads."""

    bank_id: str = ""
    term_id: str = ""
    reference_number: str = ""
    order_date: str = ""
    document_type: str = ""

    customer_name: str = ""
    customer_phone: str = ""
    customer_gstin: str = ""
    customer_email: str = ""
    customer_address1: str = ""
    customer_address2: str = ""
    customer_city: str = ""
    customer_state: str = ""
    customer_zip: str = ""
    customer_country: str = ""

    subtotal: str = ""
    discount: str = ""  # percent
    discount_amount: str = ""  # currency
    total_after_discount: str = ""
    tax_cgst: str = ""
    tax_sgst: str = ""
    tax_total: str = ""
    grand_total: str = ""
    gst_percent: str = ""  # absent on legacy records

    bank_account_holder: str = ""
    bank_name: str = ""
    bank_account_number: str = ""
    bank_account_type: str = ""
    bank_ifsc_code: str = ""
    bank_micr_code: str = ""
    bank_branch_name: str = ""

    terms_title: str = ""
    terms_description: str = ""


class PersistedEstimation(EstimationHeaderFields):
    """A stored estimation as returned by the persistence API."""

    id: str = ""
    lead_id: str = ""
    products: list[PersistedProduct] = Field(default_factory=list)

    @field_validator("products", mode="before")
    @classmethod
    def coerce_products(cls, v: Any) -> Any:
        return v or []

    @classmethod
    def from_payload(cls, payload: "EstimationPayload") -> "PersistedEstimation":
        """Read back an outgoing payload as if it had been stored."""
        data = payload.estimation.model_dump(by_alias=True)
        data["id"] = payload.estimation.estimation_id
        data["products"] = [p.model_dump(by_alias=True) for p in payload.products]
        return cls.model_validate(data)


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------


class AddonPayload(LineRecordFields):
    """Outgoing add-on row."""

    status: str = "1"
    created_at: str = ""
    updated_at: str = ""


class ProductPayload(LineRecordFields):
    """Outgoing product row; ``serial_number`` follows display order."""

    serial_number: str = ""
    category: str = ""
    combo: str = ""
    status: str = "active"
    created_at: str = ""
    updated_at: str = ""
    addons: list[AddonPayload] = Field(default_factory=list)


class EstimationHeader(EstimationHeaderFields):
    """Outgoing estimation header."""

    lead_id: str | None = None
    estimation_id: int | None = None

    company_name: str = ""
    company_subtitle: str = ""
    company_gstin: str = ""
    company_tagline: str = ""
    company_address_street: str = ""
    company_address_area: str = ""
    company_contact_sales: str = ""
    company_contact_service: str = ""
    company_contact_website: str = ""
    company_contact_email: str = ""
    company_factory_address: str = ""

    status: str = "1"
    created_at: str = ""
    updated_at: str = ""


class EstimationPayload(WireModel):
    """API-ready payload handed to the persistence collaborator."""

    estimation: EstimationHeader
    products: list[ProductPayload] = Field(default_factory=list)

    def to_api_dict(self) -> dict[str, Any]:
        """camelCase dict; ``estimationId`` only appears when editing."""
        data = self.model_dump(by_alias=True)
        if data["estimation"].get("estimationId") is None:
            data["estimation"].pop("estimationId", None)
        return data
