"""
Catalog product input.

Catalog lookups return products under two naming schemes: standard products
(``ratePerQuantity``, ``defaultLength``...) and custom / add-on products
(``ratePerKg``, ``length``, ``weightOfObject``...). Both validate into the
same read-only ``CatalogBaseProduct``.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from salesdesk.core.coercion import to_number, to_trimmed_string


class CatalogBaseProduct(BaseModel):
    """A catalog entry with reference geometry, weight and pricing bounds."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str = Field(
        default="", validation_alias=AliasChoices("name", "productName")
    )

    # Reference geometry (decimal strings, kept as supplied)
    default_length: str = Field(
        default="", validation_alias=AliasChoices("default_length", "defaultLength", "length")
    )
    default_width: str = Field(
        default="", validation_alias=AliasChoices("default_width", "defaultWidth", "width")
    )
    default_thickness: str = Field(
        default="",
        validation_alias=AliasChoices("default_thickness", "defaultThickness", "thickness"),
    )
    default_weight: str = Field(
        default="",
        validation_alias=AliasChoices("default_weight", "defaultWeight", "weightOfObject"),
    )

    # Pricing
    rate_per_unit: float = Field(
        default=0.0, validation_alias=AliasChoices("rate_per_unit", "ratePerQuantity")
    )
    rate_per_kg: float = Field(
        default=0.0, validation_alias=AliasChoices("rate_per_kg", "ratePerKg")
    )
    min_cost: float = Field(default=0.0, validation_alias=AliasChoices("min_cost", "minCost"))
    max_cost: float = Field(default=0.0, validation_alias=AliasChoices("max_cost", "maxCost"))
    gst_percent: float = Field(default=0.0, validation_alias=AliasChoices("gst_percent", "gst"))

    remark: str = ""
    grade: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        """Catalog ids arrive as ints or strings."""
        return to_trimmed_string(v)

    @field_validator(
        "name",
        "default_length",
        "default_width",
        "default_thickness",
        "default_weight",
        "remark",
        "grade",
        mode="before",
    )
    @classmethod
    def coerce_string(cls, v: Any) -> str:
        """Ensure string fields are never None."""
        return to_trimmed_string(v)

    @field_validator(
        "rate_per_unit", "rate_per_kg", "min_cost", "max_cost", "gst_percent", mode="before"
    )
    @classmethod
    def coerce_numeric(cls, v: Any) -> float:
        """Convert None/empty/invalid to 0.0."""
        return to_number(v, 0.0)
