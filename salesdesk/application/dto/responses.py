"""Response DTOs for the estimation use cases.

Pydantic v2 models handed back to the surrounding application.
Monetary figures are rounded for display.
"""

from pydantic import BaseModel, Field


class EstimationTotalsResponse(BaseModel):
    """Document figures rounded to 2 decimals."""

    subtotal: float = Field(..., description="Sum of line item and add-on totals")
    discount_amount: float = Field(..., description="Discount in currency")
    after_discount: float = Field(..., description="Subtotal minus discount")
    tax_amount: float = Field(..., description="GST on the discounted amount")
    cgst: float = Field(..., description="Central half of the tax")
    sgst: float = Field(..., description="State half of the tax")
    grand_total: float = Field(..., description="Discounted amount plus tax")


class OpenEstimationResponse(BaseModel):
    """Estimation loaded for editing."""

    estimation_id: int | None = Field(default=None, description="Stored estimation ID")
    lead_id: int | None = Field(default=None, description="Lead the estimation belongs to")
    reference_number: str | None = Field(default=None, description="Reference number")
    document_type: str = Field(..., description="Proforma Invoice or Estimation")
    line_item_count: int = Field(default=0, description="Standard plus custom line items")
    totals: EstimationTotalsResponse = Field(..., description="Recomputed totals")
    stored_totals: EstimationTotalsResponse | None = Field(
        default=None, description="Totals as last persisted, for display only"
    )


class EstimationSummaryResponse(BaseModel):
    """Outcome of submitting an estimation."""

    reference_number: str = Field(..., description="Reference number issued or reused")
    document_type: str = Field(..., description="Proforma Invoice or Estimation")
    estimation_id: int | None = Field(default=None, description="Set when an edit was saved")
    lead_id: str | None = Field(default=None, description="Lead ID as persisted")
    customer_name: str = Field(default="", description="Customer display name")
    line_item_count: int = Field(default=0, description="Products in the payload")
    grand_total: str = Field(..., description="Grand total as persisted")
    document_size: int = Field(default=0, description="Rendered document size in bytes")
