"""Render-ready quotation view consumed by the document renderer."""

from pydantic import BaseModel, Field

from salesdesk.core.entities.estimation import DocumentTotals, TemplateType


class QuotationAddOnRow(BaseModel):
    """Add-on breakdown row under a quotation line."""

    id: str
    product_name: str
    product_code: str
    size: str
    specification: str = ""
    quantity: float
    unit_price: float
    total: float
    custom_badge_text: str = ""


class QuotationRow(BaseModel):
    """Top-level quotation line."""

    line_item_id: str
    product_id: str
    serial_number: int
    product_name: str
    product_code: str
    size: str
    specification: str = ""
    category: str = ""
    combo: str = ""
    quantity: float
    unit_price: float
    total: float
    custom_badge_text: str = ""
    add_ons: list[QuotationAddOnRow] = Field(default_factory=list)


class CompanyBlock(BaseModel):
    name: str
    subtitle: str
    gstin: str
    tagline: str
    address_street: str
    address_area: str
    contact_sales: str
    contact_service: str
    website: str
    email: str
    factory_address: str


class BankBlock(BaseModel):
    """Bank details with ``"N/A"`` placeholders for missing fields."""

    id: str | None = None
    unit_name: str
    bank_name: str
    branch_name: str = "N/A"
    account_no: str
    account_type: str
    micr: str
    ifsc: str


class TermsEntry(BaseModel):
    id: str | None = None
    term: str
    details: str


class QuotationView(BaseModel):
    """Everything a renderer needs to lay out one quotation."""

    template_type: TemplateType
    reference_number: str
    date: str
    company: CompanyBlock

    customer_name: str
    customer_location: str
    customer_phone: str
    customer_gst: str
    customer_email: str = ""

    rows: list[QuotationRow] = Field(default_factory=list)
    totals: DocumentTotals
    discount_percent: float = 0.0
    gst_percent: float = 0.0

    bank: BankBlock
    terms: list[TermsEntry] = Field(default_factory=list)
