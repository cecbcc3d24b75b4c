"""
Composed estimation domain entities.

The in-memory, fully-typed representation of an estimation being authored.
Monetary totals on line items are derived by the composer; document totals
are derived by the aggregator and never stored here except as the
display-only ``stored_totals`` snapshot of a reloaded record.
"""

from enum import Enum

from pydantic import BaseModel, Field

from salesdesk.core.coercion import NOT_APPLICABLE, size_label


class LineItemKind(str, Enum):
    """How a line item is priced."""

    STANDARD = "standard"  # rate * quantity
    CUSTOM = "custom"  # estimated weight * rate * quantity


class TemplateType(str, Enum):
    """Rendering template selected for the document."""

    PROFORMA = "proforma"
    ESTIMATION = "estimation"

    @property
    def document_type(self) -> str:
        """Persisted ``documentType`` label."""
        if self is TemplateType.PROFORMA:
            return "Proforma Invoice"
        return "Estimation"

    @classmethod
    def from_document_type(cls, value: str | None) -> "TemplateType":
        if (value or "").strip() == "Proforma Invoice":
            return cls.PROFORMA
        return cls.ESTIMATION


class DocumentMode(str, Enum):
    """Lifecycle origin of the document."""

    NEW = "new"
    EDIT = "edit"


class CustomerInfo(BaseModel):
    """Customer record selected in the customer step."""

    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    gst: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.first_name and self.phone and self.address1)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def location(self) -> str:
        """Single-line address used on quotations."""
        street = self.address1
        if self.address2:
            street = f"{street}, {self.address2}"
        return f"{street}, {self.city}, {self.state} {self.zip}"


class BankDetails(BaseModel):
    """Bank account the customer pays into."""

    bank_id: str = ""
    bank_title: str = ""
    bank_name: str = ""
    account_no: str = ""
    account_type: str = ""
    micr_code: str = ""
    ifsc_code: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.bank_id and self.bank_name and self.account_no)


class TermsDetails(BaseModel):
    """Terms and conditions block."""

    term_id: str = ""
    term_title: str = ""
    term_desc: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.term_id and self.term_title and self.term_desc)


class GeometrySnapshot(BaseModel):
    """
    Reference geometry copied from a catalog product at selection time.

    Used to derive density when pricing by volume. Values are kept as the
    decimal strings the catalog supplied.
    """

    base_product_weight: str = "0"
    base_product_default_length: str = "0"
    base_product_default_width: str = "0"
    base_product_default_thickness: str = "0"


class AddOnLineItem(GeometrySnapshot):
    """Secondary item attached to one line item, priced by volume."""

    id: str
    code: str = ""
    product_name: str = ""
    quantity: float = 1.0
    rate: float = 0.0  # per kg
    length: str = "0"
    width: str = "0"
    thickness: str = "0"
    min_cost: float = 0.0
    max_cost: float = 0.0
    total_amount: float = 0.0
    remark: str = ""
    custom_badge_text: str = ""

    @property
    def size(self) -> str:
        return size_label(self.length, self.width, self.thickness)


class LineItem(GeometrySnapshot):
    """
    A priced product row owned by the document.

    ``rate`` is the effective unit price actually charged (per unit for
    standard items, per kg for custom items). ``min_cost`` / ``max_cost`` are
    an immutable snapshot of the catalog bounds at selection time.
    """

    id: str
    kind: LineItemKind
    base_product_id: str
    code: str = ""
    product_name: str = ""
    combo_name: str = ""
    category_name: str = ""
    quantity: float = 1.0

    # Custom geometry (unused for standard items)
    length: str = ""
    width: str = ""
    thickness: str = ""

    rate: float = 0.0
    min_cost: float = 0.0
    max_cost: float = 0.0
    total_amount: float = 0.0

    remark: str = ""
    custom_badge_text: str = ""
    add_ons: list[AddOnLineItem] = Field(default_factory=list)

    @property
    def is_custom(self) -> bool:
        return self.kind is LineItemKind.CUSTOM

    @property
    def size(self) -> str:
        """``"L x W x T"`` for custom items, ``"N/A"`` for standard ones."""
        if not self.is_custom:
            return NOT_APPLICABLE
        return size_label(self.length, self.width, self.thickness)

    @property
    def add_ons_total(self) -> float:
        return sum(a.total_amount for a in self.add_ons)

    @property
    def total_with_add_ons(self) -> float:
        return self.total_amount + self.add_ons_total

    def find_add_on(self, add_on_id: str) -> AddOnLineItem | None:
        for add_on in self.add_ons:
            if add_on.id == add_on_id:
                return add_on
        return None


class DocumentTotals(BaseModel):
    """Aggregate figures of a document, full precision unless rounded."""

    subtotal: float = 0.0
    discount_amount: float = 0.0
    after_discount: float = 0.0
    tax_amount: float = 0.0
    cgst: float = 0.0
    sgst: float = 0.0
    grand_total: float = 0.0


class EstimationDocument(BaseModel):
    """Aggregate root of an estimation being authored or edited."""

    standard_line_items: list[LineItem] = Field(default_factory=list)
    custom_line_items: list[LineItem] = Field(default_factory=list)

    customer_info: CustomerInfo | None = None
    bank_info: BankDetails | None = None
    terms_info: TermsDetails | None = None

    discount_percent: float = 0.0
    gst_percent: float = 18.0
    template_type: TemplateType = TemplateType.PROFORMA

    # Document context
    mode: DocumentMode = DocumentMode.NEW
    lead_id: int | None = None
    estimation_id: int | None = None
    reference_number: str | None = None

    # Totals as persisted, for display only
    stored_totals: DocumentTotals | None = None

    @property
    def line_items(self) -> list[LineItem]:
        """All line items in display order: standard first, then custom."""
        return [*self.standard_line_items, *self.custom_line_items]

    @property
    def has_line_items(self) -> bool:
        return bool(self.standard_line_items or self.custom_line_items)

    def find_line_item(self, line_item_id: str) -> LineItem | None:
        for item in self.line_items:
            if item.id == line_item_id:
                return item
        return None
