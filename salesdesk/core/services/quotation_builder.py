"""
Quotation view builder.

Flattens a composed document into the render-ready ``QuotationView`` the
PDF collaborator lays out, and which the mapper serializes for storage.
"""

from datetime import date

from salesdesk.config import CompanySettings, get_settings
from salesdesk.core.coercion import NOT_APPLICABLE
from salesdesk.core.entities.estimation import (
    AddOnLineItem,
    DocumentTotals,
    EstimationDocument,
    LineItem,
)
from salesdesk.core.entities.quotation import (
    BankBlock,
    CompanyBlock,
    QuotationAddOnRow,
    QuotationRow,
    QuotationView,
    TermsEntry,
)
from salesdesk.core.services.aggregator import DocumentAggregator

DEFAULT_TERMS = (
    TermsEntry(term="PAYMENT:", details="75% advance payment, 25% at the time of delivery."),
    TermsEntry(term="DELIVERY:", details="3 weeks from the date of your confirmed order."),
)


class QuotationBuilder:
    """Builds quotation views for rendering and persistence."""

    def __init__(
        self,
        aggregator: DocumentAggregator | None = None,
        company: CompanySettings | None = None,
    ):
        self.aggregator = aggregator or DocumentAggregator()
        self.company = company or get_settings().company

    def build(
        self,
        doc: EstimationDocument,
        totals: DocumentTotals | None = None,
        *,
        reference_number: str | None = None,
        today: date | None = None,
    ) -> QuotationView:
        """
        Build the view of ``doc``.

        Totals are computed from the document when not supplied. Rows are
        numbered from 1 in display order: standard items, then custom items.
        """
        totals = totals or self.aggregator.compute_totals(doc)
        today = today or date.today()
        customer = doc.customer_info

        return QuotationView(
            template_type=doc.template_type,
            reference_number=reference_number or doc.reference_number or "",
            date=today.strftime("%d/%m/%Y"),
            company=self._company_block(),
            customer_name=customer.full_name if customer else NOT_APPLICABLE,
            customer_location=customer.location if customer else NOT_APPLICABLE,
            customer_phone=(customer.phone if customer else "") or NOT_APPLICABLE,
            customer_gst=(customer.gst if customer else "") or NOT_APPLICABLE,
            rows=[
                self._row(item, serial)
                for serial, item in enumerate(doc.line_items, start=1)
            ],
            totals=totals,
            discount_percent=doc.discount_percent,
            gst_percent=doc.gst_percent,
            bank=self._bank_block(doc),
            terms=self._terms(doc),
        )

    def _company_block(self) -> CompanyBlock:
        return CompanyBlock(**self.company.model_dump())

    def _row(self, item: LineItem, serial_number: int) -> QuotationRow:
        return QuotationRow(
            line_item_id=item.id,
            product_id=item.base_product_id,
            serial_number=serial_number,
            product_name=item.product_name,
            product_code=item.code or NOT_APPLICABLE,
            size=item.size,
            specification=item.remark,
            category=item.category_name,
            combo=item.combo_name,
            quantity=item.quantity,
            unit_price=item.rate,
            total=item.total_amount,
            custom_badge_text=item.custom_badge_text,
            add_ons=[self._add_on_row(a) for a in item.add_ons],
        )

    @staticmethod
    def _add_on_row(add_on: AddOnLineItem) -> QuotationAddOnRow:
        return QuotationAddOnRow(
            id=add_on.id,
            product_name=add_on.product_name,
            product_code=add_on.code or NOT_APPLICABLE,
            size=add_on.size,
            specification=add_on.remark,
            quantity=add_on.quantity,
            unit_price=add_on.rate,
            total=add_on.total_amount,
            custom_badge_text=add_on.custom_badge_text,
        )

    def _bank_block(self, doc: EstimationDocument) -> BankBlock:
        bank = doc.bank_info
        if bank is None:
            return BankBlock(
                unit_name=self.company.name,
                bank_name=NOT_APPLICABLE,
                account_no=NOT_APPLICABLE,
                account_type=NOT_APPLICABLE,
                micr=NOT_APPLICABLE,
                ifsc=NOT_APPLICABLE,
            )
        return BankBlock(
            id=bank.bank_id or None,
            unit_name=bank.bank_title or self.company.name,
            bank_name=bank.bank_name or NOT_APPLICABLE,
            account_no=bank.account_no or NOT_APPLICABLE,
            account_type=bank.account_type or NOT_APPLICABLE,
            micr=bank.micr_code or NOT_APPLICABLE,
            ifsc=bank.ifsc_code or NOT_APPLICABLE,
        )

    @staticmethod
    def _terms(doc: EstimationDocument) -> list[TermsEntry]:
        terms = doc.terms_info
        if terms is None or not (terms.term_title and terms.term_desc):
            return [t.model_copy() for t in DEFAULT_TERMS]
        return [TermsEntry(id=terms.term_id or None, term=terms.term_title, details=terms.term_desc)]
