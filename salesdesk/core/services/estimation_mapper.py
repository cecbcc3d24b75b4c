"""
Estimation mapper.

Translates between the composed ``EstimationDocument`` and the string-typed
persisted record in both directions:

- ``from_persisted`` hydrates a document for editing. Every field goes
  through the tolerant coercion helpers, so legacy or partial records always
  load; persisted totals are kept for display only and every line total is
  recomputed.
- ``to_persisted`` builds the API payload handed to the persistence
  collaborator. Rates are written unrounded, so line totals, quantities and
  geometry survive the round trip; document totals are re-derived on the
  next load.
"""

from datetime import date
from typing import Any

from salesdesk.config import (
    CodeSettings,
    CompanySettings,
    PricingSettings,
    get_logger,
    get_settings,
)
from salesdesk.core.coercion import (
    NOT_APPLICABLE,
    format_amount,
    format_number,
    split_size,
    to_number,
    to_optional_number,
)
from salesdesk.core.entities.estimation import (
    AddOnLineItem,
    BankDetails,
    CustomerInfo,
    DocumentMode,
    DocumentTotals,
    EstimationDocument,
    GeometrySnapshot,
    LineItem,
    LineItemKind,
    TemplateType,
    TermsDetails,
)
from salesdesk.core.entities.persisted import (
    AddonPayload,
    EstimationHeader,
    EstimationPayload,
    LineRecordFields,
    PersistedAddon,
    PersistedEstimation,
    PersistedProduct,
    ProductPayload,
)
from salesdesk.core.entities.quotation import QuotationAddOnRow, QuotationRow, QuotationView
from salesdesk.core.services.aggregator import DocumentAggregator
from salesdesk.core.services.composer import LineItemComposer, custom_line_item_id
from salesdesk.core.services.quotation_builder import QuotationBuilder

logger = get_logger(__name__)


def split_customer_name(full_name: str) -> tuple[str, str]:
    """Split at the first whitespace; everything after it is the last name."""
    parts = full_name.strip().split(maxsplit=1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def _snapshot_fields(source: GeometrySnapshot | LineRecordFields | None) -> dict[str, str]:
    """Base geometry for the payload, ``"0"`` for anything unknown."""
    if source is None:
        return {
            "base_product_weight": "0",
            "base_product_default_length": "0",
            "base_product_default_width": "0",
            "base_product_default_thickness": "0",
        }
    return {
        "base_product_weight": source.base_product_weight or "0",
        "base_product_default_length": source.base_product_default_length or "0",
        "base_product_default_width": source.base_product_default_width or "0",
        "base_product_default_thickness": source.base_product_default_thickness or "0",
    }


def _optional_int(value: Any) -> int | None:
    number = to_optional_number(value)
    return int(number) if number is not None else None


class EstimationMapper:
    """Bidirectional mapping between composed documents and persisted records."""

    def __init__(
        self,
        pricing: PricingSettings | None = None,
        codes: CodeSettings | None = None,
        company: CompanySettings | None = None,
        builder: QuotationBuilder | None = None,
        aggregator: DocumentAggregator | None = None,
    ):
        settings = get_settings()
        self.pricing = pricing or settings.pricing
        self.codes = codes or settings.codes
        self.company = company or settings.company
        self.aggregator = aggregator or DocumentAggregator()
        self.builder = builder or QuotationBuilder(self.aggregator, self.company)

    # ------------------------------------------------------------------
    # Persisted -> composed
    # ------------------------------------------------------------------

    @staticmethod
    def _as_record(
        source: PersistedEstimation | EstimationPayload | dict[str, Any],
    ) -> PersistedEstimation:
        if isinstance(source, PersistedEstimation):
            return source
        if isinstance(source, EstimationPayload):
            return PersistedEstimation.from_payload(source)
        if isinstance(source.get("estimation"), dict):
            # API payload shape: header nested under "estimation"
            header = source["estimation"]
            data = dict(header)
            data.setdefault("id", header.get("estimationId"))
            data["products"] = source.get("products") or []
            return PersistedEstimation.model_validate(data)
        return PersistedEstimation.model_validate(source)

    def from_persisted(
        self, source: PersistedEstimation | EstimationPayload | dict[str, Any]
    ) -> EstimationDocument:
        """Hydrate a composed document (mode ``edit``) from a stored record."""
        record = self._as_record(source)
        gst_percent = self._resolve_gst_percent(record)

        first_name, last_name = split_customer_name(record.customer_name)
        doc = EstimationDocument(
            customer_info=CustomerInfo(
                first_name=first_name,
                last_name=last_name,
                phone=record.customer_phone,
                gst=record.customer_gstin,
                address1=record.customer_address1,
                address2=record.customer_address2,
                city=record.customer_city,
                state=record.customer_state,
                zip=record.customer_zip,
                country=record.customer_country,
            ),
            bank_info=BankDetails(
                bank_id=record.bank_id,
                bank_title=record.bank_account_holder,
                bank_name=record.bank_name,
                account_no=record.bank_account_number,
                account_type=record.bank_account_type,
                micr_code=record.bank_micr_code,
                ifsc_code=record.bank_ifsc_code,
            ),
            terms_info=TermsDetails(
                term_id=record.term_id,
                term_title=record.terms_title,
                term_desc=record.terms_description,
            ),
            discount_percent=to_number(record.discount),
            gst_percent=gst_percent,
            template_type=TemplateType.from_document_type(record.document_type),
            mode=DocumentMode.EDIT,
            lead_id=_optional_int(record.lead_id),
            estimation_id=_optional_int(record.id),
            reference_number=record.reference_number or None,
            stored_totals=DocumentTotals(
                subtotal=to_number(record.subtotal),
                discount_amount=to_number(record.discount_amount),
                after_discount=to_number(record.total_after_discount),
                tax_amount=to_number(record.tax_total),
                cgst=to_number(record.tax_cgst),
                sgst=to_number(record.tax_sgst),
                grand_total=to_number(record.grand_total),
            ),
        )

        for product in record.products:
            item = self._line_item_from_persisted(product)
            if not item.is_custom:
                doc.standard_line_items.append(item)
            elif not self._merge_duplicate_custom(doc, item):
                doc.custom_line_items.append(item)

        LineItemComposer(doc, codes=self.codes, pricing=self.pricing).recompute_all()

        logger.info(
            "estimation_mapped_from_persisted",
            estimation_id=doc.estimation_id,
            standard_items=len(doc.standard_line_items),
            custom_items=len(doc.custom_line_items),
        )
        return doc

    def _resolve_gst_percent(self, record: PersistedEstimation) -> float:
        """Explicit percent, else back-solved from tax / after-discount, else the legacy default."""
        explicit = to_optional_number(record.gst_percent)
        if explicit is not None:
            return explicit

        after_discount = to_optional_number(record.total_after_discount)
        tax_total = to_optional_number(record.tax_total)
        if after_discount is not None and after_discount > 0 and tax_total is not None:
            return tax_total / after_discount * 100

        logger.warning(
            "legacy_gst_fallback",
            estimation_id=record.id,
            total_after_discount=record.total_after_discount,
            tax_total=record.tax_total,
            gst_percent=self.pricing.legacy_gst_percent,
        )
        return self.pricing.legacy_gst_percent

    def _merge_duplicate_custom(self, doc: EstimationDocument, item: LineItem) -> bool:
        """
        Fold ``item`` into an already loaded custom item of the same size.

        Quantities add up and add-ons missing on the kept item are carried
        over; the kept item's rate wins. Returns False when nothing matched.
        """
        composer = LineItemComposer(doc, codes=self.codes, pricing=self.pricing)
        kept = composer.find_custom_size(
            item.base_product_id, item.length, item.width, item.thickness
        )
        if kept is None:
            return False

        logger.warning(
            "duplicate_custom_line_item_merged",
            estimation_id=doc.estimation_id,
            line_item_id=kept.id,
            duplicate_size=item.size,
            quantity=item.quantity,
        )
        kept.quantity += item.quantity
        for add_on in item.add_ons:
            if kept.find_add_on(add_on.id) is None:
                kept.add_ons.append(add_on)
        return True

    def _line_item_from_persisted(self, product: PersistedProduct) -> LineItem:
        base_product_id = product.product_id or product.id
        is_standard = product.size == NOT_APPLICABLE

        item = LineItem(
            id=base_product_id,
            kind=LineItemKind.STANDARD if is_standard else LineItemKind.CUSTOM,
            base_product_id=base_product_id,
            code=product.prod_code,
            product_name=product.name,
            combo_name=product.combo,
            category_name=product.category,
            quantity=to_number(product.quantity, 1.0),
            rate=to_number(product.unit_price),
            min_cost=to_number(product.min_cost),
            max_cost=to_number(product.max_cost),
            total_amount=to_number(product.total_price),
            remark=product.specification,
            custom_badge_text=product.notes,
            add_ons=[self._add_on_from_persisted(a) for a in product.addons],
            **_snapshot_fields(product),
        )
        if not is_standard:
            item.length, item.width, item.thickness = split_size(product.size)
            item.id = custom_line_item_id(base_product_id, product.size)
        return item

    @staticmethod
    def _add_on_from_persisted(addon: PersistedAddon) -> AddOnLineItem:
        length, width, thickness = split_size(addon.size)
        return AddOnLineItem(
            id=addon.product_id or addon.id,
            code=addon.prod_code,
            product_name=addon.name,
            quantity=to_number(addon.quantity, 1.0),
            rate=to_number(addon.unit_price),
            length=length,
            width=width,
            thickness=thickness,
            min_cost=to_number(addon.min_cost),
            max_cost=to_number(addon.max_cost),
            total_amount=to_number(addon.total_price),
            remark=addon.specification,
            custom_badge_text=addon.notes,
            **_snapshot_fields(addon),
        )

    # ------------------------------------------------------------------
    # Composed -> persisted
    # ------------------------------------------------------------------

    def to_persisted(
        self,
        doc: EstimationDocument,
        totals: DocumentTotals | None = None,
        *,
        view: QuotationView | None = None,
        reference_number: str | None = None,
        today: date | None = None,
    ) -> EstimationPayload:
        """
        Build the API payload for ``doc``.

        Rows come from ``view`` when one was already built for rendering.
        Each row's base geometry and rate bounds are looked up in the live
        document by id; a miss falls back to ``"0"``.
        """
        today = today or date.today()
        totals = totals or self.aggregator.compute_totals(doc)
        view = view or self.builder.build(
            doc, totals, reference_number=reference_number, today=today
        )
        stamp = today.isoformat()

        products = [self._product_payload(doc, row, stamp) for row in view.rows]
        payload = EstimationPayload(
            estimation=self._header(doc, totals, view, stamp),
            products=products,
        )

        logger.info(
            "estimation_payload_built",
            reference_number=view.reference_number,
            estimation_id=doc.estimation_id,
            products=len(products),
        )
        return payload

    def _header(
        self,
        doc: EstimationDocument,
        totals: DocumentTotals,
        view: QuotationView,
        stamp: str,
    ) -> EstimationHeader:
        places = self.pricing.amount_decimals
        customer = doc.customer_info or CustomerInfo()
        terms = view.terms[0] if view.terms else None
        company = self.company

        return EstimationHeader(
            lead_id=str(doc.lead_id) if doc.lead_id is not None else None,
            estimation_id=doc.estimation_id,
            bank_id=view.bank.id or "",
            term_id=(terms.id if terms else None) or "",
            reference_number=view.reference_number,
            order_date=stamp,
            document_type=doc.template_type.document_type,
            customer_name=customer.full_name,
            customer_phone=customer.phone,
            customer_gstin=customer.gst,
            customer_email=view.customer_email,
            customer_address1=customer.address1,
            customer_address2=customer.address2,
            customer_city=customer.city,
            customer_state=customer.state,
            customer_zip=customer.zip,
            customer_country=customer.country,
            subtotal=format_amount(totals.subtotal, places),
            discount=format_number(doc.discount_percent),
            discount_amount=format_amount(totals.discount_amount, places),
            total_after_discount=format_amount(totals.after_discount, places),
            tax_cgst=format_amount(totals.cgst, places),
            tax_sgst=format_amount(totals.sgst, places),
            tax_total=format_amount(totals.tax_amount, places),
            grand_total=format_amount(totals.grand_total, places),
            gst_percent=format_number(doc.gst_percent),
            bank_account_holder=view.bank.unit_name,
            bank_name=view.bank.bank_name,
            bank_account_number=view.bank.account_no,
            bank_account_type=view.bank.account_type,
            bank_ifsc_code=view.bank.ifsc,
            bank_micr_code=view.bank.micr,
            bank_branch_name=view.bank.branch_name,
            terms_title=terms.term if terms else "",
            terms_description=terms.details if terms else "",
            company_name=company.name,
            company_subtitle=company.subtitle,
            company_gstin=company.gstin,
            company_tagline=company.tagline,
            company_address_street=company.address_street,
            company_address_area=company.address_area,
            company_contact_sales=company.contact_sales,
            company_contact_service=company.contact_service,
            company_contact_website=company.website,
            company_contact_email=company.email,
            company_factory_address=company.factory_address,
            created_at=stamp,
            updated_at=stamp,
        )

    def _product_payload(
        self, doc: EstimationDocument, row: QuotationRow, stamp: str
    ) -> ProductPayload:
        places = self.pricing.amount_decimals
        item = doc.find_line_item(row.line_item_id)
        return ProductPayload(
            product_id=row.product_id,
            serial_number=str(row.serial_number),
            name=row.product_name,
            prod_code=row.product_code,
            category=row.category,
            combo=row.combo,
            size=row.size,
            specification=row.specification,
            quantity=format_number(row.quantity),
            unit_price=format_number(row.unit_price),
            total_price=format_amount(row.total, places),
            notes=row.custom_badge_text,
            min_cost=format_number(item.min_cost) if item else "0",
            max_cost=format_number(item.max_cost) if item else "0",
            created_at=stamp,
            updated_at=stamp,
            addons=[self._addon_payload(item, a, stamp) for a in row.add_ons],
            **_snapshot_fields(item),
        )

    def _addon_payload(
        self, parent: LineItem | None, row: QuotationAddOnRow, stamp: str
    ) -> AddonPayload:
        places = self.pricing.amount_decimals
        add_on = parent.find_add_on(row.id) if parent else None
        return AddonPayload(
            product_id=row.id,
            name=row.product_name,
            prod_code=row.product_code,
            size=row.size,
            specification=row.specification,
            quantity=format_number(row.quantity),
            unit_price=format_number(row.unit_price),
            total_price=format_amount(row.total, places),
            notes=row.custom_badge_text,
            min_cost=format_number(add_on.min_cost) if add_on else "0",
            max_cost=format_number(add_on.max_cost) if add_on else "0",
            created_at=stamp,
            updated_at=stamp,
            **_snapshot_fields(add_on),
        )
