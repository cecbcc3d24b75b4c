"""Unit tests for QuotationBuilder."""

from datetime import date

import pytest

from salesdesk.core.entities.estimation import EstimationDocument, TemplateType, TermsDetails
from salesdesk.core.services.quotation_builder import DEFAULT_TERMS, QuotationBuilder


@pytest.fixture
def builder(company):
    return QuotationBuilder(company=company)


class TestQuotationBuilder:
    def test_rows_in_display_order(self, builder, filled_composer):
        view = builder.build(filled_composer.document, today=date(2026, 3, 9))

        assert [(r.serial_number, r.line_item_id) for r in view.rows] == [
            (1, "12"),
            (2, "7-24x13x1"),
        ]
        standard, custom = view.rows
        assert standard.size == "N/A"
        assert standard.product_code == "SBI-SP-012"
        assert standard.specification == "SS 304 body"
        assert standard.category == "Hot Holding"
        assert standard.unit_price == 25000.0
        assert custom.size == "24 x 13 x 1"
        assert custom.product_id == "7"
        assert custom.total == 30000.0

    def test_add_on_rows(self, builder, filled_composer):
        view = builder.build(filled_composer.document)

        add_on = view.rows[1].add_ons[0]
        assert add_on.id == "31"
        assert add_on.product_code == "SBI-AP-031"
        assert add_on.size == "10 x 2 x 1"
        assert add_on.quantity == 2
        assert add_on.total == 2400.0

    def test_header_fields(self, builder, filled_composer):
        filled_composer.document.reference_number = "SBI-PI-26-004"

        view = builder.build(filled_composer.document, today=date(2026, 3, 9))

        assert view.reference_number == "SBI-PI-26-004"
        assert view.date == "09/03/2026"
        assert view.template_type is TemplateType.PROFORMA
        assert view.customer_name == "Rayal Nuts"
        assert view.customer_location == "12 Market Road, Near Bus Stand, Trichy, Tamil Nadu 620001"
        assert view.company.name == "SRI BRAMHA INDUSTRIES"
        assert view.gst_percent == 18.0
        assert view.discount_percent == 10.0

    def test_totals_computed_when_missing(self, builder, filled_composer):
        view = builder.build(filled_composer.document)
        assert view.totals.subtotal == 83600.0

    def test_explicit_reference_number_wins(self, builder, filled_composer):
        filled_composer.document.reference_number = "SBI-PI-26-004"
        view = builder.build(filled_composer.document, reference_number="SBI-PI-26-005")
        assert view.reference_number == "SBI-PI-26-005"

    def test_bank_block(self, builder, filled_composer):
        bank = builder.build(filled_composer.document).bank

        assert bank.id == "3"
        assert bank.bank_name == "State Bank of India"
        assert bank.branch_name == "N/A"
        assert bank.ifsc == "SBIN0001234"

    def test_missing_sections_fall_back(self, builder):
        view = builder.build(EstimationDocument())

        assert view.rows == []
        assert view.customer_name == "N/A"
        assert view.customer_location == "N/A"
        assert view.customer_phone == "N/A"
        assert view.customer_gst == "N/A"
        assert view.bank.unit_name == "SRI BRAMHA INDUSTRIES"
        assert view.bank.bank_name == "N/A"
        assert view.bank.id is None
        assert [t.term for t in view.terms] == ["PAYMENT:", "DELIVERY:"]

    def test_incomplete_terms_use_defaults(self, builder):
        doc = EstimationDocument(terms_info=TermsDetails(term_id="5", term_title="PAYMENT:"))
        view = builder.build(doc)
        assert [t.details for t in view.terms] == [t.details for t in DEFAULT_TERMS]

    def test_selected_terms(self, builder, filled_composer):
        terms = builder.build(filled_composer.document).terms

        assert len(terms) == 1
        assert terms[0].id == "5"
        assert terms[0].details == "50% advance, balance before dispatch."
