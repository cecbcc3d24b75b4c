"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest

from salesdesk.config import CodeSettings, CompanySettings, PricingSettings, reset_settings
from salesdesk.core.entities.catalog import CatalogBaseProduct
from salesdesk.core.entities.estimation import BankDetails, CustomerInfo, TermsDetails
from salesdesk.core.services.composer import LineItemComposer
from salesdesk.core.services.estimation_mapper import EstimationMapper


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Drop the cached settings around every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def pricing() -> PricingSettings:
    return PricingSettings()


@pytest.fixture
def codes() -> CodeSettings:
    return CodeSettings()


@pytest.fixture
def company() -> CompanySettings:
    return CompanySettings()


@pytest.fixture
def standard_product() -> CatalogBaseProduct:
    """Standard catalog product priced per unit (standard endpoint naming)."""
    return CatalogBaseProduct.model_validate(
        {
            "id": 12,
            "productName": "Bain Marie 4 Pan",
            "defaultLength": "60",
            "defaultWidth": "30",
            "defaultThickness": "2",
            "defaultWeight": "45",
            "ratePerQuantity": "25000",
            "minCost": "20000",
            "maxCost": "30000",
            "gst": 18,
            "remark": "SS 304 body",
        }
    )


@pytest.fixture
def plate_product() -> CatalogBaseProduct:
    """Custom-cut base product: 48 x 26 x 1 weighing 120 kg at 500/kg."""
    return CatalogBaseProduct.model_validate(
        {
            "id": 7,
            "productName": "SS Work Table Top",
            "length": "48",
            "width": "26",
            "thickness": "1",
            "weightOfObject": "120",
            "ratePerKg": "500",
            "grade": "304",
        }
    )


@pytest.fixture
def addon_product() -> CatalogBaseProduct:
    """Add-on product: 10 x 2 x 1 weighing 4 kg at 300/kg."""
    return CatalogBaseProduct.model_validate(
        {
            "id": 31,
            "productName": "SS Leg",
            "length": "10",
            "width": "2",
            "thickness": "1",
            "weightOfObject": "4",
            "ratePerKg": "300",
            "minCost": "250",
        }
    )


@pytest.fixture
def customer() -> CustomerInfo:
    return CustomerInfo(
        first_name="Rayal",
        last_name="Nuts",
        phone="9876543210",
        gst="33ABCDE1234F1Z5",
        address1="12 Market Road",
        address2="Near Bus Stand",
        city="Trichy",
        state="Tamil Nadu",
        zip="620001",
        country="India",
    )


@pytest.fixture
def bank() -> BankDetails:
    return BankDetails(
        bank_id="3",
        bank_title="SRI BRAMHA INDUSTRIES",
        bank_name="State Bank of India",
        account_no="123456789012",
        account_type="Current",
        micr_code="620002003",
        ifsc_code="SBIN0001234",
    )


@pytest.fixture
def terms() -> TermsDetails:
    return TermsDetails(
        term_id="5",
        term_title="PAYMENT:",
        term_desc="50% advance, balance before dispatch.",
    )


@pytest.fixture
def composer(codes, pricing) -> LineItemComposer:
    return LineItemComposer(codes=codes, pricing=pricing)


@pytest.fixture
def mapper(pricing, codes, company) -> EstimationMapper:
    return EstimationMapper(pricing=pricing, codes=codes, company=company)


@pytest.fixture
def filled_composer(
    composer, standard_product, plate_product, addon_product, customer, bank, terms
) -> LineItemComposer:
    """Composer holding one standard and one custom item, each with an add-on."""
    composer.new_estimation(lead_id=42, phone=customer.phone)
    composer.add_standard_line_item(
        standard_product, 2, combo_name="Kitchen Combo", category_name="Hot Holding"
    )
    composer.add_custom_line_item(plate_product, 2, "24", "13", "1")
    composer.add_add_on("12", addon_product)
    composer.add_add_on("7-24x13x1", addon_product, quantity=2)
    composer.set_customer_info(customer)
    composer.set_bank_info(bank)
    composer.set_terms_info(terms)
    composer.set_amounts(gst_percent=18, discount_percent=10)
    return composer
