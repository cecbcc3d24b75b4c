"""Core domain entities."""

from salesdesk.core.entities.catalog import CatalogBaseProduct
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
    PersistedAddon,
    PersistedEstimation,
    PersistedProduct,
    ProductPayload,
)
from salesdesk.core.entities.quotation import (
    BankBlock,
    CompanyBlock,
    QuotationAddOnRow,
    QuotationRow,
    QuotationView,
    TermsEntry,
)

__all__ = [
    # Catalog entities
    "CatalogBaseProduct",
    # Estimation entities
    "AddOnLineItem",
    "LineItem",
    "LineItemKind",
    "GeometrySnapshot",
    "EstimationDocument",
    "DocumentMode",
    "DocumentTotals",
    "TemplateType",
    "CustomerInfo",
    "BankDetails",
    "TermsDetails",
    # Persisted wire shapes
    "PersistedAddon",
    "PersistedProduct",
    "PersistedEstimation",
    "AddonPayload",
    "ProductPayload",
    "EstimationHeader",
    "EstimationPayload",
    # Quotation view
    "QuotationView",
    "QuotationRow",
    "QuotationAddOnRow",
    "CompanyBlock",
    "BankBlock",
    "TermsEntry",
]
