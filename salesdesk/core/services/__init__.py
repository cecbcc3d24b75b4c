"""
Core estimation services.

Layer-pure services that depend only on:
- salesdesk/core/entities/*
- salesdesk/core/coercion.py
- salesdesk/core/exceptions.py

No collaborator calls. Settings are injected via constructor.
"""

from salesdesk.core.services.aggregator import (
    DocumentAggregator,
    RateViolation,
    Readiness,
    ReadinessReason,
)
from salesdesk.core.services.composer import (
    LineItemComposer,
    MutationResult,
    Rejection,
    custom_line_item_id,
)
from salesdesk.core.services.estimation_mapper import EstimationMapper, split_customer_name
from salesdesk.core.services.quotation_builder import DEFAULT_TERMS, QuotationBuilder
from salesdesk.core.services.reference_numbers import ReferenceCounter, next_reference_number
from salesdesk.core.services.volumetric import (
    RateBoundCheck,
    resolve_effective_rate,
    standard_total,
    validate_rate_bounds,
    volumetric_total,
)

__all__ = [
    # Volumetric calculator
    "standard_total",
    "volumetric_total",
    "resolve_effective_rate",
    "validate_rate_bounds",
    "RateBoundCheck",
    # Composer
    "LineItemComposer",
    "MutationResult",
    "Rejection",
    "custom_line_item_id",
    # Aggregator
    "DocumentAggregator",
    "Readiness",
    "ReadinessReason",
    "RateViolation",
    # Mapper
    "EstimationMapper",
    "split_customer_name",
    # Quotation view
    "QuotationBuilder",
    "DEFAULT_TERMS",
    # Reference numbers
    "ReferenceCounter",
    "next_reference_number",
]
