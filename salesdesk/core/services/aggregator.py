"""
Document aggregator.

Stateless: totals are recomputed from the line items on every call and
never cached, so a read after any mutation is always current. Aggregation
runs at full float precision; rounding happens only when figures are
displayed or serialized.
"""

from dataclasses import dataclass, field
from enum import Enum

from salesdesk.core.coercion import round_half_up
from salesdesk.core.entities.estimation import DocumentTotals, EstimationDocument
from salesdesk.core.services.volumetric import validate_rate_bounds


class ReadinessReason(str, Enum):
    """Why a document cannot be finalized yet."""

    NO_LINE_ITEMS = "NO_LINE_ITEMS"
    GST_NOT_POSITIVE = "GST_NOT_POSITIVE"
    RATE_BELOW_MIN_COST = "RATE_BELOW_MIN_COST"
    MISSING_CUSTOMER = "MISSING_CUSTOMER"
    MISSING_BANK = "MISSING_BANK"
    MISSING_TERMS = "MISSING_TERMS"


@dataclass
class RateViolation:
    """A line item or add-on priced outside its catalog bounds."""

    line_item_id: str
    add_on_id: str | None
    rate: float
    min_cost: float
    max_cost: float
    invalid: bool
    warning: bool


@dataclass
class Readiness:
    """Result of the finalization gate."""

    reasons: list[ReadinessReason] = field(default_factory=list)
    violations: list[RateViolation] = field(default_factory=list)

    @property
    def ready(self) -> bool:
        return not self.reasons

    @property
    def warnings(self) -> list[RateViolation]:
        return [v for v in self.violations if v.warning]


class DocumentAggregator:
    """Computes document figures and decides whether it may be finalized."""

    def subtotal(self, doc: EstimationDocument) -> float:
        """Sum of every line item total plus every add-on total."""
        return sum(item.total_with_add_ons for item in doc.line_items)

    def compute_totals(self, doc: EstimationDocument) -> DocumentTotals:
        subtotal = self.subtotal(doc)
        discount_amount = subtotal * doc.discount_percent / 100
        after_discount = subtotal - discount_amount
        tax_amount = after_discount * doc.gst_percent / 100
        half_tax = tax_amount / 2
        return DocumentTotals(
            subtotal=subtotal,
            discount_amount=discount_amount,
            after_discount=after_discount,
            tax_amount=tax_amount,
            cgst=half_tax,
            sgst=half_tax,
            grand_total=after_discount + tax_amount,
        )

    def rounded(self, totals: DocumentTotals, places: int = 2) -> DocumentTotals:
        """Display copy of ``totals`` rounded half-up."""
        return DocumentTotals(
            **{name: round_half_up(value, places) for name, value in totals.model_dump().items()}
        )

    def rate_violations(self, doc: EstimationDocument) -> list[RateViolation]:
        """Every priced row whose rate breaks a catalog bound (invalid or warning)."""
        violations = []
        for item in doc.line_items:
            rows = [(None, item)] + [(a.id, a) for a in item.add_ons]
            for add_on_id, row in rows:
                check = validate_rate_bounds(row.rate, row.min_cost, row.max_cost)
                if check.invalid or check.warning:
                    violations.append(
                        RateViolation(
                            line_item_id=item.id,
                            add_on_id=add_on_id,
                            rate=row.rate,
                            min_cost=row.min_cost,
                            max_cost=row.max_cost,
                            invalid=check.invalid,
                            warning=check.warning,
                        )
                    )
        return violations

    def readiness(self, doc: EstimationDocument) -> Readiness:
        """
        Pricing gate: gst > 0, at least one line item, no rate below its floor.

        Rate warnings (above max cost) are reported but do not block.
        """
        violations = self.rate_violations(doc)
        reasons = []
        if not doc.has_line_items:
            reasons.append(ReadinessReason.NO_LINE_ITEMS)
        if doc.gst_percent <= 0:
            reasons.append(ReadinessReason.GST_NOT_POSITIVE)
        if any(v.invalid for v in violations):
            reasons.append(ReadinessReason.RATE_BELOW_MIN_COST)
        return Readiness(reasons=reasons, violations=violations)

    def can_finalize(self, doc: EstimationDocument) -> bool:
        return self.readiness(doc).ready

    def submission_readiness(self, doc: EstimationDocument) -> Readiness:
        """Pricing gate plus completeness of the customer, bank and terms sections."""
        readiness = self.readiness(doc)
        if doc.customer_info is None or not doc.customer_info.is_complete:
            readiness.reasons.append(ReadinessReason.MISSING_CUSTOMER)
        if doc.bank_info is None or not doc.bank_info.is_complete:
            readiness.reasons.append(ReadinessReason.MISSING_BANK)
        if doc.terms_info is None or not doc.terms_info.is_complete:
            readiness.reasons.append(ReadinessReason.MISSING_TERMS)
        return readiness
