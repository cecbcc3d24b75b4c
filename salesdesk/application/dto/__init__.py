"""Data transfer objects."""

from salesdesk.application.dto.responses import (
    EstimationSummaryResponse,
    EstimationTotalsResponse,
    OpenEstimationResponse,
)

__all__ = [
    "EstimationTotalsResponse",
    "OpenEstimationResponse",
    "EstimationSummaryResponse",
]
