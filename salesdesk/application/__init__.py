"""
Application layer - Use cases and DTOs.

This layer orchestrates the estimation engine by:
1. Defining response DTOs handed back to the surrounding application
2. Implementing use cases that coordinate core services with collaborators
"""

from salesdesk.application.dto import (
    EstimationSummaryResponse,
    EstimationTotalsResponse,
    OpenEstimationResponse,
)
from salesdesk.application.use_cases import (
    OpenEstimationResult,
    OpenEstimationUseCase,
    SubmitEstimationResult,
    SubmitEstimationUseCase,
)

__all__ = [
    # Response DTOs
    "EstimationTotalsResponse",
    "OpenEstimationResponse",
    "EstimationSummaryResponse",
    # Use Cases
    "OpenEstimationUseCase",
    "OpenEstimationResult",
    "SubmitEstimationUseCase",
    "SubmitEstimationResult",
]
