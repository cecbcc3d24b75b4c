"""Application use cases."""

from salesdesk.application.use_cases.open_estimation import (
    OpenEstimationResult,
    OpenEstimationUseCase,
)
from salesdesk.application.use_cases.submit_estimation import (
    SubmitEstimationResult,
    SubmitEstimationUseCase,
)

__all__ = [
    "OpenEstimationUseCase",
    "OpenEstimationResult",
    "SubmitEstimationUseCase",
    "SubmitEstimationResult",
]
