"""Core interfaces (ports) for dependency injection."""

from salesdesk.core.interfaces.estimation_store import IEstimationStore, IReferenceCounterStore
from salesdesk.core.interfaces.renderer import IQuotationRenderer

__all__ = [
    # Storage interfaces
    "IEstimationStore",
    "IReferenceCounterStore",
    # Rendering interfaces
    "IQuotationRenderer",
]
