"""Abstract interfaces for estimation persistence."""

from abc import ABC, abstractmethod
from typing import Any

from salesdesk.core.entities.persisted import EstimationPayload
from salesdesk.core.services.reference_numbers import ReferenceCounter


class IEstimationStore(ABC):
    """Interface for the estimation persistence API."""

    @abstractmethod
    async def create_estimation(self, payload: EstimationPayload) -> dict[str, Any]:
        """Store a new estimation and return the stored record."""
        pass

    @abstractmethod
    async def update_estimation(
        self, lead_id: str | None, payload: EstimationPayload
    ) -> dict[str, Any]:
        """Replace an existing estimation of a lead."""
        pass

    @abstractmethod
    async def get_estimation(self, estimation_id: int) -> dict[str, Any] | None:
        """Get a stored estimation record by ID."""
        pass


class IReferenceCounterStore(ABC):
    """Interface for the per-year reference number counter."""

    @abstractmethod
    async def load(self) -> ReferenceCounter:
        """Load the current counter (zeroed when none is stored)."""
        pass

    @abstractmethod
    async def save(self, counter: ReferenceCounter) -> None:
        """Persist the advanced counter."""
        pass
