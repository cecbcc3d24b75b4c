"""Abstract interface for quotation document rendering."""

from abc import ABC, abstractmethod

from salesdesk.core.entities.quotation import QuotationView


class IQuotationRenderer(ABC):
    """Interface for quotation document generation (PDF)."""

    @abstractmethod
    def render(self, view: QuotationView) -> bytes:
        """Render a quotation view to document bytes."""
        pass
