"""
Domain exceptions for the estimation engine.

Business-rule rejections (duplicates, invalid quantities, rate floors) are
reported as values by the composer and aggregator. The exceptions here cover
integration bugs, collaborator misses and use case gating.
"""

from typing import Any


class SalesdeskError(Exception):
    """Base exception for all Salesdesk errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Estimation Exceptions
class EstimationError(SalesdeskError):
    """Base exception for estimation composition errors."""

    pass


class LineItemNotFoundError(EstimationError):
    """A composer operation addressed a line item that is not in the document."""

    def __init__(self, line_item_id: str):
        super().__init__(
            f"Line item not found: {line_item_id}",
            code="LINE_ITEM_NOT_FOUND",
            details={"line_item_id": line_item_id},
        )


class AddOnNotFoundError(EstimationError):
    """A composer operation addressed an add-on missing from its parent."""

    def __init__(self, parent_id: str, add_on_id: str):
        super().__init__(
            f"Add-on {add_on_id} not found under line item {parent_id}",
            code="ADD_ON_NOT_FOUND",
            details={"parent_id": parent_id, "add_on_id": add_on_id},
        )


class EstimationNotReadyError(EstimationError):
    """Estimation cannot be submitted in its current state."""

    def __init__(self, reasons: list[str]):
        super().__init__(
            "Estimation is not ready for submission: " + ", ".join(reasons),
            code="ESTIMATION_NOT_READY",
            details={"reasons": list(reasons)},
        )


# Storage Exceptions
class StorageError(SalesdeskError):
    """Base exception for persistence collaborator failures."""

    pass


class EstimationNotFoundError(StorageError):
    """Persisted estimation not found."""

    def __init__(self, estimation_id: int):
        super().__init__(
            f"Estimation not found: {estimation_id}",
            code="ESTIMATION_NOT_FOUND",
            details={"estimation_id": estimation_id},
        )
