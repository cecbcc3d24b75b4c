"""Unit tests for domain exceptions."""

import pytest

from salesdesk.core.exceptions import (
    AddOnNotFoundError,
    EstimationError,
    EstimationNotFoundError,
    EstimationNotReadyError,
    LineItemNotFoundError,
    SalesdeskError,
    StorageError,
)


class TestSalesdeskError:
    """Tests for base SalesdeskError exception."""

    def test_basic_initialization(self):
        error = SalesdeskError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "SalesdeskError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = SalesdeskError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = SalesdeskError("Error", code="ERR", details={"key": "value"})
        assert error.to_dict() == {
            "error": "ERR",
            "message": "Error",
            "details": {"key": "value"},
        }


class TestEstimationErrors:
    def test_line_item_not_found(self):
        error = LineItemNotFoundError("7-24x13x1")
        assert isinstance(error, EstimationError)
        assert error.code == "LINE_ITEM_NOT_FOUND"
        assert "7-24x13x1" in error.message
        assert error.details == {"line_item_id": "7-24x13x1"}

    def test_add_on_not_found(self):
        error = AddOnNotFoundError("12", "31")
        assert error.code == "ADD_ON_NOT_FOUND"
        assert error.details == {"parent_id": "12", "add_on_id": "31"}

    def test_not_ready(self):
        error = EstimationNotReadyError(["NO_LINE_ITEMS", "MISSING_BANK"])
        assert error.code == "ESTIMATION_NOT_READY"
        assert error.message.endswith("NO_LINE_ITEMS, MISSING_BANK")
        assert error.details == {"reasons": ["NO_LINE_ITEMS", "MISSING_BANK"]}

    def test_catchable_as_base(self):
        with pytest.raises(SalesdeskError):
            raise AddOnNotFoundError("12", "31")


class TestStorageErrors:
    def test_estimation_not_found(self):
        error = EstimationNotFoundError(88)
        assert isinstance(error, StorageError)
        assert error.code == "ESTIMATION_NOT_FOUND"
        assert error.details == {"estimation_id": 88}
