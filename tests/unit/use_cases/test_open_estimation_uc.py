"""Tests for OpenEstimationUseCase."""

from unittest.mock import AsyncMock

import pytest

from salesdesk.application.use_cases.open_estimation import OpenEstimationUseCase
from salesdesk.core.entities.estimation import DocumentMode
from salesdesk.core.exceptions import EstimationNotFoundError


@pytest.fixture
def mock_store():
    return AsyncMock()


@pytest.fixture
def use_case(mock_store, mapper):
    return OpenEstimationUseCase(store=mock_store, mapper=mapper)


@pytest.fixture
def stored_record():
    return {
        "id": 88,
        "leadId": "42",
        "referenceNumber": "SBI-PI-26-003",
        "documentType": "Proforma Invoice",
        "customerName": "Rayal Nuts",
        "discount": "0",
        "gstPercent": "18",
        "subtotal": "31200.00",
        "grandTotal": "36816.00",
        "products": [
            {
                "productId": "7",
                "name": "SS Work Table Top",
                "size": "24 x 13 x 1",
                "quantity": "2",
                "unitPrice": "500",
                "totalPrice": "30000",
                "baseProductWeight": "120",
                "baseProductDefaultLength": "48",
                "baseProductDefaultWidth": "26",
                "baseProductDefaultThickness": "1",
                "addons": [
                    {
                        "productId": "31",
                        "name": "SS Leg",
                        "size": "10 x 2 x 1",
                        "quantity": "1",
                        "unitPrice": "300",
                        "totalPrice": "1200",
                        "baseProductWeight": "4",
                        "baseProductDefaultLength": "10",
                        "baseProductDefaultWidth": "2",
                        "baseProductDefaultThickness": "1",
                    }
                ],
            }
        ],
    }


class TestOpenEstimationUseCase:
    async def test_loads_for_editing(self, use_case, mock_store, stored_record):
        mock_store.get_estimation.return_value = stored_record

        result = await use_case.execute(88)

        mock_store.get_estimation.assert_awaited_once_with(88)
        doc = result.composer.document
        assert doc.mode is DocumentMode.EDIT
        assert doc.estimation_id == 88
        assert [i.id for i in doc.custom_line_items] == ["7-24x13x1"]
        assert result.totals.subtotal == 31200.0
        assert result.totals.grand_total == pytest.approx(36816.0)

    async def test_composer_edits_loaded_document(self, use_case, mock_store, stored_record):
        mock_store.get_estimation.return_value = stored_record

        result = await use_case.execute(88)
        result.composer.update_line_item_quantity("7-24x13x1", 1)

        assert result.composer.get_line_item("7-24x13x1").total_amount == 15000.0

    async def test_missing_estimation_raises(self, use_case, mock_store):
        mock_store.get_estimation.return_value = None

        with pytest.raises(EstimationNotFoundError) as exc_info:
            await use_case.execute(404)
        assert exc_info.value.details == {"estimation_id": 404}

    async def test_record_without_id_keeps_requested_id(self, use_case, mock_store, stored_record):
        del stored_record["id"]
        mock_store.get_estimation.return_value = stored_record

        result = await use_case.execute(88)

        assert result.composer.document.estimation_id == 88

    async def test_to_response(self, use_case, mock_store, stored_record):
        mock_store.get_estimation.return_value = stored_record

        response = OpenEstimationUseCase.to_response(await use_case.execute(88))

        assert response.estimation_id == 88
        assert response.lead_id == 42
        assert response.document_type == "Proforma Invoice"
        assert response.line_item_count == 1
        assert response.totals.tax_amount == 5616.0
        assert response.stored_totals.grand_total == 36816.0
