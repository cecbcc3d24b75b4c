"""Tests for persisted wire shapes."""

from salesdesk.core.entities.persisted import (
    EstimationHeader,
    EstimationPayload,
    PersistedEstimation,
    PersistedProduct,
    ProductPayload,
)


class TestPersistedRecords:
    def test_scalars_become_trimmed_strings(self):
        product = PersistedProduct.model_validate(
            {"id": 12, "quantity": 2.0, "unitPrice": 250.5, "notes": None, "name": "  Tray "}
        )
        assert product.id == "12"
        assert product.quantity == "2"
        assert product.unit_price == "250.5"
        assert product.notes == ""
        assert product.name == "Tray"

    def test_null_addons_and_products(self):
        assert PersistedProduct.model_validate({"addons": None}).addons == []
        assert PersistedEstimation.model_validate({"products": None}).products == []

    def test_snake_case_population(self):
        record = PersistedEstimation(customer_name="Rayal Nuts", tax_total="10")
        assert record.customer_name == "Rayal Nuts"
        assert record.tax_total == "10"

    def test_from_payload(self):
        payload = EstimationPayload(
            estimation=EstimationHeader(estimation_id=88, lead_id="42", grand_total="100.00"),
            products=[ProductPayload(product_id="12", size="N/A", quantity="2")],
        )

        record = PersistedEstimation.from_payload(payload)

        assert record.id == "88"
        assert record.lead_id == "42"
        assert record.grand_total == "100.00"
        assert record.products[0].product_id == "12"


class TestEstimationPayload:
    def test_api_dict_without_estimation_id(self):
        payload = EstimationPayload(estimation=EstimationHeader(lead_id=None))

        data = payload.to_api_dict()

        assert "estimationId" not in data["estimation"]
        assert data["estimation"]["leadId"] is None
        assert data["estimation"]["status"] == "1"
        assert data["products"] == []

    def test_api_dict_with_estimation_id(self):
        payload = EstimationPayload(estimation=EstimationHeader(estimation_id=7))
        assert payload.to_api_dict()["estimation"]["estimationId"] == 7

    def test_product_defaults(self):
        data = ProductPayload(product_id="12").model_dump(by_alias=True)
        assert data["status"] == "active"
        assert data["productId"] == "12"
        assert data["addons"] == []
