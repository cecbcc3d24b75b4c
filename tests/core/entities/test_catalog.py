"""Tests for catalog product input."""

import pytest
from pydantic import ValidationError

from salesdesk.core.entities.catalog import CatalogBaseProduct


class TestCatalogBaseProduct:
    def test_standard_naming(self, standard_product):
        assert standard_product.id == "12"
        assert standard_product.name == "Bain Marie 4 Pan"
        assert standard_product.default_length == "60"
        assert standard_product.default_weight == "45"
        assert standard_product.rate_per_unit == 25000.0
        assert standard_product.min_cost == 20000.0
        assert standard_product.gst_percent == 18.0

    def test_custom_naming(self, plate_product):
        assert plate_product.default_length == "48"
        assert plate_product.default_width == "26"
        assert plate_product.default_thickness == "1"
        assert plate_product.default_weight == "120"
        assert plate_product.rate_per_kg == 500.0
        assert plate_product.grade == "304"

    def test_numeric_geometry_becomes_string(self):
        product = CatalogBaseProduct.model_validate({"id": 3, "length": 48.0, "weightOfObject": 12.5})
        assert product.default_length == "48"
        assert product.default_weight == "12.5"

    def test_unparsable_costs_default_to_zero(self):
        product = CatalogBaseProduct.model_validate(
            {"id": "3", "minCost": "", "maxCost": None, "ratePerKg": "n/a"}
        )
        assert product.min_cost == 0.0
        assert product.max_cost == 0.0
        assert product.rate_per_kg == 0.0

    def test_none_strings(self):
        product = CatalogBaseProduct.model_validate({"id": 3, "remark": None, "productName": None})
        assert product.remark == ""
        assert product.name == ""

    def test_unknown_fields_ignored(self):
        product = CatalogBaseProduct.model_validate({"id": 3, "vendorId": 9, "status": "active"})
        assert product.id == "3"

    def test_frozen(self, standard_product):
        with pytest.raises(ValidationError):
            standard_product.min_cost = 1.0
