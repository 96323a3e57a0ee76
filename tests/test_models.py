# =============================================================================
# tests/test_models.py - ORM Model Tests
# =============================================================================
# Product construction and update keep date validation next to the fields
# they guard: a bad receiving date never produces or mutates a product.
# =============================================================================

from datetime import date

import pytest

from automart.infrastructure.exceptions import InvalidDateFormatError
from automart.models import Category, Product
from automart.models.product import parse_receiving_date


@pytest.fixture
def category():
    return Category(code="ENG", name="Engine parts")


class TestParseReceivingDate:

    def test_parses_default_format(self):
        assert parse_receiving_date("2024-02-29") == date(2024, 2, 29)

    def test_strips_whitespace(self):
        assert parse_receiving_date(" 2024-01-05 ") == date(2024, 1, 5)

    def test_custom_format(self):
        assert parse_receiving_date("05.01.2024", "%d.%m.%Y") == date(2024, 1, 5)

    @pytest.mark.parametrize("value", ["", "2024-13-01", "2023-02-29", "yesterday", None])
    def test_rejects_bad_values(self, value):
        with pytest.raises(InvalidDateFormatError) as exc_info:
            parse_receiving_date(value)
        assert exc_info.value.details["expected_format"] == "%Y-%m-%d"


class TestProduct:

    def test_create_product(self, category):
        product = Product.create_product(category, "Bolt", 100, 60, 40, 5, "2024-03-01", "BLT", "A-1")

        assert product.category is category
        assert product.receiving_date == date(2024, 3, 1)
        assert product.img_url is None
        assert product.to_dict()["img_url"] == ""
        assert product.to_dict()["category_code"] == "ENG"

    def test_create_product_with_bad_date(self, category):
        with pytest.raises(InvalidDateFormatError):
            Product.create_product(category, "Bolt", 100, 60, 40, 5, "01-03-2024", "BLT", "A-1")

    def test_update_replaces_fields_but_not_category(self, category):
        product = Product.create_product(category, "Bolt", 100, 60, 40, 5, "2024-03-01", "BLT", "A-1")
        product.img_url = "products/ENG/1"

        returned = product.update("Bolt M8", 150, 70, 30, 4, "2024-04-02", "BLT-8", "B-2")

        assert returned is product
        assert product.to_dict() == {
            "no": None,
            "name": "Bolt M8",
            "price": 150,
            "cost": 70,
            "stock": 30,
            "min_stock": 4,
            "receiving_date": "2024-04-02",
            "code": "BLT-8",
            "location": "B-2",
            "img_url": "products/ENG/1",
            "category_code": "ENG",
        }

    def test_update_with_bad_date_changes_nothing(self, category):
        product = Product.create_product(category, "Bolt", 100, 60, 40, 5, "2024-03-01", "BLT", "A-1")
        before = product.to_dict()

        with pytest.raises(InvalidDateFormatError):
            product.update("Other", 1, 1, 1, 1, "not-a-date", "X", "Y")

        assert product.to_dict() == before
