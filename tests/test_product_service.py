# =============================================================================
# tests/test_product_service.py - ProductService Tests
# =============================================================================
# Covers the save / update / remove orchestration including the
# compensating delete when the image store fails after the row is written.
#
# Run with: pytest tests/test_product_service.py -v
# =============================================================================

import pytest

from automart.infrastructure.exceptions import (
    CategoryNotFoundError,
    ForbiddenDeleteError,
    ImageUploadFailedError,
    InvalidDateFormatError,
    ProductNotFoundError,
)
from automart.models import Product
from automart.repositories.product_repository import ProductRepository
from automart.schemas.product import ImagePayload, ProductResponse, ProductSaveRequest, ProductUpdateRequest
from automart.services import ProductService

BUCKET = "test-products"


def make_save_request(**overrides):
    data = {
        "category_code": "ENG",
        "name": "Bolt",
        "price": 100,
        "cost": 60,
        "stock": 40,
        "min_stock": 5,
        "receiving_date": "2024-03-01",
        "code": "BLT-001",
        "location": "A-1",
    }
    data.update(overrides)
    return ProductSaveRequest(**data)


def make_update_request(**overrides):
    data = {
        "name": "Bolt",
        "price": 150,
        "cost": 60,
        "stock": 35,
        "min_stock": 5,
        "receiving_date": "2024-04-01",
        "code": "BLT-001",
        "location": "A-2",
    }
    data.update(overrides)
    return ProductUpdateRequest(**data)


def image(content=b"\x89PNG-bolt"):
    return ImagePayload(content=content, content_type="image/png", filename="bolt.png")


def row_count(db_session):
    return db_session.query(Product).count()


# =============================================================================
# save_product
# =============================================================================

class TestSaveProduct:

    def test_save_persists_row_and_image(self, product_service, eng_category, storage, db_session):
        result = product_service.save_product(make_save_request(), image())

        assert result["no"] is not None
        assert result["img_url"] == f"products/ENG/{result['no']}"
        assert result["category_code"] == "ENG"
        assert result["receiving_date"] == "2024-03-01"
        assert set(result) == set(ProductResponse.model_fields)
        assert row_count(db_session) == 1
        assert storage.objects[(BUCKET, result["img_url"])] == b"\x89PNG-bolt"

    def test_unknown_category_creates_nothing(self, product_service, storage, db_session):
        with pytest.raises(CategoryNotFoundError):
            product_service.save_product(make_save_request(category_code="NOPE"), image())

        assert row_count(db_session) == 0
        assert storage.upload_calls == []

    def test_invalid_date_creates_nothing(self, product_service, eng_category, storage, db_session):
        with pytest.raises(InvalidDateFormatError):
            product_service.save_product(make_save_request(receiving_date="03/01/2024"), image())

        assert row_count(db_session) == 0
        assert storage.upload_calls == []

    def test_upload_failure_deletes_written_row(self, product_service, eng_category, storage, db_session):
        storage.fail_upload = True

        with pytest.raises(ImageUploadFailedError) as exc_info:
            product_service.save_product(make_save_request(), image())

        # The upload was attempted against the row's key, then the row was removed
        assert len(storage.upload_calls) == 1
        assert storage.upload_calls[0][1].startswith("products/ENG/")
        assert exc_info.value.details["object_name"] == storage.upload_calls[0][1]
        assert row_count(db_session) == 0
        assert storage.objects == {}

    def test_failed_compensation_still_reports_upload_failure(
            self, db_session, category_repository, uploader, storage, eng_category):

        class BrokenDeleteRepository(ProductRepository):
            def delete(self, product):
                raise RuntimeError("database went away")

        service = ProductService(BrokenDeleteRepository(db_session), category_repository, uploader)
        storage.fail_upload = True

        with pytest.raises(ImageUploadFailedError):
            service.save_product(make_save_request(), image())

    def test_failed_img_url_write_removes_row_and_blob(
            self, db_session, category_repository, uploader, storage, eng_category):

        class ImgUrlWriteFailsRepository(ProductRepository):
            def save(self, product):
                if product.img_url:
                    self.db.rollback()
                    raise RuntimeError("lost connection during commit")
                return super().save(product)

        service = ProductService(ImgUrlWriteFailsRepository(db_session), category_repository, uploader)

        with pytest.raises(RuntimeError):
            service.save_product(make_save_request(), image())

        assert len(storage.upload_calls) == 1
        assert storage.objects == {}
        assert row_count(db_session) == 0

    def test_each_save_gets_its_own_key(self, product_service, eng_category, storage):
        first = product_service.save_product(make_save_request(name="Bolt"), image(b"one"))
        second = product_service.save_product(make_save_request(name="Nut"), image(b"two"))

        assert first["no"] != second["no"]
        assert storage.objects[(BUCKET, first["img_url"])] == b"one"
        assert storage.objects[(BUCKET, second["img_url"])] == b"two"


# =============================================================================
# update_product
# =============================================================================

class TestUpdateProduct:

    @pytest.fixture
    def saved(self, product_service, eng_category):
        return product_service.save_product(make_save_request(), image())

    def test_update_without_image_skips_upload(self, product_service, saved, storage):
        calls_before = len(storage.upload_calls)

        result = product_service.update_product(saved["no"], make_update_request(), ImagePayload(b""))

        assert len(storage.upload_calls) == calls_before
        assert result["price"] == 150
        assert result["location"] == "A-2"
        assert result["img_url"] == saved["img_url"]

    def test_update_with_none_image_skips_upload(self, product_service, saved, storage):
        calls_before = len(storage.upload_calls)

        result = product_service.update_product(saved["no"], make_update_request(), None)

        assert len(storage.upload_calls) == calls_before
        assert result["img_url"] == saved["img_url"]

    def test_update_with_image_overwrites_blob(self, product_service, saved, storage, product_repository):
        result = product_service.update_product(saved["no"], make_update_request(), image(b"new-image"))

        assert result["img_url"] == saved["img_url"]
        assert storage.objects[(BUCKET, saved["img_url"])] == b"new-image"
        assert product_repository.find_by_no(saved["no"]).price == 150

    def test_update_unknown_product(self, product_service, eng_category):
        with pytest.raises(ProductNotFoundError):
            product_service.update_product(999, make_update_request(), None)

    def test_update_invalid_date_keeps_row(self, product_service, saved, product_repository):
        with pytest.raises(InvalidDateFormatError):
            product_service.update_product(saved["no"], make_update_request(receiving_date="tomorrow"), None)

        stored = product_repository.find_by_no(saved["no"])
        assert stored.price == 100
        assert stored.receiving_date.isoformat() == "2024-03-01"

    def test_upload_failure_keeps_existing_row_unchanged(
            self, product_service, saved, storage, product_repository):
        storage.fail_upload = True

        with pytest.raises(ImageUploadFailedError):
            product_service.update_product(saved["no"], make_update_request(), image(b"new-image"))

        stored = product_repository.find_by_no(saved["no"])
        assert stored is not None
        assert stored.price == 100
        assert stored.img_url == saved["img_url"]
        assert storage.objects[(BUCKET, saved["img_url"])] == b"\x89PNG-bolt"


# =============================================================================
# remove_product
# =============================================================================

class TestRemoveProduct:

    def test_remove_deletes_blob_and_row(self, product_service, eng_category, storage, db_session):
        saved = product_service.save_product(make_save_request(), image())

        product_service.remove_product(saved["no"])

        assert row_count(db_session) == 0
        assert (BUCKET, saved["img_url"]) in storage.delete_calls
        assert storage.objects == {}

    def test_remove_unknown_product_deletes_nothing(self, product_service, storage):
        with pytest.raises(ForbiddenDeleteError) as exc_info:
            product_service.remove_product(12345)

        assert isinstance(exc_info.value, ProductNotFoundError)
        assert exc_info.value.details == {"product_no": 12345}
        assert storage.delete_calls == []

    def test_blob_delete_failure_still_removes_row(self, product_service, eng_category, storage, db_session):
        saved = product_service.save_product(make_save_request(), image())
        storage.fail_delete = True

        product_service.remove_product(saved["no"])

        assert row_count(db_session) == 0

    def test_product_without_image_skips_blob_delete(
            self, product_service, product_repository, eng_category, storage):
        product = Product.create_product(eng_category, "Washer", 5, 2, 100, 10, "2024-01-10", "WSH", "B-3")
        product = product_repository.save(product)

        product_service.remove_product(product.no)

        assert storage.delete_calls == []
        assert product_repository.find_by_no(product.no) is None


# =============================================================================
# Reads and the end-to-end lifecycle
# =============================================================================

class TestProductReads:

    def test_list_filters_by_category_and_name(self, product_service, category_repository, eng_category):
        from automart.models import Category
        category_repository.save(Category(code="ELC", name="Electrical"))

        product_service.save_product(make_save_request(name="Bolt"), image())
        product_service.save_product(make_save_request(name="Big Bolt"), image())
        product_service.save_product(make_save_request(name="Fuse", category_code="ELC"), image())

        assert product_service.list_products()["total"] == 3
        eng_only = product_service.list_products(category_code="ENG")
        assert eng_only["total"] == 2
        assert {item["category_code"] for item in eng_only["items"]} == {"ENG"}
        assert product_service.list_products(name="bolt")["total"] == 2

    def test_list_pages(self, product_service, eng_category):
        for i in range(3):
            product_service.save_product(make_save_request(name=f"Item {i}"), image())

        page = product_service.list_products(page=2, limit=2)

        assert page["total"] == 3
        assert [item["name"] for item in page["items"]] == ["Item 2"]

    def test_get_product_and_image_url(self, product_service, eng_category):
        saved = product_service.save_product(make_save_request(), image())

        assert product_service.get_product(saved["no"]) == saved
        url = product_service.get_product_image_url(saved["no"], 120)
        assert url == f"http://memory/{BUCKET}/{saved['img_url']}?expires=120"

    def test_get_missing_product(self, product_service):
        with pytest.raises(ProductNotFoundError):
            product_service.get_product(1)


def test_create_update_remove_lifecycle(product_service, eng_category, storage, db_session):
    created = product_service.save_product(make_save_request(name="Bolt", price=100), image())
    assert created["img_url"] == f"products/ENG/{created['no']}"

    updated = product_service.update_product(created["no"], make_update_request(price=150), ImagePayload(b""))
    assert updated["price"] == 150
    assert updated["img_url"] == created["img_url"]

    product_service.remove_product(created["no"])
    assert (BUCKET, created["img_url"]) not in storage.objects
    assert row_count(db_session) == 0

    with pytest.raises(ProductNotFoundError):
        product_service.remove_product(created["no"])
