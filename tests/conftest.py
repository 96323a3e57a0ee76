# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Sets up the test environment before any automart import (settings and the
# SQLAlchemy engine are created at import time) and provides shared fixtures:
# - an in-memory SQLite session with all tables created
# - an in-memory object storage standing in for MinIO
# - repositories and services wired the way the API wires them
# =============================================================================

import os

os.environ.setdefault("DATABASE_URI", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("MINIO_ENDPOINT", "localhost:9000")
os.environ.setdefault("PRODUCT_IMAGE_BUCKET", "test-products")

import pytest

from automart.db.base import Base, SessionLocal, engine
from automart.infrastructure.storage.object_storage import ObjectStorageInterface, StorageConfig
from automart.infrastructure.storage.uploader import Uploader
from automart.models import Category
from automart.repositories.category_repository import CategoryRepository
from automart.repositories.product_repository import ProductRepository
from automart.repositories.user_repository import UserRepository
from automart.services import AuthService, CategoryService, ProductService


class InMemoryStorage(ObjectStorageInterface):
    """Object storage kept in a dict; failures can be switched on per test."""

    def __init__(self, config: StorageConfig = None):
        super().__init__(config or StorageConfig(
            endpoint="memory", access_key="", secret_key="", image_bucket="test-products"
        ))
        self.objects = {}
        self.upload_calls = []
        self.delete_calls = []
        self.fail_upload = False
        self.fail_delete = False

    def ensure_bucket_exists(self, bucket_name):
        return True

    def upload_file_object(self, file_data, bucket_name, object_name, content_type=None):
        self.upload_calls.append((bucket_name, object_name))
        if self.fail_upload:
            return False
        if not isinstance(file_data, bytes):
            file_data = file_data.read()
        self.objects[(bucket_name, object_name)] = file_data
        return True

    def get_file_url(self, bucket_name, object_name, expires=3600):
        return f"http://memory/{bucket_name}/{object_name}?expires={int(expires)}"

    def delete_file(self, bucket_name, object_name):
        self.delete_calls.append((bucket_name, object_name))
        if self.fail_delete:
            return False
        self.objects.pop((bucket_name, object_name), None)
        return True

    def initialize(self):
        return True


@pytest.fixture
def db_session():
    """Fresh schema per test on the shared in-memory engine."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def uploader(storage):
    return Uploader(storage)


@pytest.fixture
def product_repository(db_session):
    return ProductRepository(db_session)


@pytest.fixture
def category_repository(db_session):
    return CategoryRepository(db_session)


@pytest.fixture
def product_service(product_repository, category_repository, uploader):
    return ProductService(product_repository, category_repository, uploader)


@pytest.fixture
def category_service(category_repository, product_repository):
    return CategoryService(category_repository, product_repository)


@pytest.fixture
def auth_service(db_session):
    return AuthService(UserRepository(db_session))


@pytest.fixture
def eng_category(category_repository):
    return category_repository.save(Category(code="ENG", name="Engine parts"))
