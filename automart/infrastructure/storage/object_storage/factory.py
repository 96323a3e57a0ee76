"""
Object Storage Factory

Creates appropriate storage adapters based on configuration.
"""

from typing import Optional
from automart.core.config import settings
from .base import ObjectStorageInterface, StorageConfig
from .minio_adapter import MinIOAdapter


class StorageFactory:
    """Factory for creating object storage instances"""

    _adapters = {
        "minio": MinIOAdapter,
        # MinIO客户端兼容S3协议
        "s3": MinIOAdapter,
    }

    @classmethod
    def create_storage(
        cls,
        storage_type: str = "minio",
        config: Optional[StorageConfig] = None
    ) -> ObjectStorageInterface:
        """
        Create object storage instance based on type

        Args:
            storage_type: Type of storage ("minio" or "s3")
            config: Optional custom configuration

        Returns:
            ObjectStorageInterface implementation
        """
        adapter_class = cls._adapters.get(storage_type.lower())
        if adapter_class is None:
            raise ValueError(f"Unsupported storage type: {storage_type}")

        if config is None:
            config = cls.get_default_config()
        return adapter_class(config)

    @staticmethod
    def get_default_config() -> StorageConfig:
        """Get default configuration from settings"""
        return StorageConfig(
            endpoint=settings.MINIO_ENDPOINT,
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            secure=settings.MINIO_SECURE,
            region=settings.MINIO_REGION,
            image_bucket=settings.PRODUCT_IMAGE_BUCKET
        )

    @classmethod
    def get_default_storage(cls) -> ObjectStorageInterface:
        """Get default storage instance (MinIO)"""
        return cls.create_storage("minio")
