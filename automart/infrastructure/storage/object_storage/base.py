"""
Object Storage Abstract Base Classes

Defines the interface the product image store must satisfy so the
services never depend on a concrete provider (MinIO, AWS S3, etc.).
"""

from abc import ABC, abstractmethod
from typing import Optional, BinaryIO, Union
from dataclasses import dataclass
from datetime import timedelta


@dataclass
class StorageConfig:
    """Configuration for object storage services"""
    endpoint: str
    access_key: str
    secret_key: str
    secure: bool = True
    region: Optional[str] = None

    # Bucket holding products/{categoryCode}/{productNo} objects
    image_bucket: str = "automart-products"


class ObjectStorageInterface(ABC):
    """
    Abstract interface for object storage operations

    Write and delete operations report failure through their boolean
    result instead of raising, so callers decide how a failed call
    affects the surrounding business operation.
    """

    def __init__(self, config: StorageConfig):
        self.config = config

    @abstractmethod
    def ensure_bucket_exists(self, bucket_name: str) -> bool:
        """
        Ensure bucket exists, create if it doesn't

        Args:
            bucket_name: Name of the bucket

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    def upload_file_object(
        self,
        file_data: Union[bytes, BinaryIO],
        bucket_name: str,
        object_name: str,
        content_type: Optional[str] = None
    ) -> bool:
        """
        Upload file object (bytes or stream) to storage, overwriting any
        existing object with the same name

        Args:
            file_data: File content as bytes or binary stream
            bucket_name: Target bucket name
            object_name: Object name in storage
            content_type: MIME content type

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    def get_file_url(
        self,
        bucket_name: str,
        object_name: str,
        expires: Union[int, timedelta] = 3600
    ) -> Optional[str]:
        """
        Generate presigned URL for file access

        Returns:
            Presigned URL or None if failed
        """
        pass

    @abstractmethod
    def delete_file(self, bucket_name: str, object_name: str) -> bool:
        """
        Delete file from storage

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    def initialize(self) -> bool:
        """
        Initialize storage service (create required buckets, etc.)

        Returns:
            True if successful, False otherwise
        """
        pass
