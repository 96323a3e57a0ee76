"""
MinIO Object Storage Adapter

Implements ObjectStorageInterface on top of the MinIO client, which
speaks the S3 protocol and therefore also works against AWS S3.
"""

import logging
import io
from typing import Optional, BinaryIO, Union
from datetime import timedelta

from minio import Minio
from minio.error import S3Error

from .base import ObjectStorageInterface, StorageConfig

logger = logging.getLogger(__name__)


class MinIOAdapter(ObjectStorageInterface):
    """
    MinIO implementation of ObjectStorageInterface
    """

    def __init__(self, config: StorageConfig, client: Optional[Minio] = None):
        super().__init__(config)
        self.client = client or Minio(
            endpoint=config.endpoint,
            access_key=config.access_key,
            secret_key=config.secret_key,
            secure=config.secure,
            region=config.region
        )

    def ensure_bucket_exists(self, bucket_name: str) -> bool:
        """Ensure bucket exists, create if it doesn't"""
        try:
            if not self.client.bucket_exists(bucket_name):
                self.client.make_bucket(bucket_name)
                logger.info(f"✅ 创建存储桶 '{bucket_name}' 成功")
            return True
        except S3Error as e:
            logger.error(f"❌ 存储桶操作失败: {e}")
            return False

    def upload_file_object(
        self,
        file_data: Union[bytes, BinaryIO],
        bucket_name: str,
        object_name: str,
        content_type: Optional[str] = None
    ) -> bool:
        """Upload file object (bytes or stream) to MinIO"""
        try:
            if not self.ensure_bucket_exists(bucket_name):
                return False

            if isinstance(file_data, bytes):
                data_stream = io.BytesIO(file_data)
                file_size = len(file_data)
            else:
                data_stream = file_data
                try:
                    current_pos = data_stream.tell()
                    data_stream.seek(0, 2)  # Seek to end
                    file_size = data_stream.tell() - current_pos
                    data_stream.seek(current_pos)
                except (OSError, io.UnsupportedOperation):
                    # 流不支持seek时读取全部内容
                    content = data_stream.read()
                    data_stream = io.BytesIO(content)
                    file_size = len(content)

            logger.debug(f"正在上传对象: {bucket_name}/{object_name} (大小: {file_size}字节)")

            self.client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=data_stream,
                length=file_size,
                content_type=content_type or "application/octet-stream"
            )

            logger.info(f"✅ 文件对象上传成功: {bucket_name}/{object_name}")
            return True

        except S3Error as e:
            logger.error(f"❌ 文件上传失败 {bucket_name}/{object_name}: {e}")
            return False
        except Exception as e:
            logger.error(f"❌ 上传过程中发生错误: {str(e)}")
            return False

    def get_file_url(
        self,
        bucket_name: str,
        object_name: str,
        expires: Union[int, timedelta] = 3600
    ) -> Optional[str]:
        """Generate presigned URL for file access"""
        try:
            if isinstance(expires, int):
                expires_delta = timedelta(seconds=expires)
            else:
                expires_delta = expires

            url = self.client.presigned_get_object(
                bucket_name=bucket_name,
                object_name=object_name,
                expires=expires_delta
            )

            logger.debug(f"生成临时URL: {bucket_name}/{object_name} (过期时间: {expires_delta})")
            return url

        except S3Error as e:
            logger.error(f"❌ 生成URL失败: {e}")
            return None
        except Exception as e:
            logger.error(f"❌ 生成URL时发生错误: {str(e)}")
            return None

    def delete_file(self, bucket_name: str, object_name: str) -> bool:
        """Delete file from MinIO"""
        try:
            logger.debug(f"正在删除文件: {bucket_name}/{object_name}")

            self.client.remove_object(
                bucket_name=bucket_name,
                object_name=object_name
            )

            logger.info(f"✅ 文件删除成功: {bucket_name}/{object_name}")
            return True

        except S3Error as e:
            logger.error(f"❌ 删除文件失败: {e}")
            return False
        except Exception as e:
            logger.error(f"❌ 删除过程中发生错误: {str(e)}")
            return False

    def initialize(self) -> bool:
        """Initialize MinIO service (create the product image bucket)"""
        logger.info(f"开始初始化MinIO存储桶, 终端: {self.config.endpoint}")

        try:
            buckets = self.client.list_buckets()
            logger.info(f"已连接到MinIO服务器, 当前存在{len(buckets)}个存储桶")
        except Exception as e:
            logger.error(f"❌ 连接MinIO服务器失败: {e}")
            return False

        if self.ensure_bucket_exists(self.config.image_bucket):
            logger.info("✅ MinIO存储桶初始化完成")
            return True

        logger.error("❌ MinIO存储桶初始化失败")
        return False
