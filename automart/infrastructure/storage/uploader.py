import logging
from typing import BinaryIO, Optional, Union

from automart.infrastructure.exceptions import ImageUploadError
from automart.infrastructure.storage.object_storage import ObjectStorageInterface, StorageFactory

logger = logging.getLogger(__name__)


class Uploader:
    """
    商品图片上传器

    在对象存储之上提供按 "目录/文件名" 存取的接口，对象键形如
    products/{categoryCode}/{productNo}。上传失败抛出 ImageUploadError，
    删除失败只返回 False
    """

    def __init__(self, storage: ObjectStorageInterface, bucket_name: Optional[str] = None):
        self.storage = storage
        self.bucket_name = bucket_name or storage.config.image_bucket

    @staticmethod
    def build_key(dir_name: str, file_name: str) -> str:
        """拼接对象键，去掉多余的斜杠"""
        return f"{dir_name.strip('/')}/{file_name.strip('/')}"

    def upload(
            self,
            file_data: Union[bytes, BinaryIO],
            dir_name: str,
            file_name: str,
            content_type: Optional[str] = None,
    ) -> str:
        """
        上传图片，同名对象会被覆盖

        Args:
            file_data: 图片内容
            dir_name: 目录，例如 products/ENG
            file_name: 文件名，通常为商品编号

        Returns:
            str: 存储的对象键

        Raises:
            ImageUploadError: 对象存储写入失败
        """
        key = self.build_key(dir_name, file_name)
        if not self.storage.upload_file_object(file_data, self.bucket_name, key, content_type):
            raise ImageUploadError(key, f"bucket={self.bucket_name}")
        logger.info(f"商品图片已保存: {self.bucket_name}/{key}")
        return key

    def delete(self, key: str) -> bool:
        """删除对象，空键直接忽略"""
        if not key:
            return True
        return self.storage.delete_file(self.bucket_name, key)

    def get_url(self, key: str, expires: int = 3600) -> Optional[str]:
        if not key:
            return None
        return self.storage.get_file_url(self.bucket_name, key, expires)


def get_default_uploader() -> Uploader:
    """使用默认对象存储配置创建上传器"""
    return Uploader(StorageFactory.get_default_storage())
