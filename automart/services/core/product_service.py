import logging
from typing import Any, Dict, Optional

from automart.core.config import settings
from automart.infrastructure.exceptions import (
    CategoryNotFoundError,
    ForbiddenDeleteError,
    ImageUploadError,
    ImageUploadFailedError,
    ProductNotFoundError,
)
from automart.infrastructure.storage.uploader import Uploader
from automart.models.product import Product
from automart.repositories.category_repository import CategoryRepository
from automart.repositories.product_repository import ProductRepository
from automart.schemas.product import ImagePayload, ProductResponse, ProductSaveRequest, ProductUpdateRequest

logger = logging.getLogger(__name__)


class ProductService:
    """
    商品业务服务

    数据库写入与对象存储不在同一个事务中：先写入商品，再上传图片，
    上传成功后回写图片路径；上传失败时手动删除刚写入的商品
    """

    def __init__(
            self,
            product_repository: ProductRepository,
            category_repository: CategoryRepository,
            uploader: Uploader,
    ):
        self.product_repository = product_repository
        self.category_repository = category_repository
        self.uploader = uploader

    @staticmethod
    def image_dir(category_code: str) -> str:
        """图片目录: products/{categoryCode}"""
        return f"{settings.PRODUCT_IMAGE_DIR}/{category_code}"

    def save_product(self, request: ProductSaveRequest, image: ImagePayload) -> Dict[str, Any]:
        """
        商品登记

        Args:
            request: 商品信息
            image: 商品图片

        Returns:
            dict: 已保存商品的响应视图，包含编号和图片路径
        """
        category = self.category_repository.find_by_code(request.category_code)
        if category is None:
            raise CategoryNotFoundError(request.category_code)

        product = Product.create_product(
            category, request.name, request.price, request.cost, request.stock,
            request.min_stock, request.receiving_date, request.code, request.location,
        )
        product = self.product_repository.save(product)

        dir_name = self.image_dir(category.code)
        try:
            key = self.uploader.upload(image.content, dir_name, str(product.no), image.content_type)
        except ImageUploadError as e:
            logger.error(f"商品图片上传失败，删除已保存的商品 {product.no}: {e}")
            self._compensate_save(product)
            raise ImageUploadFailedError(e.object_name) from e

        product_no = product.no
        try:
            product.img_url = key
            product = self.product_repository.save(product)
        except Exception:
            logger.error(f"回写商品 {product_no} 图片路径失败，删除已上传的图片和商品")
            if not self.uploader.delete(key):
                logger.warning(f"商品 {product_no} 的图片删除失败: {key}")
            self._compensate_save(product)
            raise
        logger.info(f"商品登记成功: no={product.no}, img_url={product.img_url}")
        return ProductResponse.of(product).model_dump()

    def _compensate_save(self, product: Product) -> None:
        product_no = product.no
        try:
            self.product_repository.delete(product)
        except Exception:
            # 保留原始的上传失败，补偿失败只记录日志
            logger.exception(f"删除商品 {product_no} 失败，数据库中可能残留该商品")

    def update_product(
            self,
            product_no: int,
            request: ProductUpdateRequest,
            image: Optional[ImagePayload] = None,
    ) -> Dict[str, Any]:
        """
        商品修改

        只有提供了非空图片时才访问对象存储。图片上传失败时不删除原商品
        """
        product = self.product_repository.find_by_no(product_no)
        if product is None:
            raise ProductNotFoundError(product_no)

        dir_name = self.image_dir(product.category.code)

        product = product.update(
            request.name, request.price, request.cost, request.stock,
            request.min_stock, request.receiving_date, request.code, request.location,
        )

        if image is not None and not image.is_empty():
            try:
                key = self.uploader.upload(image.content, dir_name, str(product.no), image.content_type)
            except ImageUploadError as e:
                logger.error(f"商品 {product_no} 图片更新失败: {e}")
                self.product_repository.discard_changes()
                raise ImageUploadFailedError(e.object_name) from e
            if not product.img_url:
                product.img_url = key

        product = self.product_repository.save(product)
        logger.info(f"商品修改成功: no={product.no}")
        return ProductResponse.of(product).model_dump()

    def remove_product(self, product_no: int) -> None:
        """
        商品删除

        依次删除图片和商品，图片删除失败不会阻止商品删除
        """
        product = self.product_repository.find_by_no(product_no)
        if product is None:
            raise ForbiddenDeleteError(product_no)

        if product.img_url:
            if not self.uploader.delete(product.img_url):
                logger.warning(f"商品 {product_no} 的图片删除失败: {product.img_url}")

        self.product_repository.delete(product)
        logger.info(f"商品删除成功: no={product_no}")

    def get_product(self, product_no: int) -> Dict[str, Any]:
        product = self.product_repository.find_by_no(product_no)
        if product is None:
            raise ProductNotFoundError(product_no)
        return ProductResponse.of(product).model_dump()

    def list_products(
            self,
            page: int = 1,
            limit: int = 10,
            category_code: Optional[str] = None,
            name: Optional[str] = None,
    ) -> Dict[str, Any]:
        total, products = self.product_repository.find_page(page, limit, category_code, name)
        return {
            "total": total,
            "items": [ProductResponse.of(product).model_dump() for product in products],
        }

    def get_product_image_url(self, product_no: int, expires: Optional[int] = None) -> Optional[str]:
        """生成商品图片的临时访问地址，商品没有图片时返回 None"""
        product = self.product_repository.find_by_no(product_no)
        if product is None:
            raise ProductNotFoundError(product_no)
        return self.uploader.get_url(product.img_url, expires or settings.IMAGE_URL_EXPIRE_SECONDS)
