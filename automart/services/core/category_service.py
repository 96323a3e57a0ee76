import logging
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError

from automart.infrastructure.exceptions import (
    CategoryInUseError,
    CategoryNotFoundError,
    DuplicateCategoryError,
)
from automart.models.category import Category
from automart.repositories.category_repository import CategoryRepository
from automart.repositories.product_repository import ProductRepository
from automart.schemas.category import CategoryCreate, CategoryResponse

logger = logging.getLogger(__name__)


class CategoryService:

    def __init__(self, category_repository: CategoryRepository, product_repository: ProductRepository):
        self.category_repository = category_repository
        self.product_repository = product_repository

    def create_category(self, request: CategoryCreate) -> Dict[str, Any]:
        """创建商品分类，编码重复时抛出 DuplicateCategoryError"""
        if self.category_repository.find_by_code(request.code) is not None:
            raise DuplicateCategoryError(request.code)

        try:
            category = self.category_repository.save(Category(code=request.code, name=request.name))
        except IntegrityError as e:
            # 并发创建同一编码时由唯一索引兜底
            raise DuplicateCategoryError(request.code) from e

        logger.info(f"商品分类创建成功: {category.code}")
        return CategoryResponse.of(category).model_dump()

    def list_categories(self) -> List[Dict[str, Any]]:
        return [CategoryResponse.of(category).model_dump() for category in self.category_repository.find_all()]

    def get_category(self, code: str) -> Dict[str, Any]:
        category = self.category_repository.find_by_code(code)
        if category is None:
            raise CategoryNotFoundError(code)
        return CategoryResponse.of(category).model_dump()

    def delete_category(self, code: str) -> None:
        """
        删除商品分类

        仍有商品引用该分类时拒绝删除
        """
        category = self.category_repository.find_by_code(code)
        if category is None:
            raise CategoryNotFoundError(code)

        product_count = self.product_repository.count_by_category(category)
        if product_count > 0:
            raise CategoryInUseError(code, product_count)

        self.category_repository.delete(category)
        logger.info(f"商品分类删除成功: {code}")
