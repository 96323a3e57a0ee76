"""
商品仓储

封装商品表的查询与写入。每次写入都在自己的事务中提交，
写入失败时回滚并重新抛出异常
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from automart.models.category import Category
from automart.models.product import Product

logger = logging.getLogger(__name__)


class ProductRepository:

    def __init__(self, db: Session):
        self.db = db

    def find_by_no(self, product_no: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.no == product_no).first()

    def find_page(
            self,
            page: int = 1,
            limit: int = 10,
            category_code: Optional[str] = None,
            name: Optional[str] = None,
    ) -> Tuple[int, List[Product]]:
        """分页查询商品，可按分类编码和名称过滤"""
        query = self.db.query(Product)
        if category_code:
            query = query.join(Product.category).filter(Category.code == category_code)
        if name:
            query = query.filter(Product.name.ilike(f"%{name}%"))

        total = query.count()
        items = query.order_by(Product.no).offset((page - 1) * limit).limit(limit).all()
        return total, items

    def count_by_category(self, category: Category) -> int:
        return self.db.query(Product).filter(Product.category_id == category.id).count()

    def save(self, product: Product) -> Product:
        """新增或更新商品，提交后刷新以获取自动生成的编号"""
        try:
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
            return product
        except Exception:
            self.db.rollback()
            raise

    def delete(self, product: Product) -> None:
        try:
            self.db.delete(product)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def discard_changes(self) -> None:
        """放弃会话中尚未提交的修改"""
        self.db.rollback()
