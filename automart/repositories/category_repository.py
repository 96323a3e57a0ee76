from typing import List, Optional

from sqlalchemy.orm import Session

from automart.models.category import Category


class CategoryRepository:
    """商品分类仓储，按业务编码查找分类"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_code(self, code: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.code == code).first()

    def find_all(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.code).all()

    def save(self, category: Category) -> Category:
        try:
            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
            return category
        except Exception:
            self.db.rollback()
            raise

    def delete(self, category: Category) -> None:
        try:
            self.db.delete(category)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
