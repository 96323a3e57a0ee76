from datetime import date, datetime
from typing import Dict, Any

from sqlalchemy import Column, INT, VARCHAR, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from automart.core.config import settings
from automart.db.base import Base, get_cn_datetime
from automart.infrastructure.exceptions import InvalidDateFormatError
from automart.models.category import Category


def parse_receiving_date(value: str, date_format: str = None) -> date:
    """按配置的格式解析入库日期，失败时抛出 InvalidDateFormatError"""
    date_format = date_format or settings.RECEIVING_DATE_FORMAT
    try:
        return datetime.strptime((value or "").strip(), date_format).date()
    except ValueError:
        raise InvalidDateFormatError(value, date_format)


class Product(Base):
    """
    商品数据库模型

    记录单个SKU的库存状态。img_url 只有在图片上传成功后才会被赋值
    """
    __tablename__ = "t_product"

    no = Column(INT, primary_key=True, index=True, autoincrement=True)
    category_id = Column(INT, ForeignKey("t_category.id"), nullable=False)
    name = Column(VARCHAR(255), nullable=False)
    price = Column(INT, nullable=False, default=0)
    cost = Column(INT, nullable=False, default=0)
    stock = Column(INT, nullable=False, default=0)
    min_stock = Column(INT, nullable=False, default=0)
    receiving_date = Column(Date, nullable=True)
    code = Column(VARCHAR(64), nullable=True)
    location = Column(VARCHAR(255), nullable=True)
    img_url = Column(VARCHAR(512), nullable=True)
    create_time = Column(DateTime, default=get_cn_datetime)

    category = relationship("Category", back_populates="products", lazy="joined")

    @classmethod
    def create_product(
            cls,
            category: Category,
            name: str,
            price: int,
            cost: int,
            stock: int,
            min_stock: int,
            receiving_date: str,
            code: str,
            location: str,
    ) -> "Product":
        """
        创建商品

        先校验入库日期，校验失败时不会构造任何对象
        """
        parsed_date = parse_receiving_date(receiving_date)
        return cls(
            category=category,
            name=name,
            price=price,
            cost=cost,
            stock=stock,
            min_stock=min_stock,
            receiving_date=parsed_date,
            code=code,
            location=location,
            img_url=None,
        )

    def update(
            self,
            name: str,
            price: int,
            cost: int,
            stock: int,
            min_stock: int,
            receiving_date: str,
            code: str,
            location: str,
    ) -> "Product":
        """
        整体替换商品的可变字段，分类不可修改

        日期解析失败时商品保持原样
        """
        parsed_date = parse_receiving_date(receiving_date)
        self.name = name
        self.price = price
        self.cost = cost
        self.stock = stock
        self.min_stock = min_stock
        self.receiving_date = parsed_date
        self.code = code
        self.location = location
        return self

    @property
    def category_code(self) -> str:
        return self.category.code if self.category is not None else None

    def to_dict(self) -> Dict[str, Any]:
        """将商品转换为字典表示形式"""
        return {
            "no": self.no,
            "name": self.name,
            "price": self.price,
            "cost": self.cost,
            "stock": self.stock,
            "min_stock": self.min_stock,
            "receiving_date": self.receiving_date.isoformat() if self.receiving_date else None,
            "code": self.code,
            "location": self.location,
            "img_url": self.img_url or "",
            "category_code": self.category_code,
        }
