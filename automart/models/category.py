from typing import Dict, Any

from sqlalchemy import Column, INT, VARCHAR, DateTime
from sqlalchemy.orm import relationship

from automart.db.base import Base, get_cn_datetime


class Category(Base):
    """
    商品分类数据库模型

    code 为业务主键，创建后不可修改；商品只引用分类，不拥有分类
    """
    __tablename__ = "t_category"

    id = Column(INT, primary_key=True, index=True, autoincrement=True)
    code = Column(VARCHAR(64), nullable=False, unique=True, index=True)
    name = Column(VARCHAR(255), nullable=False)
    create_time = Column(DateTime, default=get_cn_datetime)

    products = relationship("Product", back_populates="category")

    def to_dict(self) -> Dict[str, Any]:
        """将分类转换为字典表示形式"""
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
        }
