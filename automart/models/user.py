from typing import Dict, Any

from sqlalchemy import Column, INT, VARCHAR, DateTime

from automart.db.base import Base, get_cn_datetime

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"


class User(Base):
    """
    后台用户数据库模型

    只保存 bcrypt 哈希后的密码
    """
    __tablename__ = "t_user"

    id = Column(INT, primary_key=True, index=True, autoincrement=True)
    email = Column(VARCHAR(255), nullable=False, unique=True, index=True)
    name = Column(VARCHAR(255), nullable=False)
    password_hash = Column(VARCHAR(255), nullable=False)
    role = Column(VARCHAR(32), nullable=False, default=ROLE_USER)
    create_time = Column(DateTime, default=get_cn_datetime)

    def to_dict(self) -> Dict[str, Any]:
        """将用户转换为字典表示形式，不包含密码"""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }
