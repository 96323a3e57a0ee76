import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from automart.core.config import settings

logger = logging.getLogger(__name__)

# 定义东八区时区（中国标准时间 UTC+8）
CST_TIMEZONE = timezone(timedelta(hours=8))


def get_cn_datetime():
    """获取当前的中国标准时间（东八区，UTC+8）"""
    return datetime.now(CST_TIMEZONE)


def _engine_options(database_uri: str) -> dict:
    """根据数据库类型生成引擎参数，SQLite不支持连接池大小设置"""
    if database_uri.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if make_url(database_uri).database in (None, "", ":memory:"):
            # 内存库需要所有连接共享同一个连接
            options["poolclass"] = StaticPool
        return options

    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
        "pool_recycle": 3600,
    }


# 创建数据库引擎
engine = create_engine(
    settings.SQLALCHEMY_DATABASE_URI,
    # 启用回显SQL语句，便于调试
    echo=False,
    **_engine_options(settings.SQLALCHEMY_DATABASE_URI)
)

# 创建数据库会话
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 创建基本模型类
Base = declarative_base()


def _ensure_mysql_database() -> None:
    """MySQL下数据库不存在时先创建数据库"""
    db_uri = settings.SQLALCHEMY_DATABASE_URI
    if not db_uri.startswith("mysql"):
        return

    db_name = make_url(db_uri).database
    # 创建不指定数据库的连接URI
    server_uri = db_uri.rsplit('/', 1)[0]

    temp_engine = create_engine(server_uri)
    try:
        with temp_engine.connect() as connection:
            result = connection.execute(text("SHOW DATABASES LIKE :name"), {"name": db_name})
            if not result.fetchone():
                connection.execute(text(f"CREATE DATABASE `{db_name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"))
                logger.info(f"数据库 {db_name} 已创建")
            else:
                logger.info(f"数据库 {db_name} 已存在")
    finally:
        temp_engine.dispose()


def init_db():
    """
    初始化数据库，如果表不存在则创建
    """
    if not settings.CREATE_TABLES:
        logger.info("自动创建表功能已禁用")
        return

    # 注册所有模型，保证 create_all 能看到全部表
    import automart.models  # noqa: F401

    try:
        _ensure_mysql_database()
        Base.metadata.create_all(bind=engine)
        logger.info("所有表已创建或已存在")
    except Exception as e:
        logger.error(f"初始化数据库时出错: {str(e)}")
        raise  # 重新抛出异常，以便在应用启动时捕获
