"""枚举元数据存储的连接管理。

负责 ``__enums__`` 表所在数据库的：
- 引擎创建（SQLite 文件库会自动创建所在目录）
- 会话工厂
- 建表

这里只有连接层面的操作，记录读写见 enum_repository。
"""
from pathlib import Path
from typing import Optional

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from .models import Base
from config.settings import settings


class DatabaseConnection:
    """同步数据库连接。

    Attributes:
        database_url: 连接URL。
        engine: SQLAlchemy 引擎。
        SessionLocal: 会话工厂。

    Example:
        ```python
        conn = DatabaseConnection("sqlite:///data/metadata.db")
        conn.create_tables()

        with conn.get_session() as session:
            ...
        ```
    """

    def __init__(self, database_url: Optional[str] = None) -> None:
        """
        Args:
            database_url: 连接URL，省略时读取 settings.database_url。
        """
        self.database_url: str = database_url or settings.database_url

        url = make_url(self.database_url)
        connect_args = {}
        if url.get_backend_name() == "sqlite":
            connect_args = {"check_same_thread": False}
            if url.database and url.database != ":memory:":
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(
            self.database_url,
            echo=settings.database_echo,
            connect_args=connect_args,
        )
        self.SessionLocal = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False
        )

    def create_tables(self) -> None:
        """按 models 中的模型建表，已存在的表跳过。"""
        Base.metadata.create_all(self.engine)
        logger.info(f"数据表已就绪: {', '.join(Base.metadata.tables)}")

    def get_session(self) -> Session:
        return self.SessionLocal()

    def close(self) -> None:
        """释放连接池。"""
        self.engine.dispose()
