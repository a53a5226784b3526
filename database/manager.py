"""数据库管理器 —— 统一门面（Facade）。

DatabaseManager 是 database 模块的统一入口，组合了连接、仓库和服务：

1. **仓库访问**（细粒度）：
   ``db.enum_metadata`` 直接读写 ``__enums__`` 表，返回 ORM 对象。

2. **服务访问**（粗粒度）：
   ``db.enums`` 负责枚举定义与数据库记录之间的同步和重建。
"""
from typing import Optional

from sqlalchemy.orm import Session

from adb_meta import MetadataRegistry

from .connection import DatabaseConnection
from .enum_repository import EnumMetadataRepository
from .enum_service import EnumMetadataService


class DatabaseManager:
    """数据库管理器 —— 统一门面。

    Attributes:
        conn: 数据库连接管理器。
        enum_metadata: 枚举元数据仓库。
        enums: 枚举元数据服务。

    Example::

        db = DatabaseManager("sqlite:///data/metadata.db")
        db.create_tables()

        db.enums.save_adb_enum(OrderStatus)
        records = db.enums.get_all()
    """

    def __init__(self, database_url: Optional[str] = None,
                 registry: Optional[MetadataRegistry] = None) -> None:
        """初始化数据库管理器。

        Args:
            database_url: 数据库连接URL。如果为None则使用settings配置。
            registry: 读取 EnumInfo 使用的元数据注册表，默认为 default_registry。
        """
        self.conn = DatabaseConnection(database_url)
        self.enum_metadata = EnumMetadataRepository(self.conn)
        self.enums = EnumMetadataService(self.enum_metadata, registry)

    def create_tables(self) -> None:
        """创建所有数据库表（幂等操作）。"""
        self.conn.create_tables()

    def get_session(self) -> Session:
        """获取数据库会话。"""
        return self.conn.get_session()

    @property
    def database_url(self) -> str:
        """数据库连接URL。"""
        return self.conn.database_url

    def close(self) -> None:
        """关闭数据库连接。"""
        self.conn.close()
