"""数据库模块 - 枚举元数据的持久化

为元数据注册表提供持久化协作方：把枚举定义（ADBEnum 或挂载了 EnumInfo 的枚举）
保存到 ``__enums__`` 表，并能从表中重建。

核心组件：
- DatabaseManager: 统一门面
- DatabaseConnection: 引擎与会话管理
- EnumMetadata: 枚举元数据 ORM 模型
- EnumMetadataRepository: ``__enums__`` 表的数据访问
- EnumMetadataService: 枚举定义与记录之间的同步
"""
from database.connection import DatabaseConnection
from database.enum_repository import EnumMetadataRepository
from database.enum_service import EnumMetadataService
from database.manager import DatabaseManager
from database.models import Base, EnumMetadata

__all__ = [
    "DatabaseManager",
    "DatabaseConnection",
    "EnumMetadata",
    "EnumMetadataRepository",
    "EnumMetadataService",
    "Base",
]
