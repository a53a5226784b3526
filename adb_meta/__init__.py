"""ADB 元数据模块 - 为数据模型挂载业务元数据

为持久化层定义的模型、字段和枚举挂载结构化的业务描述信息
（"这个实体/字段/枚举在业务上是什么"），并提供查询、筛选和校验。

核心组件：
- MetadataRegistry: 统一门面，组合实体/字段/枚举三个注册表
- DescriptorStore: 以 (owner, member, kind) 为键的描述符存储
- ADBEnum: 带元数据、按 id 缓存的增强枚举
- validation: 各类描述符的校验函数（返回结果，不抛异常）

使用示例：
    ```python
    from adb_meta import ADBEnum, default_registry as registry

    OrderStatus = ADBEnum.create(
        id="enum-order-status-001", code="order:status", label="订单状态",
        values={"PENDING": "pending", "PAID": "paid"},
    )

    @registry.column_info("status", id="f1", label="订单状态",
                          extend_type="adb-enum", enum_config={"enum": OrderStatus})
    @registry.entity_info(id="e1", code="order:tx", label="订单")
    class Order(Base):
        ...
    ```
"""
from adb_meta.adb_enum import ADBEnum
from adb_meta.column_info import ColumnInfoRegistry
from adb_meta.entity_info import EntityInfoRegistry
from adb_meta.enum_info import EnumInfoRegistry
from adb_meta.exceptions import MetadataError, MissingEnumInfoError
from adb_meta.registry import MetadataRegistry, default_registry
from adb_meta.store import DescriptorStore
from adb_meta.types import (
    AutoIncrementIdConfig, ColumnEntry, ColumnInfo, EntityEntry,
    EntityFullInfo, EntityInfo, EnumConfig, EnumInfo, EnumItemEntry,
    EnumItemOptions, ExtendType, GuidIdConfig, MediaConfig, MetadataKind,
    SnowflakeIdConfig, TargetValidation, TypeOption, ValidationResult,
)
from adb_meta.utils import deep_merge, generate_short_id, is_valid_code
from adb_meta.validation import (
    format_errors, validate_column_info, validate_entity_info,
    validate_enum_info, validate_enum_item,
)

__all__ = [
    # 核心
    "MetadataRegistry",
    "default_registry",
    "DescriptorStore",
    "EntityInfoRegistry",
    "ColumnInfoRegistry",
    "EnumInfoRegistry",
    "ADBEnum",
    # 描述符
    "EntityInfo",
    "ColumnInfo",
    "EnumInfo",
    "EnumItemOptions",
    "MediaConfig",
    "EnumConfig",
    "AutoIncrementIdConfig",
    "GuidIdConfig",
    "SnowflakeIdConfig",
    "MetadataKind",
    "ExtendType",
    # 查询结果
    "EntityEntry",
    "ColumnEntry",
    "EnumItemEntry",
    "EntityFullInfo",
    "TypeOption",
    "ValidationResult",
    "TargetValidation",
    # 校验
    "validate_entity_info",
    "validate_column_info",
    "validate_enum_info",
    "validate_enum_item",
    "format_errors",
    # 工具
    "generate_short_id",
    "is_valid_code",
    "deep_merge",
    # 异常
    "MetadataError",
    "MissingEnumInfoError",
]
