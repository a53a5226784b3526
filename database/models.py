"""SQLAlchemy ORM 模型定义。

本模块定义了元数据持久化使用的ORM模型：
- EnumMetadata: 枚举元数据表（``__enums__``），保存枚举定义及其枚举项配置

模型本身也通过 default_registry 挂载了 EntityInfo / ColumnInfo。
"""
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String, Text
from sqlalchemy.orm import declarative_base

from adb_meta import default_registry

# SQLAlchemy declarative base，所有模型都继承自此类
Base = declarative_base()

# 允许使用旧式类型注解
Base.__allow_unmapped__ = True


class EnumMetadata(Base):
    """枚举元数据表模型。

    存储系统中所有枚举的元数据，用于枚举定义的持久化与重建。
    enum_id 和 code 均唯一；删除为软删除（is_active=False）。

    Attributes:
        id: 主键，自增整数。
        enum_id: 枚举唯一标识，必填，唯一，最大长度50字符。
        code: 枚举识别码，必填，唯一，最大长度100字符。
        label: 枚举显示名称，必填，最大长度200字符。
        description: 枚举描述，可选，文本类型。
        items: 枚举项配置（JSON），键为枚举键，默认空字典。
        enum_name: 枚举名称，必填，最大长度100字符。
        enum_values: 枚举键值映射（JSON），可选。
        is_active: 是否激活，布尔值，默认True。
        created_at: 创建时间，自动设置为当前UTC时间。
        updated_at: 更新时间，自动设置为当前UTC时间，更新时自动更新。
    """
    __tablename__ = "__enums__"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    enum_id: str = Column(String(50), nullable=False, unique=True)
    code: str = Column(String(100), nullable=False, unique=True)
    label: str = Column(String(200), nullable=False)
    description: Optional[str] = Column(Text)
    items: Dict[str, Any] = Column(JSON, default=dict)
    enum_name: str = Column(String(100), nullable=False)
    enum_values: Optional[Dict[str, Any]] = Column(JSON)
    is_active: bool = Column(Boolean, default=True)
    created_at: datetime = Column(DateTime, default=datetime.utcnow)
    updated_at: datetime = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """转换为记录字典（camelCase 键）。"""
        return {
            "id": self.id,
            "enumId": self.enum_id,
            "code": self.code,
            "label": self.label,
            "description": self.description,
            "items": self.items or {},
            "enumName": self.enum_name,
            "enumValues": self.enum_values,
            "isActive": self.is_active,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<EnumMetadata enum_id={self.enum_id!r} code={self.code!r}>"


default_registry.entities.define(EnumMetadata, {
    "id": "enum-metadata-entity-001",
    "code": "system:enum:metadata",
    "label": "Enum Metadata Table",
    "description": "Store metadata information for all enums in the system",
    "tags": ["system", "enum", "metadata"],
})

for _member, _column in (
    ("id", {"id": "field_enum_meta_id_001", "label": "Primary Key ID",
            "extendType": "adb-auto-increment-id",
            "autoIncrementIdConfig": {"startValue": 1, "increment": 1, "isPrimaryKey": True}}),
    ("enum_id", {"id": "field_enum_meta_enum_id_001", "label": "Enum Unique Identifier"}),
    ("code", {"id": "field_enum_meta_code_001", "label": "Enum Code"}),
    ("label", {"id": "field_enum_meta_label_001", "label": "Enum Display Name"}),
    ("description", {"id": "field_enum_meta_description_001", "label": "Enum Description"}),
    ("items", {"id": "field_enum_meta_items_001", "label": "Enum Items Configuration",
               "extendType": "json"}),
    ("enum_name", {"id": "field_enum_meta_enum_name_001", "label": "Enum Name"}),
    ("enum_values", {"id": "field_enum_meta_enum_values_001", "label": "Enum Values Mapping",
                     "extendType": "json"}),
    ("is_active", {"id": "field_enum_meta_is_active_001", "label": "Is Active"}),
    ("created_at", {"id": "field_enum_meta_created_at_001", "label": "Created At"}),
    ("updated_at", {"id": "field_enum_meta_updated_at_001", "label": "Updated At"}),
):
    default_registry.columns.define(EnumMetadata, _member, _column)
