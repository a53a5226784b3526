"""字段描述符注册表。

为实体字段挂载 ColumnInfo，支持按扩展类型（媒体、枚举、ID生成）筛选字段，
并提供类型选择器使用的静态类型目录。

扩展类型有两套命名并存：
- 新命名：adb-media、adb-enum、adb-auto-increment-id、adb-guid-id、adb-snowflake-id
- 旧命名：media、enum
两者是不同的字符串，不做归一化，调用方按各自约定查询。
"""
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .store import DescriptorStore
from .types import (
    ColumnEntry, ColumnInfo, ExtendType, MetadataKind, TargetValidation,
    TypeOption, ValidationResult,
)
from .validation import validate_column_info

ColumnOptions = Union[ColumnInfo, Mapping[str, Any]]

EXTENSION_CATEGORY = "extension"
PRIMITIVE_CATEGORY = "primitive"

EXTENSION_TYPES = (
    (ExtendType.AUTO_INCREMENT_ID, "Auto Increment ID"),
    (ExtendType.GUID_ID, "GUID ID"),
    (ExtendType.SNOWFLAKE_ID, "Snowflake ID"),
    (ExtendType.ENUM, "ADB Enum"),
    (ExtendType.MEDIA, "ADB Media"),
)

PRIMITIVE_TYPES = (
    ("varchar", "String"),
    ("char", "Fixed String"),
    ("text", "Text"),
    ("int", "Integer"),
    ("bigint", "Big Integer"),
    ("smallint", "Small Integer"),
    ("tinyint", "Tiny Integer"),
    ("decimal", "Decimal"),
    ("float", "Float"),
    ("double", "Double"),
    ("boolean", "Boolean"),
    ("date", "Date"),
    ("datetime", "DateTime"),
    ("timestamp", "Timestamp"),
    ("time", "Time"),
    ("json", "JSON"),
    ("simple-array", "Simple Array"),
    ("simple-json", "Simple JSON"),
    ("uuid", "UUID"),
    ("enum", "Enum"),
    ("blob", "Blob"),
    ("binary", "Binary"),
    ("varbinary", "Variable Binary"),
)


class ColumnInfoRegistry:
    """字段描述符注册表。"""

    def __init__(self, store: DescriptorStore) -> None:
        self.store = store

    def define(self, owner: Any, member: str,
               options: Optional[ColumnOptions] = None, **kwargs: Any) -> ColumnInfo:
        """为实体字段挂载 ColumnInfo。

        Args:
            owner: 实体类。
            member: 字段名。
            options: ColumnInfo 或等价的字典（支持 camelCase 键）。
            **kwargs: 关键字形式的字段，覆盖 options 中的同名字段。

        Returns:
            实际挂载的 ColumnInfo。
        """
        if options is None:
            info = ColumnInfo.from_dict(dict(kwargs))
        else:
            info = ColumnInfo.from_dict(dict(options)) if isinstance(options, Mapping) else options
            if kwargs:
                info = replace(info, **kwargs)
        self.store.attach(owner, MetadataKind.COLUMN_INFO, info, member=member)
        return info

    def decorator(self, member: str, options: Optional[ColumnOptions] = None,
                  **kwargs: Any) -> Callable[[type], type]:
        """类装饰器形式的 define()，可叠加使用为多个字段挂载元数据。"""
        def wrapper(cls: type) -> type:
            self.define(cls, member, options, **kwargs)
            return cls
        return wrapper

    def get(self, owner: Any, member: str) -> Optional[ColumnInfo]:
        return self.store.get(owner, MetadataKind.COLUMN_INFO, member)

    def has(self, owner: Any, member: str) -> bool:
        return self.store.has(owner, MetadataKind.COLUMN_INFO, member)

    def collect_all(self, owner: Any) -> Dict[str, ColumnInfo]:
        """获取实体全部字段的 ColumnInfo（按挂载顺序）。"""
        columns: Dict[str, ColumnInfo] = {}
        for member in self.store.list_members(owner):
            info = self.get(owner, member)
            if info is not None:
                columns[member] = info
        return columns

    def filter_by_extend_type(self, owner: Any, extend_type: str) -> List[ColumnEntry]:
        """按扩展类型筛选字段（精确匹配字符串）。"""
        return [
            ColumnEntry(member, info)
            for member, info in self.collect_all(owner).items()
            if info.extend_type == extend_type
        ]

    def media_columns(self, owner: Any) -> List[ColumnEntry]:
        return self.filter_by_extend_type(owner, ExtendType.MEDIA)

    def enum_columns(self, owner: Any) -> List[ColumnEntry]:
        return self.filter_by_extend_type(owner, ExtendType.ENUM)

    def auto_increment_id_columns(self, owner: Any) -> List[ColumnEntry]:
        return self.filter_by_extend_type(owner, ExtendType.AUTO_INCREMENT_ID)

    def guid_id_columns(self, owner: Any) -> List[ColumnEntry]:
        return self.filter_by_extend_type(owner, ExtendType.GUID_ID)

    def snowflake_id_columns(self, owner: Any) -> List[ColumnEntry]:
        return self.filter_by_extend_type(owner, ExtendType.SNOWFLAKE_ID)

    def legacy_media_columns(self, owner: Any) -> List[ColumnEntry]:
        """旧命名 "media" 的媒体字段。"""
        return self.filter_by_extend_type(owner, ExtendType.LEGACY_MEDIA)

    def legacy_enum_columns(self, owner: Any) -> List[ColumnEntry]:
        """旧命名 "enum" 的枚举字段。"""
        return self.filter_by_extend_type(owner, ExtendType.LEGACY_ENUM)

    def validate(self, owner: Any, member: str) -> ValidationResult:
        return validate_column_info(self.get(owner, member))

    def validate_all(self, owner: Any) -> List[TargetValidation]:
        """校验实体全部字段，结果带上字段名。"""
        return [
            TargetValidation(member, self.validate(owner, member))
            for member in self.collect_all(owner)
        ]

    @staticmethod
    def type_catalog() -> List[TypeOption]:
        """获取全部支持的类型（扩展类型 + 存储原生类型）。"""
        extension = [TypeOption(key, label, EXTENSION_CATEGORY) for key, label in EXTENSION_TYPES]
        primitive = [TypeOption(key, label, PRIMITIVE_CATEGORY) for key, label in PRIMITIVE_TYPES]
        return extension + primitive

    @classmethod
    def extension_types(cls) -> List[Dict[str, str]]:
        return [
            {"key": option.key, "label": option.label}
            for option in cls.type_catalog()
            if option.category == EXTENSION_CATEGORY
        ]

    @classmethod
    def primitive_types(cls) -> List[Dict[str, str]]:
        return [
            {"key": option.key, "label": option.label}
            for option in cls.type_catalog()
            if option.category == PRIMITIVE_CATEGORY
        ]
