"""枚举描述符注册表。

为枚举对象挂载 EnumInfo，并解析每个枚举项的元数据。枚举项元数据有两条来源：

1. EnumInfo.items 映射（推荐）
2. 旧版逐项挂载（``define_item``，已废弃，仅为兼容保留）

单项查询 ``get_item`` 按键逐个解析：优先 items，缺失时回退到旧版挂载。
全量收集 ``collect_all_items`` 则是整体回退：只要 items 解析出至少一项，
就只返回 items 中的结果；items 对整个枚举一项都没有时，才对所有键改走旧版路径。
这两者的不一致是历史行为，保持原样。

支持的枚举对象：ADBEnum、``enum.Enum`` 子类、映射（dict）以及普通类
（取其公开的非可调用类属性）。
"""
import re
from dataclasses import replace
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Union

from loguru import logger

from config.settings import settings

from .adb_enum import ADBEnum
from .store import DescriptorStore
from .types import (
    EnumInfo, EnumItemEntry, EnumItemOptions, MetadataKind, TargetValidation,
    ValidationResult,
)
from .validation import validate_enum_info, validate_enum_item

EnumOptions = Union[EnumInfo, Mapping[str, Any]]
ItemOptions = Union[EnumItemOptions, Mapping[str, Any]]


# 可按数字解析的键：空白串、十进制或科学计数法、
# 带符号的 Infinity，以及不带符号的 0x/0o/0b 整数
_NUMERIC_KEY = re.compile(
    r"\s*(?:[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|[+-]?Infinity"
    r"|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+)?\s*"
)


def _is_numeric_key(key: str) -> bool:
    """数字键（如反向索引 "0"、"1"）不是枚举项。"""
    return isinstance(key, str) and _NUMERIC_KEY.fullmatch(key) is not None


def enum_keys(owner: Any) -> List[str]:
    """列出枚举对象的全部非数字键（保持定义顺序）。"""
    if isinstance(owner, ADBEnum):
        keys = owner.get_keys()
    elif isinstance(owner, type) and issubclass(owner, Enum):
        keys = list(owner.__members__)
    elif isinstance(owner, Mapping):
        keys = [str(key) for key in owner]
    else:
        keys = [
            name for name, value in vars(owner).items()
            if not name.startswith("_") and not callable(value)
            and not isinstance(value, (staticmethod, classmethod, property))
        ]
    return [key for key in keys if not _is_numeric_key(key)]


def enum_value(owner: Any, key: str) -> Any:
    """读取枚举对象中指定键的值。"""
    if isinstance(owner, ADBEnum):
        return owner.get_value(key)
    if isinstance(owner, type) and issubclass(owner, Enum):
        return owner[key].value
    if isinstance(owner, Mapping):
        return owner[key]
    return getattr(owner, key)


class EnumInfoRegistry:
    """枚举描述符注册表。"""

    def __init__(self, store: DescriptorStore) -> None:
        self.store = store

    def define(self, owner: Any, options: Optional[EnumOptions] = None,
               **kwargs: Any) -> EnumInfo:
        """为枚举对象挂载 EnumInfo。

        Args:
            owner: 枚举对象（Enum 类、ADBEnum、映射等）。
            options: EnumInfo 或等价的字典，items 中的值可以是字典。
            **kwargs: 关键字形式的字段，覆盖 options 中的同名字段。

        Returns:
            实际挂载的 EnumInfo。
        """
        if options is None:
            info = EnumInfo.from_dict(dict(kwargs))
        else:
            info = EnumInfo.from_dict(dict(options)) if isinstance(options, Mapping) else options
            if kwargs:
                info = replace(info, **kwargs)
        self.store.attach(owner, MetadataKind.ENUM_INFO, info)
        return info

    def decorator(self, options: Optional[EnumOptions] = None,
                  **kwargs: Any) -> Callable[[Any], Any]:
        """类装饰器形式的 define()，用于 ``enum.Enum`` 子类。"""
        def wrapper(cls: Any) -> Any:
            self.define(cls, options, **kwargs)
            return cls
        return wrapper

    def define_item(self, owner: Any, key: str, options: ItemOptions) -> EnumItemOptions:
        """旧版逐项挂载枚举项元数据。

        已废弃：请改用 EnumInfo 的 items 配置。保留此方法仅为兼容旧定义。
        """
        if settings.warn_legacy_enum_items:
            logger.warning(f"define_item 已废弃，请在 EnumInfo 的 items 配置中定义 {key} 的元数据")
        item = EnumItemOptions.from_dict(dict(options)) if isinstance(options, Mapping) else options
        self.store.attach(owner, MetadataKind.ENUM_ITEM, item, member=key)
        return item

    def get(self, owner: Any) -> Optional[EnumInfo]:
        """获取枚举的 EnumInfo。

        ADBEnum 未显式挂载时，使用其自身携带的配置。
        """
        info = self.store.get(owner, MetadataKind.ENUM_INFO)
        if info is None and isinstance(owner, ADBEnum):
            return owner.get_enum_info()
        return info

    def has(self, owner: Any) -> bool:
        return self.get(owner) is not None

    def has_item(self, owner: Any, key: str) -> bool:
        """是否存在旧版逐项挂载的元数据。"""
        return self.store.has(owner, MetadataKind.ENUM_ITEM, key)

    def get_item(self, owner: Any, key: str) -> Optional[EnumItemOptions]:
        """获取枚举项元数据：优先 items 配置，缺失时回退到旧版挂载。"""
        info = self.get(owner)
        if info is not None and info.items:
            item = info.items.get(key)
            if item is not None:
                return item
        return self.store.get(owner, MetadataKind.ENUM_ITEM, key)

    def collect_all_items(self, owner: Any) -> List[EnumItemEntry]:
        """收集枚举全部项的元数据。

        items 配置解析出至少一项时只返回 items 的结果；
        否则对每个键改用旧版挂载。两条路径都没有元数据的键不出现在结果中。
        """
        keys = enum_keys(owner)

        info = self.get(owner)
        if info is not None and info.items:
            entries = [
                EnumItemEntry(key, enum_value(owner, key), info.items[key])
                for key in keys
                if key in info.items
            ]
            if entries:
                return entries

        entries = []
        for key in keys:
            item = self.store.get(owner, MetadataKind.ENUM_ITEM, key)
            if item is not None:
                entries.append(EnumItemEntry(key, enum_value(owner, key), item))
        return entries

    def filter_by_tag(self, owner: Any, tag: str) -> List[EnumItemEntry]:
        return [entry for entry in self.collect_all_items(owner) if tag in entry.item.tags]

    def filter_enabled(self, owner: Any) -> List[EnumItemEntry]:
        return [entry for entry in self.collect_all_items(owner) if entry.item.disabled is not True]

    def sorted_by_weight(self, owner: Any) -> List[EnumItemEntry]:
        """按排序权重升序排列，权重相同时保持原有键顺序。"""
        return sorted(self.collect_all_items(owner), key=lambda entry: entry.item.weight)

    def validate(self, owner: Any) -> ValidationResult:
        return validate_enum_info(self.get(owner))

    def validate_item(self, owner: Any, key: str) -> ValidationResult:
        return validate_enum_item(self.get_item(owner, key))

    def validate_all_items(self, owner: Any) -> List[TargetValidation]:
        """校验枚举的每个键，结果带上键名。"""
        return [
            TargetValidation(key, self.validate_item(owner, key))
            for key in enum_keys(owner)
        ]
