"""实体描述符注册表。

为实体类挂载 EntityInfo，并提供按识别码、标签等方式的查询。
"""
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from .column_info import ColumnInfoRegistry
from .store import DescriptorStore
from .types import (
    ColumnEntry, EntityEntry, EntityFullInfo, EntityInfo, MetadataKind,
    TargetValidation, ValidationResult,
)
from .validation import validate_entity_info

EntityOptions = Union[EntityInfo, Mapping[str, Any]]


def _coerce(options: Optional[EntityOptions], overrides: Mapping[str, Any]) -> EntityInfo:
    if options is None:
        return EntityInfo.from_dict(dict(overrides))
    info = EntityInfo.from_dict(dict(options)) if isinstance(options, Mapping) else options
    return replace(info, **overrides) if overrides else replace(info)


class EntityInfoRegistry:
    """实体描述符注册表。

    Attributes:
        store: 底层描述符存储。
        columns: 字段注册表，用于组装实体完整信息。
    """

    def __init__(self, store: DescriptorStore,
                 columns: Optional[ColumnInfoRegistry] = None) -> None:
        self.store = store
        self.columns = columns or ColumnInfoRegistry(store)

    def define(self, owner: Any, options: Optional[EntityOptions] = None,
               **kwargs: Any) -> EntityInfo:
        """为实体挂载 EntityInfo。

        未提供的 status / is_locked / created_at / updated_at 使用默认值
        （enabled / False / 当前时间）。

        Args:
            owner: 实体类。
            options: EntityInfo 或等价的字典。
            **kwargs: 直接以关键字形式提供的字段，覆盖 options 中的同名字段。

        Returns:
            实际挂载的 EntityInfo。
        """
        info = _coerce(options, kwargs)
        now = datetime.now()
        if info.status is None:
            info.status = "enabled"
        if info.is_locked is None:
            info.is_locked = False
        if info.created_at is None:
            info.created_at = now
        if info.updated_at is None:
            info.updated_at = now

        self.store.attach(owner, MetadataKind.ENTITY_INFO, info)
        return info

    def decorator(self, options: Optional[EntityOptions] = None,
                  **kwargs: Any) -> Callable[[type], type]:
        """类装饰器形式的 define()。

        Example::

            @registry.entities.decorator(id="e1", code="order:tx", label="订单")
            class Order(Base):
                ...
        """
        def wrapper(cls: type) -> type:
            self.define(cls, options, **kwargs)
            return cls
        return wrapper

    def get(self, owner: Any) -> Optional[EntityInfo]:
        return self.store.get(owner, MetadataKind.ENTITY_INFO)

    def has(self, owner: Any) -> bool:
        return self.store.has(owner, MetadataKind.ENTITY_INFO)

    def collect(self, owners: Iterable[Any]) -> List[EntityEntry]:
        """收集带有 EntityInfo 的实体，没有的直接跳过。"""
        return [
            EntityEntry(owner, self.get(owner))
            for owner in owners
            if self.has(owner)
        ]

    def find_by_code(self, owners: Iterable[Any], code: str) -> Optional[EntityEntry]:
        """按识别码查找实体，返回第一个匹配项。"""
        for entry in self.collect(owners):
            if entry.info.code == code:
                return entry
        return None

    def find_by_tag(self, owners: Iterable[Any], tag: str) -> List[EntityEntry]:
        return [entry for entry in self.collect(owners) if tag in entry.info.tags]

    def full_info(self, owner: Any) -> Optional[EntityFullInfo]:
        """获取实体完整信息（实体元数据 + 全部字段元数据）。

        表名优先取 SQLAlchemy 模型的 ``__tablename__``，否则使用小写类名。

        Returns:
            EntityFullInfo，实体未挂载 EntityInfo 时返回 None。
        """
        info = self.get(owner)
        if info is None:
            return None

        class_name = getattr(owner, "__name__", type(owner).__name__)
        table_name = getattr(owner, "__tablename__", None) or class_name.lower()
        columns = [
            ColumnEntry(member, column)
            for member, column in self.columns.collect_all(owner).items()
        ]
        return EntityFullInfo(
            class_name=class_name,
            table_name=table_name,
            entity_info=info,
            columns=columns,
        )

    def validate(self, owner: Any) -> ValidationResult:
        return validate_entity_info(self.get(owner))

    def validate_all(self, owners: Iterable[Any]) -> List[TargetValidation]:
        """逐个校验实体，结果带上实体本身作为标识。"""
        return [TargetValidation(owner, self.validate(owner)) for owner in owners]
