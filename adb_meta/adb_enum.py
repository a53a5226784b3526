"""ADB 增强枚举。

用于替代原生枚举，携带丰富的元数据配置，并可持久化到数据库
（见 database.enum_service）。

实例按 id 缓存：同一 id 再次 create() 会直接返回已缓存的实例，
新传入的配置被忽略（先写入者生效），实例创建后不可修改。
"""
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .types import EnumInfo, EnumItemEntry, EnumItemOptions, ValidationResult
from .validation import validate_enum_info


class ADBEnum:
    """ADB 增强枚举。

    每个枚举键都可以作为只读属性访问（``OrderStatus.PAID``），也可以用
    ``OrderStatus["PAID"]`` 或 ``get_value("PAID")`` 访问。键名与方法/字段重名时
    （如 ``label``）只能通过后两种方式访问。

    Attributes:
        id: 枚举唯一标识。
        code: 唯一识别码，使用冒号表示多级。
        label: 枚举显示名称。
        description: 枚举描述。
        values: 键 -> 值 的只读映射（保持定义顺序）。
        items: 键 -> 枚举项配置 的只读映射。
        keys: 键列表（定义顺序）。

    Example::

        OrderStatus = ADBEnum.create(
            id="enum-order-status-001",
            code="order:status",
            label="订单状态",
            values={"PENDING": "pending", "PAID": "paid"},
            items={"PAID": {"label": "已支付", "sort": 2}},
        )
        OrderStatus.PAID            # "paid"
        OrderStatus.get_key("paid") # "PAID"
    """

    _instances: Dict[str, "ADBEnum"] = {}

    def __init__(self, id: str, code: str, label: str, values: Mapping[str, Any],
                 description: Optional[str] = None,
                 items: Optional[Mapping[str, Any]] = None) -> None:
        object.__setattr__(self, "id", id)
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "label", label)
        object.__setattr__(self, "description", description)
        object.__setattr__(self, "values", MappingProxyType(dict(values or {})))
        object.__setattr__(self, "items", MappingProxyType({
            key: EnumItemOptions.from_dict(item) for key, item in (items or {}).items()
        }))
        object.__setattr__(self, "keys", tuple(self.values))

    @classmethod
    def create(cls, config: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "ADBEnum":
        """创建增强枚举（按 id 缓存）。

        Args:
            config: 配置字典（id/code/label/description/items/values）。
            **kwargs: 关键字形式的配置，覆盖 config 中的同名项。

        Returns:
            新建的实例；该 id 已有缓存实例时返回缓存实例，本次配置被忽略。
        """
        options = dict(config or {})
        options.update(kwargs)
        enum_id = options.get("id")
        if enum_id in cls._instances:
            return cls._instances[enum_id]

        instance = cls(
            id=enum_id,
            code=options.get("code"),
            label=options.get("label"),
            values=options.get("values") or {},
            description=options.get("description"),
            items=options.get("items"),
        )
        cls._instances[enum_id] = instance
        return instance

    @classmethod
    def get_instance(cls, enum_id: str) -> Optional["ADBEnum"]:
        """获取已缓存的实例，不存在时返回 None。"""
        return cls._instances.get(enum_id)

    # ========== 只读访问 ==========

    def __getattr__(self, name: str) -> Any:
        values = self.__dict__.get("values")
        if values is not None and name in values:
            return values[name]
        raise AttributeError(f"{type(self).__name__} has no key or attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"ADBEnum({self.code}) is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"ADBEnum({self.code}) is read-only")

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __str__(self) -> str:
        return f"ADBEnum({self.code})"

    def __repr__(self) -> str:
        return f"<ADBEnum id={self.id!r} code={self.code!r}>"

    # ========== 查询 ==========

    def get_values(self) -> Dict[str, Any]:
        return dict(self.values)

    def get_keys(self) -> List[str]:
        return list(self.keys)

    def get_value(self, key: str) -> Optional[Any]:
        return self.values.get(key)

    def get_key(self, value: Any) -> Optional[str]:
        """按值反查键，多个键同值时返回定义顺序中的第一个。"""
        for key, candidate in self.values.items():
            if candidate == value:
                return key
        return None

    def has_key(self, key: str) -> bool:
        return key in self.values

    def has_value(self, value: Any) -> bool:
        return value in self.values.values()

    def get_item_config(self, key: str) -> Optional[EnumItemOptions]:
        return self.items.get(key)

    def _entry(self, key: str) -> EnumItemEntry:
        return EnumItemEntry(key, self.values[key], self.items.get(key))

    def get_enabled_items(self) -> List[EnumItemEntry]:
        """获取未禁用的枚举项（没有配置的键视为启用）。"""
        return [
            self._entry(key) for key in self.keys
            if not (key in self.items and self.items[key].disabled)
        ]

    def get_sorted_items(self) -> List[EnumItemEntry]:
        """按排序权重升序排列全部枚举项，权重相同时保持定义顺序。"""
        entries = [self._entry(key) for key in self.keys]
        return sorted(entries, key=lambda entry: entry.item.weight if entry.item else 0)

    def get_items_by_tag(self, tag: str) -> List[EnumItemEntry]:
        """按 metadata.tags 筛选枚举项。"""
        return [
            self._entry(key) for key in self.keys
            if key in self.items and tag in self.items[key].tags
        ]

    def get_enum_info(self) -> EnumInfo:
        """获取等价的 EnumInfo 描述符。"""
        return EnumInfo(
            id=self.id,
            code=self.code,
            label=self.label,
            description=self.description,
            items=dict(self.items),
        )

    # ========== 校验与序列化 ==========

    def validate(self) -> ValidationResult:
        """校验枚举配置，不抛出异常。"""
        errors: List[str] = list(validate_enum_info(self.get_enum_info()).errors)

        if not self.values:
            errors.append("Enum must have at least one value")

        for key, item in self.items.items():
            if key not in self.values:
                errors.append(f"EnumItem config exists for undefined key: {key}")
            if not item.label:
                errors.append(f"EnumItem.label is required for key: {key}")

        return ValidationResult.from_errors(errors)

    def to_plain_object(self) -> Dict[str, Any]:
        """转换为普通的 键 -> 值 字典（浅拷贝）。"""
        return dict(self.values)

    def to_json(self) -> Dict[str, Any]:
        """完整配置快照，可直接 json.dumps。"""
        return {
            "id": self.id,
            "code": self.code,
            "label": self.label,
            "description": self.description,
            "values": dict(self.values),
            "items": {key: item.to_dict() for key, item in self.items.items()},
        }
