"""描述符类型定义。

本模块定义了所有元数据描述符的数据结构，包括：
- EntityInfo: 实体（整张表/整个类）的业务元数据
- ColumnInfo: 字段的业务元数据，以及媒体、枚举、ID生成等扩展配置
- EnumInfo / EnumItemOptions: 枚举及枚举项的业务元数据
- 查询结果条目与校验结果

所有描述符都支持 ``from_dict()``（接受 camelCase 或 snake_case 键）
和 ``to_dict()``（输出 camelCase，即持久化/序列化使用的形状）。
"""
import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

T = TypeVar("T")

# 唯一识别码格式：字母、数字、冒号（冒号表示多级）
CODE_PATTERN = re.compile(r"^[A-Za-z0-9:]+$")

ENTITY_STATUSES = ("enabled", "disabled", "archived")
MEDIA_TYPES = ("image", "video", "audio", "document", "file")
GUID_VERSIONS = ("v1", "v4", "v5")
GUID_FORMATS = ("default", "braced", "binary", "urn")
SNOWFLAKE_FORMATS = ("number", "string")

SNOWFLAKE_MAX_MACHINE_ID = 1023
SNOWFLAKE_MAX_DATACENTER_ID = 31


class MetadataKind(Enum):
    """描述符种类，作为存储键的一部分。"""
    ENTITY_INFO = "entityInfo"
    COLUMN_INFO = "columnInfo"
    ENUM_INFO = "enumInfo"
    ENUM_ITEM = "enumItem"  # 旧版逐项挂载路径


class ExtendType:
    """ColumnInfo.extend_type 可识别的扩展类型标识。"""
    MEDIA = "adb-media"
    ENUM = "adb-enum"
    AUTO_INCREMENT_ID = "adb-auto-increment-id"
    GUID_ID = "adb-guid-id"
    SNOWFLAKE_ID = "adb-snowflake-id"

    # 旧版命名（不带前缀），与新命名并存，互不归一
    LEGACY_MEDIA = "media"
    LEGACY_ENUM = "enum"


def _snake(name: str) -> str:
    """camelCase -> snake_case"""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _camel(name: str) -> str:
    """snake_case -> camelCase"""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _build(cls: Type[T], data: Any) -> Optional[T]:
    """将映射转换为指定的数据类；已是该类型或为 None 时原样返回。"""
    if data is None or isinstance(data, cls):
        return data
    if not isinstance(data, dict):
        raise TypeError(f"{cls.__name__} expects a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in data.items():
        name = _snake(key)
        if name not in known:
            raise TypeError(f"{cls.__name__} got an unexpected field '{key}'")
        kwargs[name] = value
    return cls(**kwargs)


def _dump(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_dump(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class _Descriptor:
    """描述符公共行为：from_dict / to_dict。"""

    @classmethod
    def from_dict(cls, data: Any):
        return _build(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        """转换为 camelCase 字典，省略值为 None 的可选字段。"""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[_camel(f.name)] = _dump(value)
        return result


# ========== 扩展配置 ==========

@dataclass
class MediaConfig(_Descriptor):
    """媒体类型字段配置。

    Attributes:
        media_type: 媒体类型（image/video/audio/document/file）。
        formats: 允许的文件格式列表，不能为空。
        max_size: 最大文件大小（MB），必须大于0。
        is_multiple: 是否允许多个文件。
        storage_path: 存储相对路径。
    """
    media_type: Optional[str] = None
    formats: List[str] = field(default_factory=list)
    max_size: Optional[float] = None
    is_multiple: bool = False
    storage_path: Optional[str] = None


@dataclass
class EnumConfig(_Descriptor):
    """枚举类型字段配置。

    Attributes:
        enum: 枚举对象引用（ADBEnum、Enum 类或映射）。
        is_multiple: 是否支持多选。
        default: 默认值（多选时为值的集合）。
    """
    enum: Any = None
    is_multiple: bool = False
    default: Any = None

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        # 枚举引用不可直接序列化，输出其字符串表示
        if self.enum is not None:
            result["enum"] = getattr(self.enum, "code", None) or getattr(self.enum, "__name__", str(self.enum))
        return result


@dataclass
class AutoIncrementIdConfig(_Descriptor):
    """自增ID配置。"""
    start_value: int = 1
    increment: int = 1
    is_primary_key: bool = False
    description: Optional[str] = None


@dataclass
class GuidIdConfig(_Descriptor):
    """GUID ID配置。"""
    version: str = "v4"
    format: str = "default"
    is_primary_key: bool = False
    generate_on_insert: bool = True
    description: Optional[str] = None


@dataclass
class SnowflakeIdConfig(_Descriptor):
    """雪花ID配置。

    Attributes:
        machine_id: 机器ID，范围 0-1023。
        datacenter_id: 数据中心ID，范围 0-31。
        epoch: 起始纪元时间（可选）。
        format: 输出格式（number/string）。
    """
    machine_id: int = 0
    datacenter_id: int = 0
    epoch: Optional[datetime] = None
    is_primary_key: bool = False
    format: str = "number"
    generate_on_insert: bool = True
    description: Optional[str] = None


# ========== 主描述符 ==========

@dataclass
class EntityInfo(_Descriptor):
    """实体元数据。

    Attributes:
        id: 实体唯一标识，由设计器分配的短ID。
        code: 唯一识别码，使用冒号表示多级，如 "user:admin:super"。
        label: 显示名称。
        status: 状态，enabled/disabled/archived，默认 enabled。
        is_locked: 是否锁定，默认 False。
        created_at: 创建时间。
        updated_at: 更新时间。
        name: 实体名称（兼容旧版本）。
        description: 实体描述。
        version: 版本号。
        tags: 标签列表（保持插入顺序，去重）。
    """
    id: str = ""
    code: str = ""
    label: str = ""
    status: str = "enabled"
    is_locked: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    name: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tags = list(dict.fromkeys(self.tags or []))


@dataclass
class ColumnInfo(_Descriptor):
    """字段元数据。

    extend_type 选择对应的扩展配置；一个字段最多携带一个扩展配置。
    """
    id: str = ""
    label: str = ""
    extend_type: Optional[str] = None
    media_config: Optional[MediaConfig] = None
    enum_config: Optional[EnumConfig] = None
    auto_increment_id_config: Optional[AutoIncrementIdConfig] = None
    guid_id_config: Optional[GuidIdConfig] = None
    snowflake_id_config: Optional[SnowflakeIdConfig] = None

    def __post_init__(self) -> None:
        self.media_config = MediaConfig.from_dict(self.media_config)
        self.enum_config = EnumConfig.from_dict(self.enum_config)
        self.auto_increment_id_config = AutoIncrementIdConfig.from_dict(self.auto_increment_id_config)
        self.guid_id_config = GuidIdConfig.from_dict(self.guid_id_config)
        self.snowflake_id_config = SnowflakeIdConfig.from_dict(self.snowflake_id_config)

    def extension_configs(self) -> Dict[str, Any]:
        """返回已填充的扩展配置，键为对应的扩展类型。"""
        configs = {
            ExtendType.MEDIA: self.media_config,
            ExtendType.ENUM: self.enum_config,
            ExtendType.AUTO_INCREMENT_ID: self.auto_increment_id_config,
            ExtendType.GUID_ID: self.guid_id_config,
            ExtendType.SNOWFLAKE_ID: self.snowflake_id_config,
        }
        return {key: value for key, value in configs.items() if value is not None}


@dataclass
class EnumItemOptions(_Descriptor):
    """枚举项元数据。

    Attributes:
        label: 显示名称。
        icon: 图标名称或路径。
        color: 颜色代码。
        description: 描述。
        sort: 排序权重，默认0。
        disabled: 是否禁用，默认 False。
        metadata: 自定义元数据，可包含 tags 用于筛选。
    """
    label: str = ""
    icon: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    sort: Optional[float] = None
    disabled: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def weight(self) -> float:
        """排序权重，未设置时为0。"""
        return self.sort if self.sort is not None else 0

    @property
    def tags(self) -> List[str]:
        return list((self.metadata or {}).get("tags") or [])


@dataclass
class EnumInfo(_Descriptor):
    """枚举元数据。"""
    id: str = ""
    code: str = ""
    label: str = ""
    description: Optional[str] = None
    items: Dict[str, EnumItemOptions] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.items = {
            key: EnumItemOptions.from_dict(item)
            for key, item in (self.items or {}).items()
        }


# ========== 查询结果 ==========

@dataclass(frozen=True)
class EntityEntry:
    owner: Any
    info: EntityInfo


@dataclass(frozen=True)
class ColumnEntry:
    member: str
    info: ColumnInfo


@dataclass(frozen=True)
class EnumItemEntry:
    key: str
    value: Any
    item: Optional[EnumItemOptions]


@dataclass(frozen=True)
class TypeOption:
    key: str
    label: str
    category: str  # extension / primitive


@dataclass
class EntityFullInfo:
    """实体完整信息：实体元数据 + 全部字段元数据。"""
    class_name: str
    table_name: str
    entity_info: EntityInfo
    columns: List[ColumnEntry]


@dataclass
class ValidationResult:
    """校验结果。校验函数从不抛出异常，只返回此结构。"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=list(errors))


@dataclass(frozen=True)
class TargetValidation:
    """带目标标识（实体、字段名或枚举项键）的校验结果。"""
    target: Any
    result: ValidationResult
