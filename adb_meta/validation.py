"""校验引擎。

每种描述符一个纯函数，返回 ValidationResult（is_valid + 可读的错误列表），
从不抛出异常。校验总是由调用方显式发起，挂载和读取不会隐式校验。

规则：
- 必需描述符缺失（实体无 EntityInfo、枚举无 EnumInfo）是错误
- 可选描述符缺失（字段无 ColumnInfo、枚举项无配置）视为有效
"""
from numbers import Number
from typing import List, Optional

from .types import (
    CODE_PATTERN, ENTITY_STATUSES, GUID_FORMATS, GUID_VERSIONS,
    MEDIA_TYPES, SNOWFLAKE_FORMATS, SNOWFLAKE_MAX_DATACENTER_ID,
    SNOWFLAKE_MAX_MACHINE_ID, ColumnInfo, EntityInfo, EnumInfo,
    EnumItemOptions, ExtendType, ValidationResult,
)

# 扩展类型 -> (属性名, 配置键名, 类型显示名)
_REQUIRED_CONFIGS = {
    ExtendType.MEDIA: ("media_config", "mediaConfig", "Media"),
    ExtendType.ENUM: ("enum_config", "enumConfig", "Enum"),
    ExtendType.AUTO_INCREMENT_ID: ("auto_increment_id_config", "autoIncrementIdConfig", "Auto-increment-id"),
    ExtendType.GUID_ID: ("guid_id_config", "guidIdConfig", "Guid-id"),
    ExtendType.SNOWFLAKE_ID: ("snowflake_id_config", "snowflakeIdConfig", "Snowflake-id"),
}


def _is_number(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_identity(prefix: str, info, errors: List[str], with_code: bool = True) -> None:
    """校验 id / code / label 三个必需字段及 code 格式。

    字段类型不对时报告错误而不是抛出异常（from_dict 不做类型检查）。
    """
    names = ("id", "code", "label") if with_code else ("id", "label")
    for name in names:
        value = getattr(info, name)
        if value is None or value == "":
            errors.append(f"{prefix}.{name} is required")
        elif not isinstance(value, str):
            errors.append(f"{prefix}.{name} must be a string")
    if with_code and isinstance(info.code, str) and info.code and not CODE_PATTERN.match(info.code):
        errors.append(f"{prefix}.code can only contain letters, numbers and colons")


def validate_entity_info(info: Optional[EntityInfo]) -> ValidationResult:
    """校验实体元数据。

    Args:
        info: EntityInfo，None 表示实体未挂载元数据。

    Returns:
        校验结果。
    """
    if info is None:
        return ValidationResult(False, ["Entity is missing EntityInfo metadata"])

    errors: List[str] = []
    _check_identity("EntityInfo", info, errors)
    if info.status and info.status not in ENTITY_STATUSES:
        errors.append("EntityInfo.status must be enabled, disabled or archived")
    return ValidationResult.from_errors(errors)


def validate_column_info(info: Optional[ColumnInfo]) -> ValidationResult:
    """校验字段元数据及其扩展配置。

    ColumnInfo 是可选的，None 视为有效。extend_type 为五种可识别扩展类型之一时，
    必须提供对应的扩展配置；已提供的扩展配置无论 extend_type 为何都会做边界校验。
    """
    if info is None:
        return ValidationResult(True, [])

    errors: List[str] = []
    _check_identity("ColumnInfo", info, errors, with_code=False)

    if info.extend_type is not None and not isinstance(info.extend_type, str):
        errors.append("ColumnInfo.extendType must be a string")
    required = _REQUIRED_CONFIGS.get(info.extend_type) if isinstance(info.extend_type, str) else None
    if required:
        attr, config_name, type_label = required
        if getattr(info, attr) is None:
            errors.append(f"ADB {type_label} type column must provide {config_name}")

    if len(info.extension_configs()) > 1:
        errors.append("ColumnInfo can carry at most one extension config")

    media = info.media_config
    if media is not None:
        if not media.media_type:
            errors.append("MediaConfig.mediaType is required")
        elif media.media_type not in MEDIA_TYPES:
            errors.append("MediaConfig.mediaType must be one of: " + ", ".join(MEDIA_TYPES))
        if not media.formats:
            errors.append("MediaConfig.formats cannot be empty")
        if media.max_size is not None:
            if not _is_number(media.max_size):
                errors.append("MediaConfig.maxSize must be a number")
            elif media.max_size <= 0:
                errors.append("MediaConfig.maxSize must be greater than 0")

    if info.enum_config is not None and info.enum_config.enum is None:
        errors.append("EnumConfig.enum is required")

    auto_inc = info.auto_increment_id_config
    if auto_inc is not None:
        for value, name in ((auto_inc.start_value, "startValue"), (auto_inc.increment, "increment")):
            if value is None:
                continue
            if not _is_int(value):
                errors.append(f"AutoIncrementIdConfig.{name} must be an integer")
            elif value < 1:
                errors.append(f"AutoIncrementIdConfig.{name} must be greater than 0")

    guid = info.guid_id_config
    if guid is not None:
        if guid.version and guid.version not in GUID_VERSIONS:
            errors.append("GuidIdConfig.version must be one of: " + ", ".join(GUID_VERSIONS))
        if guid.format and guid.format not in GUID_FORMATS:
            errors.append("GuidIdConfig.format must be one of: " + ", ".join(GUID_FORMATS))

    snowflake = info.snowflake_id_config
    if snowflake is not None:
        for value, name, upper in (
            (snowflake.machine_id, "machineId", SNOWFLAKE_MAX_MACHINE_ID),
            (snowflake.datacenter_id, "datacenterId", SNOWFLAKE_MAX_DATACENTER_ID),
        ):
            if value is None:
                continue
            if not _is_int(value):
                errors.append(f"SnowflakeIdConfig.{name} must be an integer")
            elif not 0 <= value <= upper:
                errors.append(f"SnowflakeIdConfig.{name} must be between 0 and {upper}")
        if snowflake.format and snowflake.format not in SNOWFLAKE_FORMATS:
            errors.append("SnowflakeIdConfig.format must be one of: " + ", ".join(SNOWFLAKE_FORMATS))

    return ValidationResult.from_errors(errors)


def validate_enum_info(info: Optional[EnumInfo]) -> ValidationResult:
    """校验枚举元数据。枚举缺失 EnumInfo 是错误。"""
    if info is None:
        return ValidationResult(False, ["Enum is missing EnumInfo metadata"])

    errors: List[str] = []
    _check_identity("EnumInfo", info, errors)
    return ValidationResult.from_errors(errors)


def validate_enum_item(item: Optional[EnumItemOptions]) -> ValidationResult:
    """校验枚举项元数据。枚举项配置是可选的，None 视为有效。"""
    if item is None:
        return ValidationResult(True, [])

    errors: List[str] = []
    if not item.label:
        errors.append("EnumItem.label is required")
    if item.sort is not None and not _is_number(item.sort):
        errors.append("EnumItem.sort must be a number")
    if item.disabled is not None and not isinstance(item.disabled, bool):
        errors.append("EnumItem.disabled must be a boolean")
    return ValidationResult.from_errors(errors)


def format_errors(errors: List[str]) -> str:
    """将错误列表格式化为带序号的多行文本。"""
    return "\n".join(f"{index}. {error}" for index, error in enumerate(errors, start=1))
