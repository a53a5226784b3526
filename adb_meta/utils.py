"""通用工具函数。"""
import secrets
import string
from typing import Any, Dict, Mapping

from .types import CODE_PATTERN
from .validation import format_errors

_ALPHABET = string.ascii_lowercase + string.digits


def generate_short_id(length: int = 22) -> str:
    """生成短ID（小写字母 + 数字），用于设计器分配的描述符 id。"""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def is_valid_code(code: str) -> bool:
    """校验识别码格式：只允许字母、数字和冒号。"""
    return isinstance(code, str) and bool(code) and CODE_PATTERN.match(code) is not None


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    """深度合并两个映射，source 覆盖 target，返回新字典。

    只有双方都是映射的键才递归合并；列表等其它值直接覆盖。
    """
    result = dict(target)
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = deep_merge(result[key], value)
        elif isinstance(value, Mapping):
            result[key] = deep_merge({}, value)
        else:
            result[key] = value
    return result


__all__ = ["generate_short_id", "is_valid_code", "deep_merge", "format_errors"]
