"""元数据相关异常。

校验错误不会以异常形式出现（见 validation 模块）；
只有在缺少描述符就无法继续的操作中才抛出异常。
"""


class MetadataError(Exception):
    """元数据异常基类。"""


class MissingEnumInfoError(MetadataError, ValueError):
    """枚举缺少 EnumInfo，无法生成完整的持久化记录。"""

    def __init__(self, enum_name: str) -> None:
        super().__init__(f"Enum {enum_name} does not have EnumInfo metadata")
        self.enum_name = enum_name
