"""枚举元数据服务 —— 枚举定义与数据库记录之间的同步。

提供枚举信息的保存、查询、软删除以及从数据库重建：
- 传统枚举（Enum 类、映射等）必须挂载了 EnumInfo，否则无法生成完整记录，直接抛出异常
- ADBEnum 自带完整配置，可直接保存
- 批量保存是尽力而为：单个失败会被记录并跳过，只返回成功的部分

数据库本身的错误（如唯一约束冲突）原样向上传播。
"""
from typing import Any, Iterable, List, Optional, Tuple

from loguru import logger

from adb_meta import ADBEnum, EnumInfo, MissingEnumInfoError, MetadataRegistry, default_registry
from adb_meta.enum_info import enum_keys, enum_value

from .enum_repository import EnumMetadataRepository
from .models import EnumMetadata


class EnumMetadataService:
    """枚举元数据服务。

    Attributes:
        repository: 枚举元数据仓库。
        registry: 读取 EnumInfo 使用的元数据注册表。

    Example::

        service = EnumMetadataService(EnumMetadataRepository(conn))
        service.save_adb_enum(OrderStatus)
        rebuilt = service.rebuild_adb_enum("enum-order-status-001")
    """

    def __init__(self, repository: EnumMetadataRepository,
                 registry: Optional[MetadataRegistry] = None) -> None:
        self.repository = repository
        self.registry = registry or default_registry

    def _upsert(self, info: EnumInfo, enum_name: str, enum_values: dict) -> EnumMetadata:
        """按 enum_id 新增或覆盖记录。"""
        record = self.repository.find_one(enum_id=info.id) or EnumMetadata()
        record.enum_id = info.id
        record.code = info.code
        record.label = info.label
        record.description = info.description
        record.items = {key: item.to_dict() for key, item in (info.items or {}).items()}
        record.enum_name = enum_name
        record.enum_values = enum_values
        record.is_active = True
        return self.repository.save(record)

    # ================================================================
    # 保存
    # ================================================================

    def save_enum_metadata(self, enum_object: Any, enum_name: str) -> EnumMetadata:
        """将枚举信息保存到数据库。

        Args:
            enum_object: 枚举对象（ADBEnum、Enum 类、映射等）。
            enum_name: 枚举名称（ADBEnum 忽略此参数，使用由 code 生成的名称）。

        Returns:
            保存后的枚举元数据记录。

        Raises:
            MissingEnumInfoError: 非 ADBEnum 的枚举没有挂载 EnumInfo。
        """
        if isinstance(enum_object, ADBEnum):
            return self.save_adb_enum(enum_object)

        info = self.registry.enums.get(enum_object)
        if info is None:
            raise MissingEnumInfoError(enum_name)

        enum_values = {key: enum_value(enum_object, key) for key in enum_keys(enum_object)}
        record = self._upsert(info, enum_name, enum_values)
        logger.info(f"枚举元数据已保存: {enum_name} ({info.code})")
        return record

    def save_multiple_enum_metadata(self, enums: Iterable[Tuple[Any, str]]) -> List[EnumMetadata]:
        """批量保存枚举元数据。

        Args:
            enums: (枚举对象, 枚举名称) 的序列。

        Returns:
            保存成功的记录列表；失败的枚举记录日志后跳过。
        """
        results: List[EnumMetadata] = []
        for enum_object, enum_name in enums:
            try:
                results.append(self.save_enum_metadata(enum_object, enum_name))
            except Exception as e:
                logger.error(f"保存枚举元数据失败 {enum_name}: {e}")
        return results

    def save_adb_enum(self, adb_enum: ADBEnum) -> EnumMetadata:
        """保存 ADBEnum 到数据库，枚举名称为 ``ADBEnum_<code>``（冒号替换为下划线）。"""
        info = adb_enum.get_enum_info()
        enum_name = f"ADBEnum_{info.code.replace(':', '_')}"
        record = self._upsert(info, enum_name, adb_enum.get_values())
        logger.info(f"ADBEnum 已保存: {info.code}")
        return record

    def save_multiple_adb_enums(self, adb_enums: Iterable[ADBEnum]) -> List[EnumMetadata]:
        """批量保存 ADBEnum，失败的记录日志后跳过。"""
        results: List[EnumMetadata] = []
        for adb_enum in adb_enums:
            try:
                results.append(self.save_adb_enum(adb_enum))
            except Exception as e:
                logger.error(f"保存 ADBEnum 失败 {adb_enum.code}: {e}")
        return results

    def sync(self, enum_object: Any, enum_name: str) -> EnumMetadata:
        """同步枚举定义到数据库（等同于 save_enum_metadata）。"""
        return self.save_enum_metadata(enum_object, enum_name)

    # ================================================================
    # 查询与删除
    # ================================================================

    def get_by_id(self, enum_id: str) -> Optional[EnumMetadata]:
        return self.repository.find_one(enum_id=enum_id)

    def get_by_code(self, code: str) -> Optional[EnumMetadata]:
        return self.repository.find_one(code=code)

    def get_by_name(self, enum_name: str) -> Optional[EnumMetadata]:
        return self.repository.find_one(enum_name=enum_name)

    def get_all(self) -> List[EnumMetadata]:
        """获取全部启用的枚举元数据，按 code 升序。"""
        return self.repository.find_active()

    def delete(self, enum_id: str) -> None:
        """软删除枚举元数据（is_active=False）。"""
        self.repository.update(enum_id, is_active=False)

    # ================================================================
    # 重建
    # ================================================================

    def rebuild_enum_config(self, enum_id: str) -> Optional[EnumInfo]:
        """从数据库重建 EnumInfo，记录不存在时返回 None。"""
        record = self.get_by_id(enum_id)
        if record is None:
            return None
        return EnumInfo(
            id=record.enum_id,
            code=record.code,
            label=record.label,
            description=record.description,
            items=record.items or {},
        )

    def rebuild_adb_enum(self, enum_id: str) -> Optional[ADBEnum]:
        """从数据库重建 ADBEnum。

        记录不存在或没有保存枚举值时返回 None。同 id 的 ADBEnum 已在缓存中时，
        返回的是缓存实例。
        """
        return self._rebuild(self.get_by_id(enum_id))

    def rebuild_adb_enum_by_code(self, code: str) -> Optional[ADBEnum]:
        return self._rebuild(self.get_by_code(code))

    @staticmethod
    def _rebuild(record: Optional[EnumMetadata]) -> Optional[ADBEnum]:
        if record is None or not record.enum_values:
            return None
        return ADBEnum.create(
            id=record.enum_id,
            code=record.code,
            label=record.label,
            description=record.description,
            items=record.items or {},
            values=record.enum_values,
        )
