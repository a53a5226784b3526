"""元数据注册表 —— 统一门面（Facade）。

MetadataRegistry 组合了描述符存储和三个子注册表：

- ``registry.entities``: 实体描述符（EntityInfo）
- ``registry.columns``: 字段描述符（ColumnInfo）
- ``registry.enums``: 枚举描述符（EnumInfo / 枚举项）

并提供装饰器快捷方式和全量校验。

生命周期约定：
    进程启动时注册表为空；各模型/枚举模块被导入时（定义阶段）挂载描述符；
    此后按约定只读（不强制）。``default_registry`` 是进程级实例，
    测试中应为每个用例创建新的 MetadataRegistry，避免用例之间互相污染。
"""
from typing import Any, Callable, Dict, List, Optional

from .column_info import ColumnInfoRegistry
from .entity_info import EntityInfoRegistry
from .enum_info import EnumInfoRegistry
from .store import DescriptorStore
from .types import MetadataKind, TargetValidation


class MetadataRegistry:
    """元数据注册表。

    Attributes:
        store: 描述符存储。
        columns: 字段描述符注册表。
        entities: 实体描述符注册表。
        enums: 枚举描述符注册表。

    Example::

        registry = MetadataRegistry()

        @registry.column_info("status", id="f1", label="订单状态",
                              extend_type="adb-enum", enum_config={"enum": OrderStatus})
        @registry.entity_info(id="e1", code="order:tx", label="订单")
        class Order(Base):
            ...

        registry.columns.enum_columns(Order)
    """

    def __init__(self, store: Optional[DescriptorStore] = None) -> None:
        self.store = store or DescriptorStore()
        self.columns = ColumnInfoRegistry(self.store)
        self.entities = EntityInfoRegistry(self.store, self.columns)
        self.enums = EnumInfoRegistry(self.store)

    # ================================================================
    # 装饰器快捷方式
    # ================================================================

    def entity_info(self, options: Any = None, **kwargs: Any) -> Callable[[type], type]:
        return self.entities.decorator(options, **kwargs)

    def column_info(self, member: str, options: Any = None,
                    **kwargs: Any) -> Callable[[type], type]:
        return self.columns.decorator(member, options, **kwargs)

    def enum_info(self, options: Any = None, **kwargs: Any) -> Callable[[Any], Any]:
        return self.enums.decorator(options, **kwargs)

    def enum_item(self, key: str, options: Any = None, **kwargs: Any) -> Callable[[Any], Any]:
        """旧版枚举项装饰器（已废弃，请使用 EnumInfo 的 items 配置）。"""
        def wrapper(owner: Any) -> Any:
            self.enums.define_item(owner, key, options if options is not None else kwargs)
            return owner
        return wrapper

    # ================================================================
    # 全量查询与校验
    # ================================================================

    def registered_entities(self) -> List[Any]:
        """已挂载 EntityInfo 的全部实体（挂载顺序）。"""
        return self.store.owners(MetadataKind.ENTITY_INFO)

    def registered_enums(self) -> List[Any]:
        """已挂载 EnumInfo 的全部枚举（挂载顺序）。"""
        return self.store.owners(MetadataKind.ENUM_INFO)

    def validate_all(self) -> Dict[str, List[TargetValidation]]:
        """校验注册表中的全部描述符。

        Returns:
            字典，包含：
            - entities: 每个实体的 EntityInfo 校验结果
            - columns: 每个实体每个字段的校验结果（target 为 "类名.字段名"）
            - enums: 每个枚举的 EnumInfo 校验结果
        """
        entities = self.registered_entities()
        column_results: List[TargetValidation] = []
        for owner in entities:
            owner_name = getattr(owner, "__name__", str(owner))
            for result in self.columns.validate_all(owner):
                column_results.append(
                    TargetValidation(f"{owner_name}.{result.target}", result.result)
                )

        return {
            "entities": self.entities.validate_all(entities),
            "columns": column_results,
            "enums": [
                TargetValidation(owner, self.enums.validate(owner))
                for owner in self.registered_enums()
            ],
        }


# 进程级默认注册表
default_registry = MetadataRegistry()
