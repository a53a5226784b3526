"""描述符存储 —— 元数据挂载与读取的底层设施。

以 (owner, member, kind) 为键保存描述符：
- owner: 描述符所属的定义（实体类、枚举对象），按对象身份区分，
  不同模块中同名的定义互不冲突
- member: 成员名（字段名、枚举项键），实体/枚举级描述符为 None
- kind: 描述符种类（MetadataKind）

本模块不做任何校验，校验是独立的显式步骤（见 validation 模块）。
"""
from typing import Any, Dict, Hashable, List, Optional, Tuple

from loguru import logger

from .types import MetadataKind

_Key = Tuple[int, Optional[str], MetadataKind]


class DescriptorStore:
    """描述符存储。

    同一键重复挂载时后写入者覆盖先写入者。挂载 ColumnInfo 时，
    成员名会按首次挂载顺序记录到 owner 的字段列表中（去重），
    以便之后无需扫描即可枚举全部字段。

    Example::

        store = DescriptorStore()
        store.attach(Order, MetadataKind.COLUMN_INFO, info, member="status")
        store.list_members(Order)  # ["status"]
    """

    def __init__(self) -> None:
        self._values: Dict[_Key, Any] = {}
        # 持有 owner 引用，保证 id() 在进程内不被复用
        self._owners: Dict[int, Any] = {}
        self._members: Dict[int, List[str]] = {}

    @staticmethod
    def _key(owner: Any, kind: MetadataKind, member: Optional[Hashable]) -> _Key:
        return (id(owner), None if member is None else str(member), kind)

    def attach(self, owner: Any, kind: MetadataKind, value: Any,
               member: Optional[Hashable] = None) -> None:
        """挂载描述符，覆盖同键的已有值。

        Args:
            owner: 所属定义。
            kind: 描述符种类。
            value: 描述符。
            member: 成员名（可选）。
        """
        key = self._key(owner, kind, member)
        if key in self._values:
            logger.debug(f"覆盖已有描述符: {_owner_name(owner)}.{member} ({kind.value})")
        self._values[key] = value
        self._owners[id(owner)] = owner

        if kind is MetadataKind.COLUMN_INFO and member is not None:
            members = self._members.setdefault(id(owner), [])
            if str(member) not in members:
                members.append(str(member))

    def get(self, owner: Any, kind: MetadataKind,
            member: Optional[Hashable] = None) -> Optional[Any]:
        """读取描述符，不存在时返回 None。"""
        return self._values.get(self._key(owner, kind, member))

    def has(self, owner: Any, kind: MetadataKind,
            member: Optional[Hashable] = None) -> bool:
        return self._key(owner, kind, member) in self._values

    def list_members(self, owner: Any) -> List[str]:
        """返回挂载了 ColumnInfo 的成员名（插入顺序，无重复）。"""
        return list(self._members.get(id(owner), []))

    def owners(self, kind: MetadataKind) -> List[Any]:
        """返回挂载过指定种类描述符的 owner 列表（首次挂载顺序）。"""
        seen: Dict[int, Any] = {}
        for owner_id, _, value_kind in self._values:
            if value_kind is kind and owner_id not in seen:
                seen[owner_id] = self._owners[owner_id]
        return list(seen.values())


def _owner_name(owner: Any) -> str:
    return getattr(owner, "__name__", None) or str(owner)
