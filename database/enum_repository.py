"""枚举元数据仓库 —— ``__enums__`` 表的数据访问层。

只负责记录的读写，不理解枚举描述符；
描述符与记录之间的转换由 EnumMetadataService 完成。
"""
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from .base_crud import BaseCRUD
from .connection import DatabaseConnection
from .models import EnumMetadata


class EnumMetadataRepository(BaseCRUD):
    """枚举元数据仓库。"""

    def __init__(self, conn: DatabaseConnection) -> None:
        super().__init__(conn)

    def find_one(self, enum_id: Optional[str] = None,
                 code: Optional[str] = None,
                 enum_name: Optional[str] = None,
                 session: Optional[Session] = None) -> Optional[EnumMetadata]:
        """按 enum_id / code / enum_name 查找单条记录（含已停用的记录）。

        Args:
            enum_id: 枚举唯一标识。
            code: 枚举识别码。
            enum_name: 枚举名称。
            session: 外部会话（可选）。

        Returns:
            匹配的记录，不存在时返回 None。

        Raises:
            ValueError: 未提供任何查询条件。
        """
        criteria = {
            name: value for name, value in (
                ("enum_id", enum_id), ("code", code), ("enum_name", enum_name)
            ) if value is not None
        }
        if not criteria:
            raise ValueError("find_one requires enum_id, code or enum_name")

        def _query(sess):
            return sess.query(EnumMetadata).filter_by(**criteria).first()

        if session:
            return _query(session)

        with self._get_session() as sess:
            return _query(sess)

    def find_active(self, session: Optional[Session] = None) -> List[EnumMetadata]:
        """获取全部启用的记录，按 code 升序。"""
        return self.get_all(
            EnumMetadata, filters={"is_active": True},
            order_by="code", session=session
        )

    def save(self, record: EnumMetadata,
             session: Optional[Session] = None) -> EnumMetadata:
        """保存记录（新增或更新）。

        Returns:
            已刷新的记录对象。
        """
        if session:
            record = session.merge(record)
            session.flush()
            return record

        with self._get_session() as sess:
            record = sess.merge(record)
            sess.commit()
            sess.refresh(record)
            return record

    def update(self, enum_id: str, session: Optional[Session] = None,
               **patch: Any) -> int:
        """按 enum_id 更新字段。

        Returns:
            受影响的记录数。
        """
        patch.setdefault("updated_at", datetime.utcnow())

        def _do(sess):
            return sess.query(EnumMetadata).filter(
                EnumMetadata.enum_id == enum_id
            ).update(patch, synchronize_session=False)

        if session:
            return _do(session)

        with self._get_session() as sess:
            count = _do(sess)
            sess.commit()
            return count
