"""通用 CRUD 基类。

为各仓库提供会话获取和按主键/条件的通用读写能力。
所有方法都支持传入外部会话（由调用方控制提交），
未传入时自动创建会话并提交。
"""
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from .connection import DatabaseConnection

ModelT = TypeVar("ModelT")


class BaseCRUD:
    """通用 CRUD 基类。

    Attributes:
        conn: 数据库连接管理器。
    """

    def __init__(self, conn: DatabaseConnection) -> None:
        self.conn = conn

    def _get_session(self) -> Session:
        return self.conn.get_session()

    def get_by_id(self, model: Type[ModelT], record_id: int,
                  session: Optional[Session] = None) -> Optional[ModelT]:
        """按主键获取记录。"""
        if session:
            return session.get(model, record_id)
        with self._get_session() as sess:
            return sess.get(model, record_id)

    def get_all(self, model: Type[ModelT],
                filters: Optional[Dict[str, Any]] = None,
                order_by: Optional[str] = None,
                session: Optional[Session] = None) -> List[ModelT]:
        """按等值条件查询记录列表。

        Args:
            model: 模型类。
            filters: 字段名 -> 值 的等值过滤条件（可选）。
            order_by: 排序字段名（可选，升序）。
            session: 外部会话（可选）。

        Returns:
            记录列表。
        """
        def _query(sess):
            query = sess.query(model)
            if filters:
                query = query.filter_by(**filters)
            if order_by:
                query = query.order_by(getattr(model, order_by).asc())
            return query.all()

        if session:
            return _query(session)

        with self._get_session() as sess:
            return _query(sess)

    def update_by_id(self, model: Type[ModelT], record_id: int,
                     session: Optional[Session] = None,
                     **fields: Any) -> Optional[ModelT]:
        """按主键更新记录字段。

        Returns:
            更新后的记录；记录不存在时返回 None。
        """
        def _do(sess):
            record = sess.get(model, record_id)
            if record is None:
                return None
            for name, value in fields.items():
                setattr(record, name, value)
            sess.flush()
            return record

        if session:
            return _do(session)

        with self._get_session() as sess:
            record = _do(sess)
            sess.commit()
            if record is not None:
                sess.refresh(record)
            return record
