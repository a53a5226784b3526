"""Shared fixtures for metadata registry tests.

Every test gets a fresh MetadataRegistry so that descriptors attached in
one test never leak into another. ADBEnum instances are cached process-wide
by id, so tests that create enums use ``unique_id`` to avoid collisions.
"""
import uuid
from enum import Enum

import pytest

from adb_meta import ADBEnum, MetadataRegistry


@pytest.fixture
def registry():
    """Yield a fresh, empty MetadataRegistry."""
    return MetadataRegistry()


@pytest.fixture
def unique_id():
    """Return a factory producing unique enum ids."""
    def _make(prefix="enum"):
        return f"{prefix}-{uuid.uuid4().hex[:12]}"
    return _make


@pytest.fixture
def order_status(unique_id):
    """An ADBEnum modelled on a typical order lifecycle."""
    return ADBEnum.create(
        id=unique_id("order-status"),
        code="order:status",
        label="订单状态",
        description="订单生命周期状态管理",
        values={
            "PENDING_PAYMENT": "pending_payment",
            "PAID": "paid",
            "PROCESSING": "processing",
            "COMPLETED": "completed",
            "CANCELLED": "cancelled",
        },
        items={
            "PENDING_PAYMENT": {
                "label": "待支付", "icon": "clock-circle", "color": "#faad14",
                "sort": 1, "metadata": {"timeoutMinutes": 30, "tags": ["open"]},
            },
            "PAID": {
                "label": "已支付", "color": "#52c41a", "sort": 2,
                "metadata": {"tags": ["open", "billing"]},
            },
            "PROCESSING": {"label": "处理中", "sort": 3},
            "COMPLETED": {"label": "已完成", "sort": 4, "metadata": {"tags": ["closed"]}},
            "CANCELLED": {"label": "已取消", "sort": 5, "disabled": True,
                          "metadata": {"tags": ["closed"]}},
        },
    )


class Priority(Enum):
    """Native enum used for EnumInfo registry tests."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@pytest.fixture
def priority():
    return Priority
