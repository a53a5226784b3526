"""ADBEnum tests.

Tests for:
- creation and read-only key access
- value/key lookup helpers
- item configuration queries (enabled, sorted, by tag)
- validation
- serialization (to_plain_object / to_json / str)
- id-based instance caching (first writer wins)
"""
import json

import pytest

from adb_meta import ADBEnum, EnumInfo, EnumItemOptions


class TestCreate:
    """Basic creation and access."""

    def test_fields(self, order_status):
        assert order_status.code == "order:status"
        assert order_status.label == "订单状态"
        assert order_status.description == "订单生命周期状态管理"
        assert order_status.get_keys() == [
            "PENDING_PAYMENT", "PAID", "PROCESSING", "COMPLETED", "CANCELLED",
        ]

    def test_attribute_access(self, order_status):
        assert order_status.PAID == "paid"
        assert order_status.PENDING_PAYMENT == "pending_payment"

    def test_item_access(self, order_status):
        assert order_status["COMPLETED"] == "completed"
        with pytest.raises(KeyError):
            order_status["NOPE"]

    def test_unknown_attribute(self, order_status):
        with pytest.raises(AttributeError):
            order_status.NOPE

    def test_read_only(self, order_status):
        with pytest.raises(AttributeError):
            order_status.PAID = "changed"
        with pytest.raises(AttributeError):
            order_status.code = "changed"
        with pytest.raises(TypeError):
            order_status.values["PAID"] = "changed"
        assert order_status.PAID == "paid"

    def test_container_protocol(self, order_status):
        assert "PAID" in order_status
        assert "paid" not in order_status
        assert len(order_status) == 5
        assert list(order_status) == order_status.get_keys()

    def test_create_from_config_dict(self, unique_id):
        status = ADBEnum.create({
            "id": unique_id(),
            "code": "test:dict",
            "label": "Dict",
            "values": {"A": "a"},
            "items": {"A": EnumItemOptions(label="甲")},
        })
        assert status.A == "a"
        assert status.get_item_config("A").label == "甲"

    def test_items_coerced(self, order_status):
        assert isinstance(order_status.get_item_config("PAID"), EnumItemOptions)


class TestLookup:
    """Value and key lookup helpers."""

    def test_get_value(self, order_status):
        assert order_status.get_value("PAID") == "paid"
        assert order_status.get_value("INVALID_KEY") is None

    def test_get_key(self, order_status):
        assert order_status.get_key("pending_payment") == "PENDING_PAYMENT"
        assert order_status.get_key("invalid_value") is None

    def test_get_key_first_match(self, unique_id):
        aliases = ADBEnum.create(id=unique_id(), code="alias", label="Alias",
                                 values={"FIRST": "x", "SECOND": "x"})
        assert aliases.get_key("x") == "FIRST"

    def test_has_key_and_value(self, order_status):
        assert order_status.has_key("PENDING_PAYMENT") is True
        assert order_status.has_key("INVALID_KEY") is False
        assert order_status.has_value("pending_payment") is True
        assert order_status.has_value("invalid_value") is False

    def test_get_values_is_copy(self, order_status):
        values = order_status.get_values()
        values["PAID"] = "changed"
        assert order_status.PAID == "paid"


class TestItemQueries:
    """Item configuration queries."""

    def test_get_item_config(self, order_status):
        config = order_status.get_item_config("PENDING_PAYMENT")
        assert config.label == "待支付"
        assert config.color == "#faad14"
        assert config.metadata["timeoutMinutes"] == 30
        assert order_status.get_item_config("NOPE") is None

    def test_enabled_items(self, order_status):
        enabled = order_status.get_enabled_items()
        assert [e.key for e in enabled] == ["PENDING_PAYMENT", "PAID", "PROCESSING", "COMPLETED"]
        assert all(not e.item.disabled for e in enabled)

    def test_enabled_items_include_unconfigured_keys(self, unique_id):
        partial = ADBEnum.create(id=unique_id(), code="partial", label="Partial",
                                 values={"A": "a", "B": "b"}, items={"A": {"label": "甲", "disabled": True}})
        enabled = partial.get_enabled_items()
        assert [(e.key, e.item) for e in enabled] == [("B", None)]

    def test_sorted_items(self, order_status):
        sorted_items = order_status.get_sorted_items()
        weights = [e.item.weight for e in sorted_items]
        assert weights == sorted(weights)

    def test_sorted_items_stable(self, unique_id):
        status = ADBEnum.create(
            id=unique_id(), code="stable", label="Stable",
            values={"K1": "1", "K2": "2", "K3": "3", "K4": "4"},
            items={"K1": {"label": "1", "sort": 2}, "K3": {"label": "3", "sort": 1}},
        )
        assert [e.key for e in status.get_sorted_items()] == ["K2", "K4", "K3", "K1"]

    def test_items_by_tag(self, order_status):
        assert [e.key for e in order_status.get_items_by_tag("open")] == ["PENDING_PAYMENT", "PAID"]
        assert [e.key for e in order_status.get_items_by_tag("billing")] == ["PAID"]
        assert order_status.get_items_by_tag("missing") == []

    def test_get_enum_info(self, order_status):
        info = order_status.get_enum_info()
        assert isinstance(info, EnumInfo)
        assert info.id == order_status.id
        assert set(info.items) == set(order_status.items)


class TestValidate:
    """validate() never raises."""

    def test_valid(self, order_status):
        result = order_status.validate()
        assert result.is_valid is True
        assert result.errors == []

    def test_empty_values(self, unique_id):
        empty = ADBEnum.create(id=unique_id(), code="empty", label="Empty", values={})
        assert empty.validate().errors == ["Enum must have at least one value"]

    def test_dangling_item_and_missing_label(self, unique_id):
        broken = ADBEnum.create(
            id=unique_id(), code="broken", label="Broken",
            values={"A": "a"},
            items={"A": {"label": ""}, "GHOST": {"label": "幽灵"}},
        )
        errors = broken.validate().errors
        assert "EnumItem.label is required for key: A" in errors
        assert "EnumItem config exists for undefined key: GHOST" in errors
        assert len(errors) == 2

    def test_bad_code(self, unique_id):
        bad = ADBEnum.create(id=unique_id(), code="bad code", label="Bad", values={"A": "a"})
        assert bad.validate().errors == ["EnumInfo.code can only contain letters, numbers and colons"]

    def test_non_string_code_reported(self, unique_id):
        bad = ADBEnum.create(id=unique_id(), code=404, label="Bad", values={"A": "a"})
        assert bad.validate().errors == ["EnumInfo.code must be a string"]

    def test_missing_fields(self, unique_id):
        missing = ADBEnum.create(id=unique_id(), code="", label="", values={"A": "a"})
        assert missing.validate().errors == ["EnumInfo.code is required", "EnumInfo.label is required"]


class TestSerialization:
    """to_plain_object / to_json / str."""

    def test_to_plain_object(self, order_status):
        plain = order_status.to_plain_object()
        assert plain == dict(order_status.values)
        plain["PAID"] = "changed"
        assert order_status.PAID == "paid"

    def test_to_json_round_trip(self, unique_id):
        values = {"A": "a", "B": "b", "C": "c"}
        enum_id = unique_id()
        created = ADBEnum.create(id=enum_id, code="round:trip", label="Round", values=values)

        snapshot = created.to_json()

        assert snapshot["id"] == enum_id
        assert snapshot["code"] == "round:trip"
        assert snapshot["label"] == "Round"
        assert snapshot["values"] == values
        assert list(snapshot["values"]) == ["A", "B", "C"]

    def test_to_json_is_serializable(self, order_status):
        text = json.dumps(order_status.to_json(), ensure_ascii=False)
        data = json.loads(text)
        assert data["items"]["PAID"]["label"] == "已支付"
        assert data["items"]["CANCELLED"]["disabled"] is True

    def test_str(self, order_status):
        assert str(order_status) == "ADBEnum(order:status)"


class TestCaching:
    """Instances are cached by id, first writer wins."""

    def test_same_instance_for_same_id(self, unique_id):
        enum_id = unique_id()
        first = ADBEnum.create(id=enum_id, code="test:enum", label="Test Enum",
                               values={"A": "a", "B": "b"})
        second = ADBEnum.create(id=enum_id, code="test:enum:different",
                                label="Different Label", values={"C": "c", "D": "d"})

        assert first is second
        assert second.code == "test:enum"
        assert second.label == "Test Enum"
        assert second.get_keys() == ["A", "B"]
        assert second.has_key("C") is False

    def test_get_instance(self, order_status):
        assert ADBEnum.get_instance(order_status.id) is order_status
        assert ADBEnum.get_instance("never-created") is None

    def test_different_ids_are_distinct(self, unique_id):
        first = ADBEnum.create(id=unique_id(), code="x", label="X", values={"A": "a"})
        second = ADBEnum.create(id=unique_id(), code="x", label="X", values={"A": "a"})
        assert first is not second
