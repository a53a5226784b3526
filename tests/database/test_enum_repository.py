"""EnumMetadataRepository and BaseCRUD tests.

Tests for:
- find_one by enum_id / code / enum_name (including inactive rows)
- find_active filtering and ordering
- save (insert and merge)
- update patch semantics
- BaseCRUD helpers with and without an external session
"""
import pytest

from database.models import EnumMetadata


class TestFindOne:
    """Test EnumMetadataRepository.find_one()."""

    def test_each_criterion(self, temp_db, make_record):
        record = make_record("order:status", enum_id="e-find", enum_name="OrderStatus")
        repo = temp_db.enum_metadata

        assert repo.find_one(enum_id="e-find").id == record.id
        assert repo.find_one(code="order:status").id == record.id
        assert repo.find_one(enum_name="OrderStatus").id == record.id

    def test_missing_returns_none(self, temp_db):
        assert temp_db.enum_metadata.find_one(code="nope") is None

    def test_requires_criteria(self, temp_db):
        with pytest.raises(ValueError):
            temp_db.enum_metadata.find_one()

    def test_includes_inactive(self, temp_db, make_record):
        make_record("old:enum", enum_id="e-old", is_active=False)
        assert temp_db.enum_metadata.find_one(enum_id="e-old").is_active is False

    def test_with_external_session(self, temp_db, make_record):
        make_record("shared", enum_id="e-shared")
        with temp_db.get_session() as session:
            assert temp_db.enum_metadata.find_one(code="shared", session=session).enum_id == "e-shared"


class TestFindActive:
    """Test EnumMetadataRepository.find_active()."""

    def test_active_only_ordered_by_code(self, temp_db, make_record):
        make_record("zeta")
        make_record("alpha")
        make_record("beta", is_active=False)
        make_record("gamma")

        codes = [record.code for record in temp_db.enum_metadata.find_active()]
        assert codes == ["alpha", "gamma", "zeta"]

    def test_empty(self, temp_db):
        assert temp_db.enum_metadata.find_active() == []


class TestSaveAndUpdate:
    """Test EnumMetadataRepository.save() / update()."""

    def test_save_assigns_id(self, temp_db, make_record):
        record = make_record("level")
        assert record.id is not None
        assert record.created_at is not None

    def test_save_merges_existing(self, temp_db, make_record):
        record = make_record("level", enum_id="e-level", label="Level")
        record.label = "等级"
        temp_db.enum_metadata.save(record)

        assert temp_db.enum_metadata.find_one(enum_id="e-level").label == "等级"
        assert len(temp_db.enum_metadata.get_all(EnumMetadata)) == 1

    def test_update_patch(self, temp_db, make_record):
        record = make_record("level", enum_id="e-upd")
        original_updated_at = record.updated_at

        count = temp_db.enum_metadata.update("e-upd", is_active=False)
        updated = temp_db.enum_metadata.find_one(enum_id="e-upd")

        assert count == 1
        assert updated.is_active is False
        assert updated.updated_at >= original_updated_at

    def test_update_missing(self, temp_db):
        assert temp_db.enum_metadata.update("ghost", is_active=False) == 0


class TestBaseCRUD:
    """Test the generic BaseCRUD helpers."""

    def test_get_by_id(self, base_crud, make_record):
        record = make_record("by:id")
        assert base_crud.get_by_id(EnumMetadata, record.id).code == "by:id"
        assert base_crud.get_by_id(EnumMetadata, 99999) is None

    def test_get_all_with_filters(self, base_crud, make_record):
        make_record("b", label="Same")
        make_record("a", label="Same")
        make_record("c", label="Other")

        records = base_crud.get_all(EnumMetadata, filters={"label": "Same"}, order_by="code")
        assert [record.code for record in records] == ["a", "b"]

    def test_update_by_id(self, base_crud, make_record):
        record = make_record("patch")
        updated = base_crud.update_by_id(EnumMetadata, record.id, description="patched")

        assert updated.description == "patched"
        assert base_crud.update_by_id(EnumMetadata, 99999, description="x") is None

    def test_external_session_not_committed(self, temp_db, base_crud, make_record):
        record = make_record("rollback", description="before")
        with temp_db.get_session() as session:
            base_crud.update_by_id(EnumMetadata, record.id, session=session, description="after")
            session.rollback()

        assert base_crud.get_by_id(EnumMetadata, record.id).description == "before"
