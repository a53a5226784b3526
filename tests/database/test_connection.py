"""DatabaseConnection / DatabaseManager infrastructure tests.

Tests for:
- SQLite file creation including missing parent directories
- in-memory databases
- idempotent table creation
- manager property accessors and sub-component wiring
"""
import os

from sqlalchemy import inspect

from adb_meta import default_registry
from database import DatabaseManager, EnumMetadataRepository, EnumMetadataService
from database.connection import DatabaseConnection


class TestDatabaseConnection:
    """Test DatabaseConnection."""

    def test_creates_parent_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "meta.db"
        conn = DatabaseConnection(f"sqlite:///{db_path}")
        try:
            conn.create_tables()
            assert os.path.exists(db_path)
        finally:
            conn.close()

    def test_in_memory(self):
        conn = DatabaseConnection("sqlite:///:memory:")
        try:
            conn.create_tables()
            assert "__enums__" in inspect(conn.engine).get_table_names()
        finally:
            conn.close()

    def test_create_tables_idempotent(self, db_conn):
        db_conn.create_tables()
        db_conn.create_tables()
        assert inspect(db_conn.engine).get_table_names() == ["__enums__"]

    def test_get_session(self, db_conn):
        with db_conn.get_session() as session:
            assert session.bind is db_conn.engine


class TestDatabaseManager:
    """Test DatabaseManager wiring."""

    def test_database_url_property(self, temp_db):
        assert temp_db.database_url.startswith("sqlite:///")

    def test_components(self, temp_db):
        assert isinstance(temp_db.enum_metadata, EnumMetadataRepository)
        assert isinstance(temp_db.enums, EnumMetadataService)
        assert temp_db.enums.repository is temp_db.enum_metadata

    def test_default_registry_used(self, tmp_path):
        manager = DatabaseManager(f"sqlite:///{tmp_path / 'default.db'}")
        try:
            assert manager.enums.registry is default_registry
        finally:
            manager.close()
