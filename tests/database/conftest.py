"""Fixtures for isolated database module tests.

Provides reusable fixtures for all database test modules, including
a fresh temp-file SQLite DatabaseManager for each test. Each manager
reads EnumInfo from its own MetadataRegistry, so descriptors defined in
one test never reach another.
"""
import os
import shutil
import tempfile

import pytest

from adb_meta import MetadataRegistry
from database import DatabaseManager
from database.base_crud import BaseCRUD
from database.models import EnumMetadata


@pytest.fixture
def temp_db():
    """Yield a fresh DatabaseManager bound to a temp SQLite database."""
    temp_dir = tempfile.mkdtemp(prefix="db-tests-")
    db_path = os.path.join(temp_dir, "test.db")
    manager = DatabaseManager(database_url=f"sqlite:///{db_path}",
                              registry=MetadataRegistry())
    manager.create_tables()

    try:
        yield manager
    finally:
        manager.close()
        shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def db_conn(temp_db):
    """Yield a DatabaseConnection from the temp_db manager."""
    return temp_db.conn


@pytest.fixture
def base_crud(db_conn):
    """Yield a BaseCRUD instance."""
    return BaseCRUD(db_conn)


@pytest.fixture
def meta_registry(temp_db):
    """Yield the MetadataRegistry the temp_db service reads EnumInfo from."""
    return temp_db.enums.registry


@pytest.fixture
def make_record(temp_db, unique_id):
    """Return a helper that inserts an EnumMetadata row directly."""
    def _make(code, **fields):
        record = EnumMetadata(
            enum_id=fields.pop("enum_id", unique_id("row")),
            code=code,
            label=fields.pop("label", code.title()),
            enum_name=fields.pop("enum_name", f"Enum_{code.replace(':', '_')}"),
            **fields,
        )
        return temp_db.enum_metadata.save(record)
    return _make
