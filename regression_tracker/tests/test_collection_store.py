"""
Tests for the keyed collection store backends.

Tests cover:
- InMemoryCollectionStore: list/replace and degraded reads
- SqlCollectionStore: persistence through SQLAlchemy, single-row upsert
- load_records / save_records: typed access and malformed records
"""

import json

import pytest
from sqlalchemy.orm import sessionmaker

from regression_tracker.database import build_engine, init_db
from regression_tracker.exceptions import StorageError
from regression_tracker.models.collection import StoredCollection
from regression_tracker.schemas.folder import Folder
from regression_tracker.services.collection_store import (
    FOLDERS_KEY,
    SCRIPTS_KEY,
    InMemoryCollectionStore,
    SqlCollectionStore,
    decode_collection,
    load_records,
    save_records,
)
from regression_tracker.services.folder_tree import FolderHierarchy


@pytest.fixture(scope="function")
def test_engine(tmp_path):
    """Create a file-backed SQLite engine in a temporary directory."""
    engine = build_engine(f"sqlite:///{tmp_path / 'test_collection_store.db'}")
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def sql_store(test_engine):
    """Create a SQL store over a fresh schema."""
    init_db(bind=test_engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    return SqlCollectionStore(session_factory)


class TestDecodeCollection:
    """Tests for decoding persisted collection text."""

    def test_missing_text_is_empty(self):
        assert decode_collection(FOLDERS_KEY, None) == []
        assert decode_collection(FOLDERS_KEY, "") == []

    def test_invalid_json_is_empty(self):
        assert decode_collection(FOLDERS_KEY, "{not json") == []

    def test_non_array_is_empty(self):
        assert decode_collection(FOLDERS_KEY, '{"id": "x"}') == []

    def test_array_of_non_objects_is_empty(self):
        assert decode_collection(FOLDERS_KEY, "[1, 2, 3]") == []

    def test_array_of_objects_is_returned(self):
        assert decode_collection(FOLDERS_KEY, '[{"id": "a"}]') == [{"id": "a"}]


class TestInMemoryCollectionStore:
    """Tests for the in-memory backend."""

    def test_absent_key_lists_empty(self):
        store = InMemoryCollectionStore()
        assert store.list(FOLDERS_KEY) == []

    def test_replace_overwrites_whole_collection(self):
        store = InMemoryCollectionStore()
        store.replace(FOLDERS_KEY, [{"id": "a"}, {"id": "b"}])
        store.replace(FOLDERS_KEY, [{"id": "c"}])
        assert store.list(FOLDERS_KEY) == [{"id": "c"}]

    def test_keys_are_independent(self):
        store = InMemoryCollectionStore()
        store.replace(FOLDERS_KEY, [{"id": "a"}])
        assert store.list(SCRIPTS_KEY) == []

    def test_reads_return_copies(self):
        store = InMemoryCollectionStore()
        store.replace(FOLDERS_KEY, [{"id": "a"}])
        records = store.list(FOLDERS_KEY)
        records[0]["id"] = "mutated"
        assert store.list(FOLDERS_KEY) == [{"id": "a"}]

    def test_corrupt_text_lists_empty(self):
        store = InMemoryCollectionStore({FOLDERS_KEY: "][ garbage"})
        assert store.list(FOLDERS_KEY) == []


class TestSqlCollectionStore:
    """Tests for the SQLAlchemy backend."""

    def test_absent_key_lists_empty(self, sql_store):
        assert sql_store.list(FOLDERS_KEY) == []

    def test_replace_then_list(self, sql_store):
        sql_store.replace(FOLDERS_KEY, [{"id": "a", "name": "Billing"}])
        assert sql_store.list(FOLDERS_KEY) == [{"id": "a", "name": "Billing"}]

    def test_replace_keeps_one_row_per_key(self, sql_store, test_engine):
        sql_store.replace(FOLDERS_KEY, [{"id": "a"}])
        sql_store.replace(FOLDERS_KEY, [{"id": "b"}])

        session = sessionmaker(bind=test_engine)()
        try:
            rows = session.query(StoredCollection).filter(StoredCollection.key == FOLDERS_KEY).all()
        finally:
            session.close()
        assert len(rows) == 1
        assert json.loads(rows[0].payload) == [{"id": "b"}]

    def test_corrupt_payload_lists_empty(self, sql_store, test_engine):
        session = sessionmaker(bind=test_engine)()
        try:
            session.add(StoredCollection(key=FOLDERS_KEY, payload="not json at all"))
            session.commit()
        finally:
            session.close()
        assert sql_store.list(FOLDERS_KEY) == []

    def test_missing_table_reads_empty_and_write_raises(self, test_engine):
        """Without a schema reads degrade, but writes surface a StorageError."""
        store = SqlCollectionStore(sessionmaker(bind=test_engine))
        assert store.list(FOLDERS_KEY) == []
        with pytest.raises(StorageError) as exc_info:
            store.replace(FOLDERS_KEY, [{"id": "a"}])
        assert exc_info.value.error_code == "STORAGE_ERROR"


class TestTypedRecords:
    """Tests for load_records and save_records."""

    def test_save_uses_camel_case_and_omits_none(self):
        store = InMemoryCollectionStore()
        save_records(store, FOLDERS_KEY, [Folder(id="f1", name="Root")])
        assert store.list(FOLDERS_KEY) == [{"id": "f1", "name": "Root", "isSubfolder": False}]

    def test_load_parses_camel_case(self):
        store = InMemoryCollectionStore()
        store.replace(FOLDERS_KEY, [
            {"id": "f2", "name": "Sub", "parentId": "f1", "isSubfolder": True},
        ])
        [folder] = load_records(store, FOLDERS_KEY, Folder)
        assert folder.parent_id == "f1"
        assert folder.is_subfolder is True

    def test_malformed_record_is_skipped(self):
        store = InMemoryCollectionStore()
        store.replace(FOLDERS_KEY, [{"id": "ok", "name": "Fine"}, {"name": 12}])
        assert [f.id for f in load_records(store, FOLDERS_KEY, Folder)] == ["ok"]

    def test_valid_records_survive_a_write_after_a_malformed_one(self):
        store = InMemoryCollectionStore()
        store.replace(FOLDERS_KEY, [
            {"id": "folder_0", "name": "Finance", "isSubfolder": False},
            {"id": "folder_1", "name": "Logistics", "isSubfolder": False},
            {"id": "folder_2", "name": "HR", "isSubfolder": False},
            {"id": "folder_3", "name": None, "isSubfolder": False},
        ])

        new_folder = FolderHierarchy(store).add_folder("New")

        stored_ids = {record["id"] for record in store.list(FOLDERS_KEY)}
        assert stored_ids == {"folder_0", "folder_1", "folder_2", new_folder.id}
