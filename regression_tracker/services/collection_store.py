"""
Keyed collection store.

A collection is a JSON array of records addressed by a namespace key.
Reads never fail because of bad content: a missing key, undecodable text
or a payload that is not an array of objects reads back as an empty
collection, and typed reads skip single records that do not match their
schema. Writes replace the whole collection at once.
"""

import json
import logging
from typing import Iterable, Optional, Protocol, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..database import SessionLocal
from ..exceptions import StorageError
from ..models.collection import StoredCollection

logger = logging.getLogger(__name__)

# Collection keys
FOLDERS_KEY = "regression_folders"
SCRIPTS_KEY = "regression_scripts"
PROJECTS_KEY = "regression_projects"
IMPORTED_SCRIPTS_KEY = "regression_imported_scripts"
ISSUES_KEY = "regression_issues"

COLLECTION_KEYS = (
    FOLDERS_KEY,
    SCRIPTS_KEY,
    PROJECTS_KEY,
    IMPORTED_SCRIPTS_KEY,
    ISSUES_KEY,
)

RecordT = TypeVar("RecordT", bound=BaseModel)


class CollectionStore(Protocol):
    """Read and replace whole collections by key."""

    def list(self, key: str) -> list[dict]:
        ...

    def replace(self, key: str, records: Iterable[dict]) -> None:
        ...


def decode_collection(key: str, text: Optional[str]) -> list[dict]:
    """
    Decode the persisted text of a collection.

    Returns an empty list when the text is missing or is not a JSON array
    of objects.
    """
    if not text:
        return []
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        logger.warning("Collection %s is not valid JSON, treating as empty", key)
        return []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        logger.warning("Collection %s is not an array of records, treating as empty", key)
        return []
    return data


def encode_collection(records: Iterable[dict]) -> str:
    return json.dumps(list(records))


class InMemoryCollectionStore:
    """
    Collection store kept in process memory.

    Collections are held as serialized text, exactly as a browser or file
    medium would hold them, so every read hands out fresh copies.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def list(self, key: str) -> list[dict]:
        return decode_collection(key, self._data.get(key))

    def replace(self, key: str, records: Iterable[dict]) -> None:
        self._data[key] = encode_collection(records)

    def raw(self, key: str) -> Optional[str]:
        """Return the persisted text of a collection, if any."""
        return self._data.get(key)

    def put_raw(self, key: str, text: str) -> None:
        """Overwrite the persisted text of a collection without checking it."""
        self._data[key] = text

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class SqlCollectionStore:
    """
    Collection store backed by the ``collections`` table.

    Each collection is one row; ``replace`` upserts that row in a single
    transaction.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    def list(self, key: str) -> list[dict]:
        db = self._session_factory()
        try:
            row = db.get(StoredCollection, key)
            text = row.payload if row is not None else None
        except SQLAlchemyError:
            logger.warning("Collection %s could not be read, treating as empty", key, exc_info=True)
            return []
        finally:
            db.close()
        return decode_collection(key, text)

    def replace(self, key: str, records: Iterable[dict]) -> None:
        payload = encode_collection(records)
        db = self._session_factory()
        try:
            row = db.get(StoredCollection, key)
            if row is None:
                db.add(StoredCollection(key=key, payload=payload))
            else:
                row.payload = payload
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise StorageError(f"Failed to write collection {key}") from exc
        finally:
            db.close()


def load_records(store: CollectionStore, key: str, model: type[RecordT]) -> list[RecordT]:
    """
    Read a collection as typed records.

    Records that do not match ``model`` are skipped and logged; the valid
    ones are kept, so a later write does not lose them.
    """
    records = []
    for position, item in enumerate(store.list(key)):
        try:
            records.append(model.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                "Collection %s: skipping malformed record at position %d (%d error(s))",
                key, position, exc.error_count(),
            )
    return records


def save_records(store: CollectionStore, key: str, records: Iterable[BaseModel]) -> None:
    store.replace(key, [record.to_record() for record in records])


def apply_patch(record: BaseModel, patch: BaseModel) -> None:
    """
    Copy every field explicitly set on ``patch`` onto ``record``.

    An explicit None clears fields that default to None (``resolution``,
    ``remarks``) and is ignored for fields that cannot hold None.
    """
    fields = type(record).model_fields
    update_data = patch.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and (fields[field].is_required() or fields[field].default is not None):
            continue
        setattr(record, field, value)


def find_index(records: list, record_id: str) -> int:
    """Return the position of the record with ``record_id``, or -1."""
    for index, record in enumerate(records):
        if record.id == record_id:
            return index
    return -1
