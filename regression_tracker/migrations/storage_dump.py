"""
Migration: move collections between a JSON storage dump and the database.

A dump is a JSON object keyed by collection key (``regression_folders``,
``regression_scripts``, ...). Values are either record arrays or the
JSON text of a record array, as a browser's local storage exports them.
Keys that are not collection keys are ignored.
"""

import json
import sys
from pathlib import Path
from typing import Optional

from regression_tracker.database import init_db
from regression_tracker.exceptions import InvalidDumpError
from regression_tracker.main import configure_logging
from regression_tracker.services.collection_store import (
    COLLECTION_KEYS,
    CollectionStore,
    SqlCollectionStore,
    decode_collection,
)


def _default_store() -> CollectionStore:
    init_db()
    return SqlCollectionStore()


def import_storage_dump(path: str | Path, store: Optional[CollectionStore] = None) -> list[str]:
    """
    Replace each collection present in the dump file.

    Returns:
        The collection keys that were imported.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except ValueError as exc:
        raise InvalidDumpError(f"{path} is not valid JSON") from exc
    if not isinstance(data, dict):
        raise InvalidDumpError(f"{path} does not hold a JSON object")

    store = store or _default_store()
    imported = []
    for key in COLLECTION_KEYS:
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, str):
            records = decode_collection(key, value)
        elif isinstance(value, list) and all(isinstance(item, dict) for item in value):
            records = value
        else:
            print(f"Migration: {key} is not a record array, importing it as empty.")
            records = []
        store.replace(key, records)
        imported.append(key)
        print(f"Migration: Imported {len(records)} record(s) into {key}.")

    if not imported:
        print("Migration skipped: no collection keys found in dump.")
    return imported


def export_storage_dump(path: str | Path, store: Optional[CollectionStore] = None) -> None:
    """Write every collection to a dump file in the import format."""
    store = store or _default_store()
    data = {key: store.list(key) for key in COLLECTION_KEYS}
    Path(path).write_text(json.dumps(data, indent=2), encoding="utf-8")
    print(f"Migration complete: Exported {len(COLLECTION_KEYS)} collections to {path}.")


if __name__ == "__main__":
    configure_logging()
    if len(sys.argv) != 3 or sys.argv[1] not in ("import", "export"):
        print("usage: python -m regression_tracker.migrations.storage_dump import|export FILE")
        sys.exit(2)
    if sys.argv[1] == "import":
        import_storage_dump(sys.argv[2])
    else:
        export_storage_dump(sys.argv[2])
