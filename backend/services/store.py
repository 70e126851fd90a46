"""
Store Service

Local key-value persistence for ResearchHub.
Each key is a JSON document in the data directory (~/.researchhub by default).
"""

import json
import logging
import os
import time
import uuid
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DATA_DIR = Path(os.getenv("RESEARCHHUB_DATA_DIR", str(Path.home() / ".researchhub")))

# Collection keys
USERS = "rh_users"
CURRENT_USER = "rh_current_user"
WORKSPACES = "rh_workspaces"
PAPERS = "rh_papers"
MESSAGES = "rh_messages"


def new_id() -> str:
    """Random component followed by a millisecond time component."""
    return uuid.uuid4().hex[:11] + format(time.time_ns() // 1_000_000, "x")


class Store:
    """
    Collections of records persisted as JSON documents.

    Callers load a whole collection, change it in memory and save the full
    replacement. There is no partial update.
    """

    def __init__(self, data_dir: Optional[str | Path] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def _read(self, key: str):
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable store key {key}: {e}")
            return None

    def _write(self, key: str, value) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(value, indent=2), encoding="utf-8")
        os.replace(tmp, path)

    def load(self, collection: str) -> list[dict]:
        """Load a collection. Missing or corrupt data reads as empty."""
        data = self._read(collection)
        if not isinstance(data, list):
            if data is not None:
                logger.warning(f"Store key {collection} is not a list, treating as empty")
            return []
        return [r for r in data if isinstance(r, dict)]

    def save(self, collection: str, records: list[dict]) -> None:
        """Replace the full persisted sequence of a collection."""
        self._write(collection, list(records))

    def load_record(self, key: str) -> Optional[dict]:
        """Load a single-document key (e.g. the session pointer)."""
        data = self._read(key)
        return data if isinstance(data, dict) else None

    def save_record(self, key: str, record: dict) -> None:
        self._write(key, record)

    def remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()

    def new_id(self) -> str:
        return new_id()
