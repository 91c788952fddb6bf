"""JSON file key-value store adapter.

Implements KeyValueStorePort on top of a single JSON document mapping
keys to values, the on-disk counterpart of browser local storage.
Writes go to a temporary file that replaces the original, so a crash
mid-write leaves the previous document intact.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from admissions.core.ports import KeyValueStorePort

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStorePort):
    """File-backed store holding every key in one JSON object."""

    def __init__(self, path: str):
        """Initialize the store.

        Args:
            path: Location of the JSON document. Parent directories are
                created as needed; the file itself is created on first write.
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read_document(self) -> dict[str, Any]:
        """Load the whole document, treating a corrupt file as empty."""
        if not self.path.exists():
            return {}

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(
                f"Failed to parse store file {self.path}: {e}. Treating it as empty.",
                extra={"path": str(self.path)},
            )
            return {}

        if not isinstance(document, dict):
            logger.warning(
                f"Store file {self.path} does not hold an object. Treating it as empty.",
                extra={"path": str(self.path)},
            )
            return {}
        return document

    def _write_document(self, document: dict[str, Any]) -> None:
        payload = json.dumps(document, indent=2)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Any | None:
        return self._read_document().get(key)

    def set(self, key: str, value: Any) -> None:
        document = self._read_document()
        document[key] = value
        self._write_document(document)
        logger.debug(f"Stored key {key}", extra={"key": key, "path": str(self.path)})

    def remove(self, key: str) -> None:
        document = self._read_document()
        if key not in document:
            return
        del document[key]
        self._write_document(document)
