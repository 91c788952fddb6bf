"""In-memory key-value store adapter.

Implements KeyValueStorePort with a process-local dict. Used for the
session scope (the current user lives exactly as long as the process)
and as a zero-config durable store for tests and demos.
"""

import json
from typing import Any

from admissions.core.ports import KeyValueStorePort


class InMemoryKeyValueStore(KeyValueStorePort):
    """Dict-backed store that keeps values as serialized JSON text.

    Serializing on write gives callers the same independence from stored
    state as a real storage medium: mutating a returned value never
    changes what is stored, and non-JSON values are rejected up front.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        text = self._data.get(key)
        if text is None:
            return None
        return json.loads(text)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
