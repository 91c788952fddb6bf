"""Loading and saving record collections through a KeyValueStorePort.

Stored collections are trusted for nothing: a value that is not a list is
treated as an empty collection, and entries that fail validation are
dropped. Both cases are logged, and the next save rewrites the key with
only valid records.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol, TypeVar

from .ports import KeyValueStorePort

logger = logging.getLogger(__name__)


class _Serializable(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


T = TypeVar("T")


def load_records(
    store: KeyValueStorePort, key: str, parse: Callable[[Any], T]
) -> list[T]:
    """Read a JSON array from the store and parse each entry.

    Args:
        store: Store holding the collection.
        key: Storage key of the collection.
        parse: Constructor raising ValueError on malformed entries.

    Returns:
        Parsed records in stored order. Empty if the key is absent or
        does not hold a list.
    """
    raw = store.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning(
            f"Stored collection {key} is not a list; treating it as empty",
            extra={"key": key, "type": type(raw).__name__},
        )
        return []

    records: list[T] = []
    for index, entry in enumerate(raw):
        try:
            records.append(parse(entry))
        except ValueError as e:
            logger.warning(
                f"Discarding malformed record {index} in {key}: {e}",
                extra={"key": key, "index": index},
            )
    return records


def save_records(
    store: KeyValueStorePort, key: str, records: Iterable[_Serializable]
) -> None:
    """Write records to the store as a JSON array."""
    store.set(key, [record.to_dict() for record in records])
