"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeKeyValueStorePort: In-memory storage with call tracking
- FakeAccountDirectoryPort: Canned users and an attribute-backed session
"""

from .accounts import FakeAccountDirectoryPort
from .store import FakeKeyValueStorePort

__all__ = [
    "FakeAccountDirectoryPort",
    "FakeKeyValueStorePort",
]
