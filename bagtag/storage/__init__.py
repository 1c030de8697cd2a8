"""
Persistence

Modules:
- store: Key-value backends (JSON files, in-memory)
- repository: Player and round persistence on top of a store
"""

from bagtag.storage.repository import BagtagStorage, initialize_data, seed_data
from bagtag.storage.store import InMemoryStore, JsonFileStore, KeyValueStore, StorageError

__all__ = [
    'BagtagStorage',
    'InMemoryStore',
    'JsonFileStore',
    'KeyValueStore',
    'StorageError',
    'initialize_data',
    'seed_data',
]
