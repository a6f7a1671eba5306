"""
Record store package.

Provides abstractions and implementations for the key-value record store.
"""

from dummy_api.providers.store.base import (
    FetchPage,
    PutManyResult,
    Record,
    RecordNotFoundError,
    RecordStore,
    RecordStoreError,
    StoreUnavailableError,
)
from dummy_api.providers.store.deta import DetaRecordStore
from dummy_api.providers.store.factory import RecordStoreFactory
from dummy_api.providers.store.memory import InMemoryRecordStore

__all__ = [
    # Base classes and types
    "RecordStore",
    "Record",
    "FetchPage",
    "PutManyResult",
    # Errors
    "RecordStoreError",
    "RecordNotFoundError",
    "StoreUnavailableError",
    # Implementations
    "DetaRecordStore",
    "InMemoryRecordStore",
    # Factory
    "RecordStoreFactory",
]
