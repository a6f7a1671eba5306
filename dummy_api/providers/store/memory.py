"""
In-memory record store.

Dict-backed store for local development and tests. Pages its results and
hands out continuation tokens the same way the hosted store does, so the
pagination and bulk code paths behave identically against it.
"""

import asyncio
import copy
import logging
from typing import Any

from dummy_api.providers.store.base import (
    FetchPage,
    PutManyResult,
    Record,
    RecordNotFoundError,
    RecordStore,
)

logger = logging.getLogger(__name__)


class InMemoryRecordStore(RecordStore):
    """
    In-memory record store implementation.

    Records are kept in insertion order; the continuation token is the key
    of the last record on the page. Not suitable for production
    (no persistence, single-instance only).

    Thread-safety is provided via asyncio.Lock.
    """

    def __init__(
        self,
        page_size: int = 1000,
        initial: list[Record] | None = None,
    ):
        """
        Initialize the in-memory store.

        Args:
            page_size: Maximum records returned per fetch
            initial: Optional records to preload (each must carry "key")
        """
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self._page_size = page_size
        self._records: dict[str, Record] = {}
        self._lock = asyncio.Lock()
        self.fetch_calls = 0
        for record in initial or []:
            self._records[record["key"]] = copy.deepcopy(record)

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        return "memory"

    def __len__(self) -> int:
        return len(self._records)

    async def get(self, key: str) -> Record | None:
        async with self._lock:
            record = self._records.get(key)
            return copy.deepcopy(record) if record is not None else None

    async def put(self, record: Record, key: str) -> Record:
        stored = {**copy.deepcopy(record), "key": key}
        async with self._lock:
            self._records[key] = stored
        return copy.deepcopy(stored)

    async def update(self, patch: Record, key: str) -> None:
        async with self._lock:
            existing = self._records.get(key)
            if existing is None:
                raise RecordNotFoundError(key, self.provider_name)
            for field_name, value in patch.items():
                if field_name == "key":
                    continue
                existing[field_name] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._records.pop(key, None)

    async def fetch(
        self,
        query: list[Record] | None = None,
        last: str | None = None,
        limit: int | None = None,
    ) -> FetchPage:
        page_size = min(limit, self._page_size) if limit else self._page_size

        async with self._lock:
            self.fetch_calls += 1
            keys = list(self._records)
            start = 0
            if last is not None:
                # Resume after the cursor; a vanished cursor key restarts at the end
                start = keys.index(last) + 1 if last in keys else len(keys)

            matched: list[Record] = []
            next_last: str | None = None
            for position in range(start, len(keys)):
                record = self._records[keys[position]]
                if not _matches(record, query):
                    continue
                if len(matched) == page_size:
                    next_last = matched[-1]["key"]
                    break
                matched.append(copy.deepcopy(record))

        logger.debug(
            f"Memory fetch: {len(matched)} records (last={next_last!r})"
        )
        return FetchPage(items=matched, last=next_last)

    async def put_many(self, records: list[Record]) -> PutManyResult:
        processed: list[Record] = []
        failed: list[Record] = []
        async with self._lock:
            for record in records:
                key = record.get("key")
                if not key:
                    failed.append(copy.deepcopy(record))
                    continue
                self._records[key] = copy.deepcopy(record)
                processed.append(copy.deepcopy(record))
        return PutManyResult(processed=processed, failed=failed)

    async def reset(self) -> None:
        """Clear all stored records (useful in tests)."""
        async with self._lock:
            self._records.clear()
            self.fetch_calls = 0


def _matches(record: Record, query: list[Record] | None) -> bool:
    """Return True if the record satisfies any of the equality filters."""
    if not query:
        return True
    return any(_matches_one(record, condition) for condition in query)


def _matches_one(record: Record, condition: dict[str, Any]) -> bool:
    return all(record.get(name) == value for name, value in condition.items())
