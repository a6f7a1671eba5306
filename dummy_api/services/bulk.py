"""
Bulk operations over a record store.

Deletes fan out concurrently under a semaphore; every sub-operation yields
an ItemOutcome so callers can tell exactly which keys failed.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from dummy_api.models.results import ItemOutcome
from dummy_api.providers.store.base import Record, RecordStore, RecordStoreError
from dummy_api.services.pagination import fetch_all

logger = logging.getLogger(__name__)


@dataclass
class BulkResult:
    """
    Result of a bulk operation.

    Attributes:
        records: Records the operation acted on, in their original order
        outcomes: One outcome per record
    """

    records: list[Record] = field(default_factory=list)
    outcomes: list[ItemOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def ok(self) -> bool:
        """True when every sub-operation completed."""
        return not self.failed

    @property
    def succeeded_records(self) -> list[Record]:
        """Records whose sub-operation completed."""
        done = {o.key for o in self.succeeded}
        return [r for r in self.records if r.get("key") in done]


class BulkOperationError(Exception):
    """Raised when some sub-operations of a bulk operation failed."""

    def __init__(self, message: str, result: BulkResult):
        self.result = result
        super().__init__(message)


async def delete_records(
    store: RecordStore,
    records: list[Record],
    concurrency: int = 16,
) -> BulkResult:
    """
    Delete the given records concurrently.

    At most `concurrency` deletes are in flight at once. A failing delete
    is recorded as a failed outcome; it does not stop the others, and
    completed deletes are never rolled back.

    Args:
        store: Record store
        records: Records to delete (each carries "key")
        concurrency: Maximum deletes in flight

    Returns:
        BulkResult with one outcome per record
    """
    if concurrency < 1:
        raise ValueError("concurrency must be at least 1")

    semaphore = asyncio.Semaphore(concurrency)

    async def delete_one(record: Record) -> ItemOutcome:
        key = record["key"]
        async with semaphore:
            try:
                await store.delete(key)
            except RecordStoreError as e:
                logger.warning(f"Delete failed for '{key}': {e}")
                return ItemOutcome(key=key, success=False, reason=str(e))
        return ItemOutcome(key=key, success=True)

    outcomes = await asyncio.gather(*(delete_one(r) for r in records))
    return BulkResult(records=list(records), outcomes=list(outcomes))


async def delete_all(store: RecordStore, concurrency: int = 16) -> BulkResult:
    """
    Delete every record in the store.

    Walks the whole store first; the snapshot is what gets deleted and
    what the result reports.

    Args:
        store: Record store
        concurrency: Maximum deletes in flight

    Returns:
        BulkResult whose records are the pre-delete snapshot

    Raises:
        RecordStoreError: If the snapshot walk fails (nothing is deleted)
    """
    snapshot = await fetch_all(store)
    result = await delete_records(store, snapshot, concurrency=concurrency)
    logger.info(
        f"Deleted {len(result.succeeded)}/{len(snapshot)} records "
        f"({len(result.failed)} failed)"
    )
    return result
