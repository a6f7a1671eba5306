"""
Full-table pagination over a record store.
"""

import logging

from dummy_api.providers.store.base import Record, RecordStore

logger = logging.getLogger(__name__)


async def fetch_all(
    store: RecordStore,
    query: list[Record] | None = None,
    limit: int | None = None,
) -> list[Record]:
    """
    Fetch every record by following continuation tokens until exhausted.

    Pages are fetched one after another and their items appended in
    arrival order. The store is not a snapshot: records written or deleted
    during the walk may be missed or seen twice.

    Args:
        store: Record store to walk
        query: Optional filters forwarded to every page fetch
        limit: Optional page size hint

    Returns:
        All records, in page order

    Raises:
        RecordStoreError: If any page fetch fails (no partial result)
    """
    page = await store.fetch(query=query, limit=limit)
    records = list(page.items)
    pages = 1

    while page.has_more:
        page = await store.fetch(query=query, last=page.last, limit=limit)
        records.extend(page.items)
        pages += 1

    logger.debug(f"Fetched {len(records)} records in {pages} pages")
    return records
