"""
Record store base abstractions.

Defines the backend-agnostic interface the API needs from a key-value store.
All concrete store adapters must implement the RecordStore abstract base class.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

Record = dict[str, Any]


@dataclass(frozen=True)
class FetchPage:
    """
    One page of a paged fetch.

    Attributes:
        items: Records on this page, in store order
        last: Continuation token; None when no more pages exist
    """

    items: list[Record]
    last: str | None = None

    @property
    def has_more(self) -> bool:
        """Whether the store reported more data after this page."""
        return bool(self.last)


@dataclass(frozen=True)
class PutManyResult:
    """
    Outcome of a bulk put as reported by the store.

    Attributes:
        processed: Records the store accepted
        failed: Records the store rejected
    """

    processed: list[Record] = field(default_factory=list)
    failed: list[Record] = field(default_factory=list)


class RecordStore(ABC):
    """
    Abstract base class for record stores.

    The store is a flat mapping from string key to JSON record. Each
    record returned by the store carries its key under "key".

    Example:
        class DetaRecordStore(RecordStore):
            async def get(self, key):
                # Implementation
                ...
    """

    @abstractmethod
    async def get(self, key: str) -> Record | None:
        """
        Get a record by key.

        Args:
            key: Record key

        Returns:
            The stored record, or None if the key is absent

        Raises:
            RecordStoreError: If the lookup fails
        """
        ...

    @abstractmethod
    async def put(self, record: Record, key: str) -> Record:
        """
        Store a record under a key, overwriting any existing record.

        Args:
            record: Record fields
            key: Record key

        Returns:
            The stored record (including its key)

        Raises:
            RecordStoreError: If the write fails
        """
        ...

    @abstractmethod
    async def update(self, patch: Record, key: str) -> None:
        """
        Merge fields into an existing record.

        Args:
            patch: Fields to set on the record
            key: Record key

        Raises:
            RecordNotFoundError: If the key does not exist
            RecordStoreError: If the update fails
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete a record. Deleting an absent key is a no-op.

        Args:
            key: Record key

        Raises:
            RecordStoreError: If the delete fails
        """
        ...

    @abstractmethod
    async def fetch(
        self,
        query: list[Record] | None = None,
        last: str | None = None,
        limit: int | None = None,
    ) -> FetchPage:
        """
        Fetch one page of records.

        Args:
            query: Optional list of field filters (OR-ed); None matches all
            last: Continuation token from the previous page
            limit: Maximum page size hint

        Returns:
            FetchPage with the items and the next continuation token

        Raises:
            RecordStoreError: If the fetch fails
        """
        ...

    @abstractmethod
    async def put_many(self, records: list[Record]) -> PutManyResult:
        """
        Store several records in one call.

        Each record must carry its key under "key".

        Args:
            records: Records to store

        Returns:
            PutManyResult listing processed and failed records

        Raises:
            RecordStoreError: If the request as a whole fails
        """
        ...

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Get the provider name.

        Returns:
            Provider identifier string (e.g., "deta", "memory")
        """
        ...

    async def health_check(self) -> bool:
        """
        Check if the store is reachable.

        Default implementation returns True. Override for custom health checks.
        """
        return True

    async def close(self) -> None:
        """
        Clean up store resources.

        Called during application shutdown. Override if the store
        holds resources that need cleanup (e.g., HTTP connections).
        """
        pass


class RecordStoreError(Exception):
    """Base exception for record store errors."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
    ):
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)


class RecordNotFoundError(RecordStoreError):
    """Raised when a record key is not found."""

    def __init__(self, key: str, provider: str | None = None):
        self.key = key
        super().__init__(f"Record '{key}' not found", provider, status_code=404)


class StoreUnavailableError(RecordStoreError):
    """
    Raised when the store cannot be reached.

    Covers transport failures (connection refused, timeouts, DNS) as
    opposed to the store answering with an error status.
    """

    pass
