"""
Record Store Factory.

Creates and configures record store instances based on application settings.
Follows the Factory Method pattern for store creation.
"""

from typing import Callable, Optional

import httpx

from dummy_api.core.config import Settings
from dummy_api.core.config import StoreProvider as StoreProviderEnum
from dummy_api.providers.store.base import RecordStore, RecordStoreError
from dummy_api.providers.store.deta import DetaRecordStore
from dummy_api.providers.store.memory import InMemoryRecordStore

# Type alias for store factory functions
StoreFactory = Callable[[Settings, Optional[httpx.AsyncClient]], RecordStore]


def _create_deta_store(
    settings: Settings, http_client: httpx.AsyncClient | None
) -> RecordStore:
    """Create the hosted Deta Base store."""
    return DetaRecordStore(
        project_key=settings.get_project_key(),
        base_name=settings.store.base_name,
        api_url=settings.store.api_url,
        http_client=http_client,
        timeout_seconds=settings.store.timeout_seconds,
        page_limit=settings.store.page_limit,
    )


def _create_memory_store(
    settings: Settings, http_client: httpx.AsyncClient | None
) -> RecordStore:
    """Create the in-memory store."""
    return InMemoryRecordStore(page_size=settings.store.memory_page_size)


# Registry of store factories
# Maps provider enum to factory function for extensibility
_STORE_REGISTRY: dict[StoreProviderEnum, StoreFactory] = {
    StoreProviderEnum.DETA: _create_deta_store,
    StoreProviderEnum.MEMORY: _create_memory_store,
}


class RecordStoreFactory:
    """
    Factory for creating record store instances.

    Uses the configured store provider to instantiate the appropriate
    adapter class. Supports extensibility through a registry pattern.

    Example:
        store = RecordStoreFactory.create(settings, http_client)
        page = await store.fetch()
    """

    @staticmethod
    def create(
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> RecordStore:
        """
        Create a record store based on settings.

        Args:
            settings: Application settings containing store configuration
            http_client: Optional shared HTTP client for remote stores

        Returns:
            Configured RecordStore instance

        Raises:
            ValueError: If the configured provider is not supported
            RecordStoreError: If store creation fails
        """
        provider_type = settings.store.provider

        factory_func = _STORE_REGISTRY.get(provider_type)
        if factory_func is None:
            supported = [p.value for p in _STORE_REGISTRY.keys()]
            raise ValueError(
                f"Unsupported record store: '{provider_type.value}'. "
                f"Supported stores: {supported}"
            )

        try:
            return factory_func(settings, http_client)
        except Exception as e:
            raise RecordStoreError(
                f"Failed to create record store '{provider_type.value}': {e}",
                provider=provider_type.value,
            ) from e

    @staticmethod
    def get_supported_providers() -> list[str]:
        """
        Get list of supported store names.

        Returns:
            List of provider name strings
        """
        return [p.value for p in _STORE_REGISTRY.keys()]
