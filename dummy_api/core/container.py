"""
Dependency Injection Container for the Dummy JSON API.

Provides lazy initialization of shared resources using lru_cache.
Ensures singletons are created once during startup and shared across
FastAPI dependencies. Handlers receive the record store through these
dependencies, never through a module-level client.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

import httpx
from fastapi import Depends

from dummy_api.core.config import Settings, get_settings

if TYPE_CHECKING:
    from dummy_api.providers.store.base import RecordStore
    from dummy_api.services.sample_data import SampleUserGenerator
    from dummy_api.services.user_service import UserService

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency Injection Container.

    Manages lifecycle of shared resources:
    - Settings (configuration)
    - HTTP Client (httpx.AsyncClient)
    - Record Store (Deta Base or in-memory)
    - Sample user generator (Faker)

    Usage:
        container = get_container()
        settings = container.settings
        store = container.get_record_store()
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize the container.

        Args:
            settings: Optional settings override. If None, loads from config.
        """
        self._settings = settings
        self._http_client: httpx.AsyncClient | None = None
        self._record_store: "RecordStore | None" = None
        self._sample_generator: "SampleUserGenerator | None" = None

    @property
    def settings(self) -> Settings:
        """
        Get the application settings.

        Returns:
            Cached Settings instance.
        """
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def get_http_client(self) -> httpx.AsyncClient:
        """
        Get or create the shared HTTP client.

        The client is lazily initialized on first access.
        Call close_http_client() during shutdown to properly close connections.

        Returns:
            Shared httpx.AsyncClient instance.
        """
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.store.timeout_seconds),
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._http_client

    async def close_http_client(self) -> None:
        """
        Close the HTTP client.

        Should be called during application shutdown to properly release
        resources and close connections.
        """
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def get_record_store(self) -> "RecordStore":
        """
        Get or create the record store.

        The store is lazily initialized on first access using the factory.
        Uses settings to determine which store to create.

        Returns:
            RecordStore instance (singleton per container)

        Raises:
            ValueError: If the configured store is not supported
            RecordStoreError: If store creation fails
        """
        if self._record_store is None:
            from dummy_api.providers.store.factory import RecordStoreFactory

            self._record_store = RecordStoreFactory.create(
                settings=self.settings,
                http_client=self.get_http_client(),
            )
            logger.info(f"Record store ready: {self._record_store.provider_name}")
        return self._record_store

    async def check_record_store(self) -> str:
        """
        Report whether the record store can be reached.

        Builds the store if needed. Never raises.

        Returns:
            "ok", "unreachable" (store answered with an error or not at all)
            or "unconfigured" (store could not be built, e.g. no PROJECT_KEY)
        """
        from dummy_api.providers.store.base import RecordStoreError

        try:
            store = self.get_record_store()
        except (RecordStoreError, ValueError) as e:
            logger.warning(f"Record store not configured: {e}")
            return "unconfigured"
        return "ok" if await store.health_check() else "unreachable"

    def get_sample_generator(self) -> "SampleUserGenerator":
        """
        Get or create the sample user generator.

        Seeded once from the bulk settings, so a fixed seed yields one
        reproducible sequence across feeds.

        Returns:
            SampleUserGenerator instance (singleton per container)
        """
        if self._sample_generator is None:
            from dummy_api.services.sample_data import SampleUserGenerator

            self._sample_generator = SampleUserGenerator(
                seed=self.settings.bulk.faker_seed,
                locale=self.settings.bulk.faker_locale,
            )
        return self._sample_generator

    async def close_record_store(self) -> None:
        """
        Close and cleanup the record store.

        Calls the store's close method to release resources.
        """
        if self._record_store is not None:
            await self._record_store.close()
            self._record_store = None

    async def startup(self) -> None:
        """
        Initialize resources on application startup.

        Called by FastAPI lifespan context manager.
        Pre-initializes critical resources and validates configuration.
        """
        # Pre-initialize settings to catch config errors early
        _ = self.settings
        _ = self.get_http_client()
        # The store is built on first use so a missing PROJECT_KEY
        # does not prevent the docs from being served

    async def shutdown(self) -> None:
        """
        Clean up resources on application shutdown.

        Called by FastAPI lifespan context manager.
        """
        await self.close_record_store()
        await self.close_http_client()


# Global container instance using lru_cache for singleton behavior
@lru_cache
def get_container() -> Container:
    """
    Get the cached container instance.

    Uses lru_cache to ensure container is a singleton.
    Call get_container.cache_clear() to reset (useful for testing).

    Returns:
        Cached Container instance.
    """
    return Container()


def clear_container_cache() -> None:
    """
    Clear the container cache.

    Useful for testing to reset the container state.
    Also clears the settings cache.
    """
    get_container.cache_clear()
    get_settings.cache_clear()


# Convenience functions for FastAPI dependencies
def get_settings_dep() -> Settings:
    """
    FastAPI dependency for getting settings.

    Usage:
        @app.get("/")
        async def root(settings: Settings = Depends(get_settings_dep)):
            ...
    """
    return get_container().settings


def get_http_client_dep() -> httpx.AsyncClient:
    """
    FastAPI dependency for getting the HTTP client.
    """
    return get_container().get_http_client()


def get_container_dep() -> Container:
    """
    FastAPI dependency for getting the container itself.

    Used by endpoints that report on container resources (health check).
    """
    return get_container()


def get_record_store_dep() -> "RecordStore":
    """
    FastAPI dependency for getting the record store.

    Override this dependency (app.dependency_overrides) to run the API
    against a different store, e.g. an InMemoryRecordStore in tests.

    Returns:
        RecordStore instance
    """
    return get_container().get_record_store()


def get_sample_generator_dep() -> "SampleUserGenerator":
    """
    FastAPI dependency for getting the shared sample user generator.
    """
    return get_container().get_sample_generator()


def get_user_service_dep(
    store: "RecordStore" = Depends(get_record_store_dep),
    settings: Settings = Depends(get_settings_dep),
    generator: "SampleUserGenerator" = Depends(get_sample_generator_dep),
) -> "UserService":
    """
    FastAPI dependency for getting a user service bound to the record store.

    Usage:
        @router.get("/user")
        async def list_users(service: UserService = Depends(get_user_service_dep)):
            return await service.list_users()
    """
    from dummy_api.services.user_service import UserService

    return UserService(
        store=store,
        generator=generator,
        feed_count=settings.bulk.feed_count,
        delete_concurrency=settings.bulk.delete_concurrency,
    )
