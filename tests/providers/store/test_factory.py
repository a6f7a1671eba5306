"""
Tests for RecordStoreFactory.
"""

import httpx
import pytest

from dummy_api.core.config import Settings, StoreConfig, StoreProvider
from dummy_api.providers.store.base import RecordStoreError
from dummy_api.providers.store.deta import DetaRecordStore
from dummy_api.providers.store.factory import RecordStoreFactory
from dummy_api.providers.store.memory import InMemoryRecordStore


class TestRecordStoreFactory:
    """Tests for store creation from settings."""

    def test_create_memory_store(self):
        """Test the memory provider builds an in-memory store."""
        settings = Settings(
            store=StoreConfig(provider=StoreProvider.MEMORY, memory_page_size=7)
        )
        store = RecordStoreFactory.create(settings)

        assert isinstance(store, InMemoryRecordStore)
        assert store._page_size == 7

    def test_create_deta_store(self):
        """Test the deta provider uses the project key and base name."""
        client = httpx.AsyncClient()
        settings = Settings(
            project_key="a0abc_secret",
            store=StoreConfig(base_name="people", page_limit=50),
        )
        store = RecordStoreFactory.create(settings, http_client=client)

        assert isinstance(store, DetaRecordStore)
        assert store.base_url == "https://database.deta.sh/v1/a0abc/people"
        assert store._http_client is client
        assert store._page_limit == 50

    def test_create_deta_without_key(self):
        """Test a missing key is wrapped in RecordStoreError."""
        settings = Settings(project_key="", store=StoreConfig())

        with pytest.raises(RecordStoreError) as exc_info:
            RecordStoreFactory.create(settings)

        assert exc_info.value.provider == "deta"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_supported_providers(self):
        """Test both stores are registered."""
        assert set(RecordStoreFactory.get_supported_providers()) == {"deta", "memory"}
