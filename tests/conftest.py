"""
Pytest configuration and fixtures for the Dummy JSON API tests.
"""

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from dummy_api.core.config import Settings
from dummy_api.core.container import (
    Container,
    clear_container_cache,
    get_container_dep,
    get_record_store_dep,
    get_sample_generator_dep,
    get_settings_dep,
)
from dummy_api.main import create_app
from dummy_api.providers.store.memory import InMemoryRecordStore


@pytest.fixture(autouse=True)
def clear_caches() -> Generator[None, None, None]:
    """
    Clear all caches before and after each test.

    This ensures test isolation by resetting singleton state.
    """
    clear_container_cache()
    yield
    clear_container_cache()


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """
    Create a temporary config.yaml file for testing.

    Args:
        tmp_path: Pytest tmp_path fixture.

    Returns:
        Path to the temporary config file.
    """
    config_content = """
store:
  provider: "memory"
  base_name: "test_db"
  timeout_seconds: 5
  memory_page_size: 10

bulk:
  feed_count: 25
  delete_concurrency: 4
  faker_seed: 1234
"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_content)
    return config_path


@pytest.fixture
def test_settings(temp_config_file: Path) -> Settings:
    """
    Create test settings from temporary config file.

    Args:
        temp_config_file: Path to temporary config file.

    Returns:
        Settings instance loaded from temporary config.
    """
    return Settings.from_yaml(temp_config_file)


@pytest.fixture
def test_container(test_settings: Settings) -> Container:
    """
    Create a test container with test settings.

    Args:
        test_settings: Test settings fixture.

    Returns:
        Container instance with test settings.
    """
    return Container(settings=test_settings)


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    """Empty in-memory store paging 10 records at a time."""
    return InMemoryRecordStore(page_size=10)


@pytest.fixture
def client(
    test_settings: Settings,
    test_container: Container,
    memory_store: InMemoryRecordStore,
) -> Generator[TestClient, None, None]:
    """
    Create a test client whose handlers use the in-memory store.

    Yields:
        TestClient instance.
    """
    app = create_app()
    app.dependency_overrides[get_settings_dep] = lambda: test_settings
    app.dependency_overrides[get_record_store_dep] = lambda: memory_store
    app.dependency_overrides[get_container_dep] = lambda: test_container
    app.dependency_overrides[get_sample_generator_dep] = (
        test_container.get_sample_generator
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
