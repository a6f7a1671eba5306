"""
Tests for the user CRUD endpoints.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from dummy_api.core.container import get_record_store_dep, get_settings_dep
from dummy_api.main import create_app
from dummy_api.providers.store.base import RecordStoreError, StoreUnavailableError

USER = {"name": "A", "surname": "B", "email": "a@b.com", "theme": "dark"}


@pytest.fixture
def mock_store():
    """Store double whose every method is an AsyncMock."""
    store = MagicMock()
    store.provider_name = "mock"
    store.get = AsyncMock(return_value=None)
    store.put = AsyncMock()
    store.update = AsyncMock()
    store.delete = AsyncMock()
    store.fetch = AsyncMock()
    return store


@pytest.fixture
def mock_client(test_settings, mock_store):
    """Test client bound to the mock store."""
    app = create_app()
    app.dependency_overrides[get_settings_dep] = lambda: test_settings
    app.dependency_overrides[get_record_store_dep] = lambda: mock_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestUserLifecycle:
    """End-to-end create, read, delete."""

    def test_put_get_delete_get(self, client):
        """Test a user can be created, read back and deleted."""
        created = client.put("/user", json=USER)
        assert created.status_code == 200
        assert created.json() == USER

        fetched = client.get("/user/a@b.com")
        assert fetched.status_code == 200
        assert fetched.json() == USER

        deleted = client.delete("/user/a@b.com")
        assert deleted.status_code == 200
        assert deleted.text == "Success"

        missing = client.get("/user/a@b.com")
        assert missing.status_code == 404
        assert missing.json()["detail"]["error"] == "not_found"

    def test_put_overwrites(self, client):
        """Test a second put with the same email replaces the user."""
        client.put("/user", json=USER)
        client.put("/user", json={"name": "X", "surname": "Y", "email": "a@b.com"})

        fetched = client.get("/user/a@b.com").json()

        assert fetched == {"name": "X", "surname": "Y", "email": "a@b.com"}

    def test_put_requires_fields(self, client):
        """Test a user without surname is rejected."""
        response = client.put("/user", json={"name": "A", "email": "a@b.com"})

        assert response.status_code == 422

    def test_put_invalid_email(self, client):
        """Test malformed emails are rejected."""
        response = client.put(
            "/user", json={"name": "A", "surname": "B", "email": "not-an-email"}
        )

        assert response.status_code == 422


class TestListUsers:
    """Tests for GET /user."""

    def test_empty(self, client):
        """Test an empty store lists nothing."""
        response = client.get("/user")

        assert response.status_code == 200
        assert response.json() == []

    def test_lists_across_pages(self, client, memory_store):
        """Test all users are listed even when the store pages them."""
        for i in range(23):
            client.put(
                "/user",
                json={"name": f"U{i}", "surname": "S", "email": f"u{i}@example.com"},
            )

        users = client.get("/user").json()

        assert len(users) == 23
        assert {u["email"] for u in users} == {f"u{i}@example.com" for i in range(23)}
        assert all("key" not in u for u in users)


class TestUpdateUser:
    """Tests for PATCH /user/{email}."""

    def test_patch_echoes_and_merges(self, client):
        """Test the patch is echoed and merged into the stored user."""
        client.put("/user", json=USER)

        response = client.patch("/user/a@b.com", json={"theme": "light"})

        assert response.status_code == 200
        assert response.json() == {"theme": "light"}
        assert client.get("/user/a@b.com").json() == {**USER, "theme": "light"}

    def test_patch_missing_user(self, client):
        """Test patching an unknown user is 404 and creates nothing."""
        response = client.patch("/user/nobody@example.com", json={"name": "X"})

        assert response.status_code == 404
        assert client.get("/user").json() == []


class TestDeleteUser:
    """Tests for DELETE /user/{email}."""

    def test_delete_missing_is_success(self, client):
        """Test deleting an unknown user still succeeds."""
        response = client.delete("/user/nobody@example.com")

        assert response.status_code == 200
        assert response.text == "Success"

    def test_blank_email_never_contacts_store(self, mock_client, mock_store):
        """Test an empty email answers Failure without a store call."""
        response = mock_client.delete("/user/")

        assert response.status_code == 200
        assert response.text == "Failure"
        mock_store.delete.assert_not_awaited()

    def test_whitespace_email(self, mock_client, mock_store):
        """Test a whitespace-only email counts as blank."""
        response = mock_client.delete("/user/%20%20")

        assert response.text == "Failure"
        mock_store.delete.assert_not_awaited()

    def test_delete_calls_store(self, mock_client, mock_store):
        """Test a real email is forwarded to the store."""
        response = mock_client.delete("/user/a@b.com")

        assert response.text == "Success"
        mock_store.delete.assert_awaited_once_with("a@b.com")


class TestStoreFailures:
    """Tests for store errors surfacing as 502."""

    def test_get_store_error(self, mock_client, mock_store):
        """Test a store error on read is 502."""
        mock_store.get.side_effect = RecordStoreError("Deta API HTTP 500: boom", "deta", 500)

        response = mock_client.get("/user/a@b.com")

        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "store_error"

    def test_list_store_unavailable(self, mock_client, mock_store):
        """Test a transport failure on list is 502 store_unavailable."""
        mock_store.fetch.side_effect = StoreUnavailableError("Network error: down", "deta")

        response = mock_client.get("/user")

        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "store_unavailable"

    def test_delete_store_error(self, mock_client, mock_store):
        """Test a store error on delete is 502."""
        mock_store.delete.side_effect = RecordStoreError("boom", "deta")

        response = mock_client.delete("/user/a@b.com")

        assert response.status_code == 502


class TestEmailSpelling:
    """Tests that the submitted email is the key, unchanged."""

    def test_mixed_case_domain_round_trip(self, client):
        """Test an email with a mixed-case domain is stored and found as sent."""
        user = {"name": "Ada", "surname": "Lovelace", "email": "Ada@Example.COM"}

        created = client.put("/user", json=user)
        assert created.status_code == 200
        assert created.json() == user

        fetched = client.get("/user/Ada@Example.COM")
        assert fetched.status_code == 200
        assert fetched.json() == user

        assert client.delete("/user/Ada@Example.COM").text == "Success"
        assert client.get("/user").json() == []


class TestPatchValidation:
    """Tests for patches that would break the stored user."""

    @pytest.mark.parametrize("field", ["name", "surname", "email"])
    def test_null_required_field_rejected(self, client, field):
        """Test nulling a required field is refused and the user stays readable."""
        client.put("/user", json=USER)

        response = client.patch("/user/a@b.com", json={field: None})

        assert response.status_code == 422
        assert client.get("/user/a@b.com").json() == USER
        assert client.get("/user").json() == [USER]

    def test_null_optional_field_allowed(self, client):
        """Test an optional field may be cleared."""
        client.put("/user", json=USER)

        response = client.patch("/user/a@b.com", json={"theme": None})

        assert response.status_code == 200
        assert response.json() == {"theme": None}
        assert client.get("/user/a@b.com").json() == {
            "name": "A",
            "surname": "B",
            "email": "a@b.com",
        }

    def test_changing_email_rejected(self, client):
        """Test a patch cannot move a user to another key."""
        client.put("/user", json=USER)

        response = client.patch("/user/a@b.com", json={"email": "z@y.com"})

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "key_conflict"
        assert client.get("/user/a@b.com").json()["email"] == "a@b.com"
        assert client.get("/user/z@y.com").status_code == 404

    def test_repeating_email_allowed(self, client):
        """Test a patch may carry the unchanged email."""
        client.put("/user", json=USER)

        response = client.patch(
            "/user/a@b.com", json={"email": "a@b.com", "name": "Z"}
        )

        assert response.status_code == 200
        assert client.get("/user/a@b.com").json()["name"] == "Z"
