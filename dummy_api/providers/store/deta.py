"""
Deta Base record store implementation.

Talks to the hosted Deta Base HTTP API with a shared httpx.AsyncClient.
API reference: https://deta.space/docs/en/build/reference/http-api/base
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from dummy_api.providers.store.base import (
    FetchPage,
    PutManyResult,
    Record,
    RecordNotFoundError,
    RecordStore,
    RecordStoreError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

# Deta rejects PUT /items requests carrying more than 25 items
MAX_PUT_ITEMS = 25


class DetaRecordStore(RecordStore):
    """
    Deta Base record store.

    Every operation is a single HTTP round-trip, except put_many which is
    split into chunks of MAX_PUT_ITEMS. No retries: errors surface to the
    caller as RecordStoreError subclasses.

    Example:
        store = DetaRecordStore(project_key="a0abc_secret", base_name="simple_db")
        await store.put({"name": "Ada"}, "ada@example.com")
        page = await store.fetch()
    """

    def __init__(
        self,
        project_key: str,
        base_name: str,
        api_url: str = "https://database.deta.sh/v1",
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 30.0,
        page_limit: int | None = None,
    ):
        """
        Initialize the Deta store.

        Args:
            project_key: Deta project key ("<project_id>_<secret>")
            base_name: Name of the Base
            api_url: HTTP API root
            http_client: Optional shared HTTP client
            timeout_seconds: Request timeout when the store owns its client
            page_limit: Default page size sent with queries
        """
        if not project_key or "_" not in project_key:
            raise ValueError("Invalid Deta project key")

        self._project_key = project_key
        self._project_id = project_key.split("_", 1)[0]
        self._base_name = base_name
        self._base_url = f"{api_url.rstrip('/')}/{self._project_id}/{base_name}"
        self._timeout_seconds = timeout_seconds
        self._page_limit = page_limit
        self._http_client = http_client
        self._owns_client = False

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        return "deta"

    @property
    def base_url(self) -> str:
        """Root URL of this Base."""
        return self._base_url

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout_seconds),
                limits=httpx.Limits(max_connections=50, max_keepalive_connections=10),
            )
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Clean up store resources."""
        if self._owns_client and self._http_client:
            await self._http_client.aclose()
            self._http_client = None
            self._owns_client = False

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        allowed: tuple[int, ...] = (200,),
    ) -> httpx.Response:
        """
        Make an authenticated request to the Base.

        Args:
            method: HTTP method
            path: Path below the Base URL
            json: Optional JSON body
            allowed: Status codes returned to the caller instead of raising

        Returns:
            The HTTP response

        Raises:
            StoreUnavailableError: On transport failures
            RecordStoreError: On any other status code
        """
        url = f"{self._base_url}{path}"
        headers = {
            "X-API-Key": self._project_key,
            "Content-Type": "application/json",
        }
        logger.debug(f"Deta {method} {path}")

        try:
            response = await self._get_client().request(
                method, url, json=json, headers=headers
            )
        except httpx.RequestError as e:
            raise StoreUnavailableError(
                f"Network error: {str(e)}",
                provider=self.provider_name,
            ) from e

        if response.status_code not in allowed:
            raise RecordStoreError(
                f"Deta API HTTP {response.status_code}: {_error_message(response)}",
                provider=self.provider_name,
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _item_path(key: str) -> str:
        return f"/items/{quote(key, safe='')}"

    async def get(self, key: str) -> Record | None:
        response = await self._request("GET", self._item_path(key), allowed=(200, 404))
        if response.status_code == 404:
            return None
        return response.json()

    async def put(self, record: Record, key: str) -> Record:
        result = await self._put_items([{**record, "key": key}])
        if not result.processed:
            raise RecordStoreError(
                f"Deta rejected record '{key}'",
                provider=self.provider_name,
            )
        return result.processed[0]

    async def update(self, patch: Record, key: str) -> None:
        updates = {name: value for name, value in patch.items() if name != "key"}
        response = await self._request(
            "PATCH",
            self._item_path(key),
            json={"set": updates},
            allowed=(200, 404),
        )
        if response.status_code == 404:
            raise RecordNotFoundError(key, self.provider_name)

    async def delete(self, key: str) -> None:
        await self._request("DELETE", self._item_path(key))

    async def fetch(
        self,
        query: list[Record] | None = None,
        last: str | None = None,
        limit: int | None = None,
    ) -> FetchPage:
        body: dict[str, Any] = {"query": query or []}
        page_limit = limit or self._page_limit
        if page_limit:
            body["limit"] = page_limit
        if last:
            body["last"] = last

        response = await self._request("POST", "/query", json=body)
        data = response.json()
        paging = data.get("paging") or {}
        return FetchPage(items=data.get("items") or [], last=paging.get("last"))

    async def put_many(self, records: list[Record]) -> PutManyResult:
        processed: list[Record] = []
        failed: list[Record] = []
        for start in range(0, len(records), MAX_PUT_ITEMS):
            chunk = await self._put_items(records[start:start + MAX_PUT_ITEMS])
            processed.extend(chunk.processed)
            failed.extend(chunk.failed)
        return PutManyResult(processed=processed, failed=failed)

    async def _put_items(self, items: list[Record]) -> PutManyResult:
        response = await self._request(
            "PUT", "/items", json={"items": items}, allowed=(200, 207)
        )
        data = response.json()
        return PutManyResult(
            processed=(data.get("processed") or {}).get("items") or [],
            failed=(data.get("failed") or {}).get("items") or [],
        )

    async def health_check(self) -> bool:
        """Check the Base answers a one-item query."""
        try:
            await self.fetch(limit=1)
        except RecordStoreError:
            return False
        return True


def _error_message(response: httpx.Response) -> str:
    """Extract Deta's error list from a response, falling back to the body text."""
    try:
        errors = response.json().get("errors")
    except ValueError:
        errors = None
    if errors:
        return "; ".join(str(e) for e in errors)
    return response.text
