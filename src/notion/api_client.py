from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from src.utils.config import NotionConfig


class NotionClientError(Exception):
    pass


class NotionConfigError(NotionClientError):
    """Token or database id missing from the environment."""


class AuthenticationError(NotionClientError):
    pass


class ObjectNotFoundError(NotionClientError):
    pass


class RateLimitError(NotionClientError):
    pass


class APITimeoutError(NotionClientError):
    pass


class APIServerError(NotionClientError):
    pass


class APIUnexpectedStatusError(NotionClientError):
    def __init__(self, status_code: int, body_text: str | None = None) -> None:
        super().__init__(f"Unexpected status code: {status_code}")
        self.status_code = status_code
        self.body_text = body_text


@dataclass(frozen=True)
class ListResult:
    results: list[dict[str, Any]]
    has_more: bool
    next_cursor: str | None


class NotionClient:
    """
    Notion REST client (read side only)
    - databases/{id}/query (POST with filter + sorts)
    - blocks/{id}/children (GET)
    - Bearer token + pinned Notion-Version header
    - Async httpx; one instance per request, closed by the caller
    """

    def __init__(
        self,
        config: NotionConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not config.token:
            raise NotionConfigError("Missing Notion API token")

        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            timeout=float(config.timeout_seconds),
            headers={
                "Authorization": f"Bearer {config.token}",
                "Notion-Version": config.notion_version,
            },
            transport=transport,
        )

    async def __aenter__(self) -> NotionClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def query_database(
        self,
        database_id: str | None,
        *,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> ListResult:
        """Single page of matching rows; pagination is intentionally not followed."""
        if not database_id:
            raise NotionConfigError("Missing Notion database id")

        body: dict[str, Any] = {}
        if filter is not None:
            body["filter"] = filter
        if sorts is not None:
            body["sorts"] = sorts

        data = await self._request("POST", f"/databases/{database_id}/query", json=body)
        return _list_result(data)

    async def list_block_children(self, block_id: str) -> ListResult:
        if not block_id:
            raise ValueError("block_id is required")
        data = await self._request("GET", f"/blocks/{block_id}/children")
        return _list_result(data)

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            resp = await self._client.request(method=method, url=endpoint, json=json)
        except httpx.TimeoutException as e:
            raise APITimeoutError("Request timeout") from e
        except httpx.RequestError as e:
            raise NotionClientError(f"Request error: {e}") from e

        if resp.status_code == 200:
            try:
                data = resp.json()
            except ValueError as e:
                raise NotionClientError("Failed to parse JSON") from e
            if not isinstance(data, dict):
                raise NotionClientError("Expected a JSON object")
            return data

        if resp.status_code == 401:
            raise AuthenticationError("Unauthorized (401): invalid Notion token")

        if resp.status_code == 404:
            raise ObjectNotFoundError(f"Not found (404): {endpoint}")

        if resp.status_code == 429:
            raise RateLimitError("Too Many Requests (429): rate limit exceeded")

        if resp.status_code == 504:
            raise APITimeoutError("Upstream gateway timeout (504)")

        if resp.status_code in (500, 502, 503):
            raise APIServerError(f"Notion server error ({resp.status_code})")

        raise APIUnexpectedStatusError(resp.status_code, body_text=resp.text)


def _list_result(data: dict[str, Any]) -> ListResult:
    results = data.get("results")
    if not isinstance(results, list):
        raise NotionClientError("List response without 'results' array")
    return ListResult(
        results=results,
        has_more=bool(data.get("has_more")),
        next_cursor=data.get("next_cursor"),
    )
