"""Async HTTP client for the n8n public REST API.

WHY: The workflow importer lists existing workflows (as a connection
check) and creates new ones from bundled templates. This module hides the
HTTP details behind a single client class so the importer and tests
don't need to know them.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. N8nClient is an async
context manager — enter it to get an authenticated client, exit to close
the connection pool. Every request carries the X-N8N-API-KEY header and
targets {api_url}/api/v1.

RULES:
- Always use the async context manager (async with N8nClient(...) as client:)
- api_key defaults to load_n8n_api_key(), api_url to N8N_API_URL
- Non-2xx responses raise N8nAPIError with the API's message if present
- Unparsable or unexpectedly shaped response bodies raise N8nAPIError as well
- Network failures surface as httpx.HTTPError
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, TypeVar

import httpx

from notion_transcript.api.models import WorkflowSummary
from notion_transcript.config import N8N_API_URL, load_n8n_api_key

logger = logging.getLogger(__name__)

_API_PREFIX = "/api/v1"

T = TypeVar("T")


class N8nAPIError(Exception):
    """Raised when the n8n API returns an error or an unreadable response.

    RULES:
    - Always include status_code and message
    - message is the response's "message" field, or the raw body
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error {status_code}: {message}")


class N8nClient:
    """Async client for the n8n workflows API.

    RULES:
    - Use as: async with N8nClient() as client: ...
    - transport is for tests (httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or load_n8n_api_key()
        self._api_url = (api_url or N8N_API_URL).rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def api_url(self) -> str:
        return self._api_url

    async def __aenter__(self) -> N8nClient:
        self._client = httpx.AsyncClient(
            base_url=self._api_url + _API_PREFIX,
            headers={
                "X-N8N-API-KEY": self._api_key,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(30.0, connect=10.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "N8nClient must be used as an async context manager: "
                "async with N8nClient() as client: ..."
            )
        return self._client

    async def _request(
        self,
        method: str,
        endpoint: str,
        parse: Callable[[dict[str, Any]], T],
        payload: dict[str, Any] | None = None,
    ) -> T:
        """Send a request and parse the JSON object it returns.

        RULES:
        - A 2xx body that is not a JSON object raises N8nAPIError
        - KeyError/TypeError/ValueError from ``parse`` raise N8nAPIError
        """
        client = self._ensure_client()
        logger.debug("%s %s%s", method, _API_PREFIX, endpoint)
        resp = await client.request(method, endpoint, json=payload)

        try:
            data = resp.json()
        except (json.JSONDecodeError, ValueError):
            raise N8nAPIError(
                resp.status_code, f"Failed to parse response: {resp.text}"
            ) from None

        if not 200 <= resp.status_code < 300:
            message = data.get("message") if isinstance(data, dict) else None
            raise N8nAPIError(resp.status_code, message or resp.text)

        if not isinstance(data, dict):
            raise N8nAPIError(resp.status_code, f"Unexpected response: {resp.text}")
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError) as e:
            raise N8nAPIError(
                resp.status_code, f"Unexpected response: {resp.text}"
            ) from e

    async def list_workflows(self) -> list[WorkflowSummary]:
        """Return the workflows visible to this API key (GET /workflows).

        RULES:
        - Reads the "data" array of the paginated response (first page only)
        """
        return await self._request("GET", "/workflows", _parse_workflow_list)

    async def create_workflow(self, payload: dict[str, Any]) -> WorkflowSummary:
        """Create a workflow (POST /workflows) and return the stored record."""
        return await self._request(
            "POST", "/workflows", WorkflowSummary.from_dict, payload
        )


def _parse_workflow_list(data: dict[str, Any]) -> list[WorkflowSummary]:
    items = data.get("data", [])
    if not isinstance(items, list):
        raise TypeError(f"'data' is {type(items).__name__}, expected list")
    return [WorkflowSummary.from_dict(item) for item in items]
