"""API Client: wraps httpx.AsyncClient with error mapping for the storefront REST API.

Invariants:
    - Transport failures (connection, timeout) map to RepositoryError without status_code
    - Non-2xx responses map to RepositoryError with status_code; 404 maps to
      ResourceNotFoundError when the caller names the resource
    - The server's `message` field is preferred for the error message
    - No retry: re-dispatching is the caller's decision

Design Decisions:
    - Wrapper over raw client: repositories only see parsed JSON or StorefrontError
    - transport injectable so tests run against httpx.MockTransport
"""

import logging
from typing import Any

import httpx

from storefront.core.errors import ErrorContext, RepositoryError, ResourceNotFoundError

logger = logging.getLogger(__name__)


def _server_message(response: httpx.Response) -> str:
    """Best human-readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, list):
            message = "; ".join(str(m) for m in message)
        if message:
            return str(message)
    return f"Request failed with status {response.status_code}"


class ApiClient:
    """Async JSON client for one API base URL."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
        resource: tuple[str, str] | None = None,
        context: ErrorContext | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty)."""
        try:
            response = await self.client.request(
                method, path, params=params, json=json, headers=headers,
            )
        except httpx.TimeoutException:
            logger.warning(f"{method} {path} timed out")
            raise RepositoryError("Request timed out", context=context)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} transport error: {e}")
            raise RepositoryError(f"Network error: {e}", context=context)

        if response.status_code == 404 and resource is not None:
            raise ResourceNotFoundError(resource[0], resource[1], context=context)
        if response.is_error:
            message = _server_message(response)
            logger.warning(
                f"{method} {path} -> {response.status_code}: {message}",
                extra={"status_code": response.status_code},
            )
            raise RepositoryError(message, status_code=response.status_code, context=context)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise RepositoryError(
                "Malformed JSON response", status_code=response.status_code,
                context=context,
            )

    async def aclose(self) -> None:
        await self.client.aclose()
