"""HTTP client for the Readwise highlights API."""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from .api_errors import ExternalApiError, parse_http_error
from .config import READWISE_API_BASE_URL, READWISE_API_TIMEOUT
from .schemas import Highlight

logger = logging.getLogger(__name__)


def _get_headers(token: str) -> dict[str, str]:
    """Get common headers for API requests."""
    return {
        "Authorization": f"Token {token}",
        "Content-Type": "application/json",
    }


class ReadwiseClient:
    """
    Client for the Readwise v2 highlights API.

    Holds a single httpx.AsyncClient authenticated with a fixed token. No
    retries are attempted; every failure surfaces as ExternalApiError.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = READWISE_API_BASE_URL,
        timeout: float = READWISE_API_TIMEOUT,
    ) -> None:
        if not token:
            raise ValueError("Readwise API token is required")
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=_get_headers(token),
            timeout=timeout,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ReadwiseClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def create_highlight(self, highlight: Highlight) -> Any:
        """Create one highlight. Readwise expects a list even for a single item."""
        return await self._request(
            "POST", "/highlights/", json={"highlights": [highlight.to_payload()]},
        )

    async def create_highlights(self, highlights: Sequence[Highlight]) -> Any:
        """Create several highlights in a single request, preserving order."""
        payload = [highlight.to_payload() for highlight in highlights]
        return await self._request("POST", "/highlights/", json={"highlights": payload})

    async def list_highlights(self) -> Any:
        """
        Fetch highlights.

        Returns the first page exactly as Readwise sends it; pagination links
        in the response are not followed.
        """
        return await self._request("GET", "/highlights/")

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            raise ExternalApiError(
                f"Readwise API request timed out after {self._timeout}s",
            ) from e
        except httpx.RequestError as e:
            raise ExternalApiError(f"Readwise API unavailable: {e}") from e

        logger.debug("%s %s -> %s", method, path, response.status_code)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise parse_http_error(e) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ExternalApiError(
                "Readwise API returned a response that is not valid JSON",
                response.status_code,
                response.text,
            ) from e
