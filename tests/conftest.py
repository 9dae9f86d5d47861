"""Test fixtures for the Readwise MCP server."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import respx
from fastmcp import Client
from fastmcp.client.transports import FastMCPTransport

from readwise_mcp_server.api_client import ReadwiseClient
from readwise_mcp_server.config import READWISE_API_BASE_URL
from readwise_mcp_server.server import HighlightToolDispatcher, create_server

TEST_TOKEN = "rw_test_token"

_ENV_VARS = (
    "READWISE_API_TOKEN",
    "READWISE_API_URL",
    "READWISE_API_TIMEOUT",
    "READWISE_MCP_LOG_LEVEL",
    "READWISE_MCP_LOG_FILE",
)


class _LowLevelServerWrapper:
    """
    Adapter exposing a low-level MCP Server through the attributes FastMCPTransport reads.

    The transport runs `._mcp_server` and shows `.name` in its repr. Since this is
    not a FastMCP instance, no FastMCP lifespan is entered.
    """

    def __init__(self, mcp_server: Any) -> None:
        self._mcp_server = mcp_server

    @property
    def name(self) -> str:
        return self._mcp_server.name


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Keep the host environment and any local .env out of the tests."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
async def mock_api() -> AsyncGenerator[respx.MockRouter]:
    """Context manager for mocking Readwise API responses."""
    with respx.mock(base_url=READWISE_API_BASE_URL) as respx_mock:
        yield respx_mock


@pytest.fixture
async def readwise_client(mock_api: respx.MockRouter) -> AsyncGenerator[ReadwiseClient]:  # noqa: ARG001
    """ReadwiseClient created inside the respx context so requests are captured."""
    async with ReadwiseClient(TEST_TOKEN) as client:
        yield client


@pytest.fixture
def dispatcher(readwise_client: ReadwiseClient) -> HighlightToolDispatcher:
    return HighlightToolDispatcher(readwise_client)


@pytest.fixture
async def mcp_client(dispatcher: HighlightToolDispatcher) -> AsyncGenerator[Client]:
    """
    Create a fastmcp Client connected to the Readwise MCP server in-memory.

    Uses FastMCPTransport with a wrapper around the low-level MCP Server.
    Access `client.session` for low-level ClientSession operations.
    """
    transport = FastMCPTransport(_LowLevelServerWrapper(create_server(dispatcher)))
    async with Client(transport=transport) as client:
        yield client


@pytest.fixture
def sample_highlight() -> dict[str, Any]:
    """Sample highlight as returned by GET /highlights/."""
    return {
        "id": 59758950,
        "text": "The fox jumped over the fence.",
        "note": ".favorite",
        "location": 9,
        "location_type": "order",
        "highlighted_at": None,
        "url": None,
        "color": "",
        "updated": "2020-10-01T17:47:31.234826Z",
        "book_id": 5346753,
        "tags": [{"id": 123, "name": "favorite"}],
    }


@pytest.fixture
def sample_highlight_list(sample_highlight: dict[str, Any]) -> dict[str, Any]:
    """Sample first page of GET /highlights/ with three highlights."""
    return {
        "count": 3,
        "next": "https://readwise.io/api/v2/highlights/?page=2",
        "previous": None,
        "results": [
            sample_highlight,
            {**sample_highlight, "id": 59758951, "text": "Second passage", "note": ""},
            {**sample_highlight, "id": 59758952, "text": "Third passage", "tags": []},
        ],
    }


@pytest.fixture
def sample_create_response() -> list[dict[str, Any]]:
    """Sample POST /highlights/ response: the books the highlights landed in."""
    return [
        {
            "id": 5346753,
            "title": "The Fox",
            "author": "Aesop",
            "category": "books",
            "source": "api_book",
            "num_highlights": 1,
            "last_highlight_at": None,
            "updated": "2020-10-01T17:47:31.234826Z",
            "cover_image_url": "https://readwise.io/static/images/default-book-icon-4.png",
            "highlights_url": "https://readwise.io/bookreview/5346753",
            "source_url": None,
            "modified_highlights": [59758950],
        },
    ]
