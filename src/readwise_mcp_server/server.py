"""
MCP Server for Readwise highlights.

Exposes Readwise highlight creation and listing as MCP tools. The server is
built explicitly around a ReadwiseClient owned by the caller; there is no
module-level client.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from . import __version__
from .api_client import ReadwiseClient
from .api_errors import ExternalApiError
from .mcp_utils import load_instructions
from .schemas import InvalidArgumentsError, parse_highlight, parse_highlights
from .tools import CREATE_HIGHLIGHT, CREATE_HIGHLIGHTS, GET_HIGHLIGHTS, list_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "readwise-mcp"

_DIR = Path(__file__).parent

ToolHandler = Callable[[dict[str, Any]], Awaitable[Any]]


class UnknownToolError(Exception):
    """Raised when a tool name is not in the catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


def _text_result(text: str, *, is_error: bool) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


class HighlightToolDispatcher:
    """
    Routes tool calls to the Readwise client.

    `invoke` always returns a CallToolResult: successes carry the Readwise
    response as indented JSON, failures carry "Error: <message>" with
    isError=True. No exception escapes to the transport.
    """

    def __init__(self, client: ReadwiseClient) -> None:
        self._client = client
        self._handlers: dict[str, ToolHandler] = {
            CREATE_HIGHLIGHT: self._handle_create_highlight,
            CREATE_HIGHLIGHTS: self._handle_create_highlights,
            GET_HIGHLIGHTS: lambda _: self._client.list_highlights(),
        }

    async def invoke(
        self,
        name: str,
        arguments: dict[str, Any] | None,
    ) -> types.CallToolResult:
        """Run a tool by name and wrap the outcome in a CallToolResult."""
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)
            result = await handler(arguments or {})
            text = json.dumps(result, indent=2, default=str)
        except (ExternalApiError, InvalidArgumentsError, UnknownToolError) as e:
            logger.warning("Tool %s failed: %s", name, e)
            return _text_result(f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name)
            return _text_result(f"Error: {str(e) or type(e).__name__}", is_error=True)

        return _text_result(text, is_error=False)

    async def _handle_create_highlight(self, arguments: dict[str, Any]) -> Any:
        highlight = parse_highlight(arguments)
        return await self._client.create_highlight(highlight)

    async def _handle_create_highlights(self, arguments: dict[str, Any]) -> Any:
        highlights = parse_highlights(arguments)
        logger.debug("Creating %d highlights", len(highlights))
        return await self._client.create_highlights(highlights)


def create_server(dispatcher: HighlightToolDispatcher) -> Server:
    """
    Create the MCP server bound to a dispatcher.

    Registers tools/list, tools/call and an always-empty resources pair.
    """
    server = Server(
        SERVER_NAME,
        version=__version__,
        instructions=load_instructions(_DIR),
    )

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """List available tools."""
        return list_tools()

    # The dispatcher is the only argument validator
    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str,
        arguments: dict[str, Any] | None,
    ) -> types.CallToolResult:
        """Handle tool calls."""
        return await dispatcher.invoke(name, arguments)

    @server.list_resources()
    async def handle_list_resources() -> list[types.Resource]:
        """No resources are served."""
        return []

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> str:
        raise McpError(
            types.ErrorData(
                code=types.INVALID_PARAMS,
                message=f"Resource not found: {uri}",
            ),
        )

    return server


async def run_stdio(server: Server) -> None:
    """Serve the MCP protocol over stdin/stdout until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
