"""Catalog of the tools exposed by the Readwise MCP server."""

from pathlib import Path
from typing import Any

from mcp import types

from .mcp_utils import load_tool_descriptions

_DIR = Path(__file__).parent
_TOOLS = load_tool_descriptions(_DIR)

CREATE_HIGHLIGHT = "create_highlight"
CREATE_HIGHLIGHTS = "create_highlights"
GET_HIGHLIGHTS = "get_highlights"


def _highlight_schema() -> dict[str, Any]:
    """Build the JSON Schema for one highlight (shared by both create tools)."""
    params = _TOOLS[CREATE_HIGHLIGHT]["parameters"]
    string_fields = (
        "text",
        "title",
        "author",
        "source_url",
        "note",
        "location_type",
        "highlighted_at",
        "category",
        "highlight_url",
        "image_url",
    )
    properties: dict[str, Any] = {
        field: {"type": "string", "description": params[field]} for field in string_fields
    }
    properties["location"] = {"type": "integer", "description": params["location"]}
    return {
        "type": "object",
        "properties": properties,
        "required": ["text"],
    }


_TOOL_CATALOG: tuple[types.Tool, ...] = (
    types.Tool(
        name=CREATE_HIGHLIGHT,
        description=_TOOLS[CREATE_HIGHLIGHT]["description"],
        inputSchema=_highlight_schema(),
        annotations=types.ToolAnnotations(readOnlyHint=False),
    ),
    types.Tool(
        name=CREATE_HIGHLIGHTS,
        description=_TOOLS[CREATE_HIGHLIGHTS]["description"],
        inputSchema={
            "type": "object",
            "properties": {
                "highlights": {
                    "type": "array",
                    "items": _highlight_schema(),
                    "description": _TOOLS[CREATE_HIGHLIGHTS]["parameters"]["highlights"],
                },
            },
            "required": ["highlights"],
        },
        annotations=types.ToolAnnotations(readOnlyHint=False),
    ),
    types.Tool(
        name=GET_HIGHLIGHTS,
        description=_TOOLS[GET_HIGHLIGHTS]["description"],
        inputSchema={"type": "object", "properties": {}},
        annotations=types.ToolAnnotations(readOnlyHint=True),
    ),
)


def list_tools() -> list[types.Tool]:
    """Return copies of the supported tools, always in the same order."""
    return [tool.model_copy(deep=True) for tool in _TOOL_CATALOG]
