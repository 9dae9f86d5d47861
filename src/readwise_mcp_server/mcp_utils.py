"""Loaders for the text assets shipped next to the MCP server."""

from pathlib import Path
from typing import Any

import yaml


def load_instructions(directory: Path) -> str:
    """Load instructions.md from the given directory."""
    return (directory / "instructions.md").read_text(encoding="utf-8").strip()


def load_tool_descriptions(directory: Path) -> dict[str, dict[str, Any]]:
    """
    Load tool descriptions from tools.yaml.

    Returns a mapping of tool name to {"description": str, "parameters": {name: str}}
    with YAML block-scalar whitespace stripped.
    """
    with (directory / "tools.yaml").open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    descriptions: dict[str, dict[str, Any]] = {}
    for name, tool in data.items():
        params = tool.get("parameters") or {}
        descriptions[name] = {
            "description": str(tool.get("description", "")).strip(),
            "parameters": {key: str(value).strip() for key, value in params.items()},
        }
    return descriptions
