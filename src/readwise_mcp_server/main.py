"""
Command-line entry point for the Readwise MCP server.

Resolves the Readwise token, builds the client and dispatcher, and serves MCP
over stdio. Logging goes to stderr or a log file; stdout carries the protocol.
"""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from .api_client import ReadwiseClient
from .auth import MissingCredentialError, load_settings, resolve_token
from .config import Settings
from .server import SERVER_NAME, HighlightToolDispatcher, create_server, run_stdio

logger = logging.getLogger(__name__)

USAGE = "Usage: readwise-mcp-server <API_TOKEN>"


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readwise-mcp-server",
        description="Run the Readwise highlights MCP server over stdio.",
    )
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="Readwise API token (default: READWISE_API_TOKEN or .env)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    parser.add_argument(
        "--log-file",
        default=settings.log_file,
        help="Write logs to this file instead of stderr",
    )
    return parser


def configure_logging(level: str, log_file: str | None = None) -> None:
    """Send log records to a file, or to stderr when no file is given."""
    handler: logging.Handler = (
        logging.FileHandler(log_file, encoding="utf-8")
        if log_file
        else logging.StreamHandler(sys.stderr)
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler],
    )


async def serve(token: str, settings: Settings) -> None:
    """Run the server until stdin closes."""
    async with ReadwiseClient(
        token,
        base_url=settings.readwise_api_url,
        timeout=settings.readwise_api_timeout,
    ) as client:
        server = create_server(HighlightToolDispatcher(client))
        logger.info("Starting %s MCP server over stdio", SERVER_NAME)
        await run_stdio(server)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the readwise-mcp-server console script."""
    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        token = resolve_token([args.token] if args.token else [], settings)
    except MissingCredentialError as e:
        print(str(e), file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(serve(token, settings))
    except KeyboardInterrupt:  # pragma: no cover - graceful shutdown
        logger.info("Shutting down %s MCP server", SERVER_NAME)
