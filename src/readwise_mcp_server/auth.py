"""
Credential resolution for the Readwise MCP server.

The Readwise token is looked up once at start-up, in order: the first
command-line argument, the READWISE_API_TOKEN environment variable, then a
READWISE_API_TOKEN=<value> line in a local .env file. The first non-empty
value wins.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from .config import Settings

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"


class MissingCredentialError(Exception):
    """Raised when no Readwise API token can be found."""

    def __init__(self) -> None:
        super().__init__(
            "Readwise API token not found. Provide it as a command-line argument, "
            "the READWISE_API_TOKEN environment variable, or a READWISE_API_TOKEN "
            "entry in a .env file.",
        )


def load_settings(env_file: str | Path | None = DEFAULT_ENV_FILE) -> Settings:
    """
    Load settings from the environment and an optional .env file.

    An unreadable .env file is treated as absent.

    Args:
        env_file: Path of the .env file to read, or None to skip it.

    Returns:
        The loaded Settings.
    """
    if env_file is None:
        return Settings(_env_file=None)
    try:
        return Settings(_env_file=env_file)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Ignoring unreadable env file %s: %s", env_file, e)
        return Settings(_env_file=None)


def resolve_token(argv: Sequence[str], settings: Settings | None = None) -> str:
    """
    Resolve the Readwise API token.

    Args:
        argv: Command-line arguments (program name excluded).
        settings: Pre-loaded settings; loaded from the environment and .env if omitted.

    Returns:
        The token string.

    Raises:
        MissingCredentialError: If no source provides a non-empty token.
    """
    if argv and argv[0]:
        logger.debug("Using Readwise token from command-line argument")
        return argv[0]

    if settings is None:
        settings = load_settings()

    if settings.readwise_api_token:
        logger.debug("Using Readwise token from environment or .env file")
        return settings.readwise_api_token

    raise MissingCredentialError
