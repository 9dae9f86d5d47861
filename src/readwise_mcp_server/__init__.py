"""MCP server for Readwise highlights."""

__version__ = "1.0.0"

from .api_client import ReadwiseClient  # noqa: E402
from .api_errors import ExternalApiError  # noqa: E402
from .auth import MissingCredentialError, resolve_token  # noqa: E402
from .server import HighlightToolDispatcher, UnknownToolError, create_server  # noqa: E402

__all__ = [
    "ExternalApiError",
    "HighlightToolDispatcher",
    "MissingCredentialError",
    "ReadwiseClient",
    "UnknownToolError",
    "__version__",
    "create_server",
    "resolve_token",
]
