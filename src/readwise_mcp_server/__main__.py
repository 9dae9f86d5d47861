"""Entry point for running the Readwise MCP server."""

from .main import main

if __name__ == "__main__":
    main()
