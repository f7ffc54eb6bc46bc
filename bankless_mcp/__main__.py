"""Command-line entry point: ``python -m bankless_mcp`` or ``bankless-onchain-mcp``."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from bankless_mcp import __version__
from bankless_mcp.config import default_config
from bankless_mcp.logging_config import configure_logging

logger = logging.getLogger("bankless_mcp")


@click.command()
@click.version_option(version=__version__, prog_name="bankless-onchain-mcp")
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default="stdio",
    show_default=True,
    help="How MCP clients reach the server.",
)
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address for --transport http.")
@click.option("--port", default=8000, show_default=True, type=int, help="Port for --transport http.")
def main(transport: str, host: str, port: int) -> None:
    """Serve Bankless Onchain tools to MCP clients."""
    configure_logging(default_config)
    if default_config.resolve_api_token() is None:
        logger.warning("BANKLESS_API_TOKEN is not set; every tool call will fail authentication")

    try:
        if transport == "stdio":
            from bankless_mcp.stdio import serve_stdio

            asyncio.run(serve_stdio())
        else:
            import uvicorn

            uvicorn.run("bankless_mcp.server:app", host=host, port=port, log_config=None)
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("Fatal error in main()")
        sys.exit(1)


if __name__ == "__main__":
    main()
