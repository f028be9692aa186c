"""
Run the Sinch MCP server.

Serves over stdio by default. With ``--transport http`` (or
``MCP_TRANSPORT=http``) the server is mounted in the FastAPI app and served
with uvicorn at ``/sinch/mcp``.
"""

import argparse

from sinch_mcp.config import MCPTransport, get_app_settings
from sinch_mcp.utils.logger import logger


def main() -> None:
    """Main entry point for the server."""
    settings = get_app_settings()

    parser = argparse.ArgumentParser(description="Sinch MCP server")
    parser.add_argument(
        "--transport",
        type=MCPTransport,
        choices=list(MCPTransport),
        default=settings.mcp_transport,
        help="Transport to serve over (default: %(default)s)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=settings.host,
        help="Bind address for the http transport",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help="Port for the http transport",
    )
    args = parser.parse_args()

    if args.transport == MCPTransport.HTTP:
        import uvicorn

        from sinch_mcp.main import app

        logger.info("Starting Sinch MCP server", transport=args.transport.value, port=args.port)
        uvicorn.run(app, host=args.host, port=args.port)
        return

    from sinch_mcp.integrations.sinch.mcp import get_sinch_mcp_server

    logger.info("Starting Sinch MCP server", transport=args.transport.value)
    get_sinch_mcp_server().run(transport="stdio", show_banner=False)


if __name__ == "__main__":
    main()
