from fastapi import FastAPI

from sinch_mcp import __version__
from sinch_mcp.integrations.sinch.mcp import get_sinch_mcp_server
from sinch_mcp.utils.logger import logger

# Initialize MCP server and app first (needed for lifespan)
sinch_mcp = get_sinch_mcp_server()
sinch_mcp_app = sinch_mcp.http_app(path="/mcp")
logger.info("Sinch MCP app created")


# Use MCP app's lifespan directly (per FastMCP docs)
app = FastAPI(
    title="Sinch MCP",
    description="MCP server for the Sinch SMS, Numbers, Verification and sub-project APIs",
    version=__version__,
    docs_url=None,
    redoc_url=None,
    lifespan=sinch_mcp_app.lifespan,
)

app.mount("/sinch", sinch_mcp_app)
logger.info("Sinch MCP server mounted at /sinch/mcp")


@app.get("/healthcheck")
async def healthcheck():
    """Health check endpoint."""
    return {"status": "ok", "message": "Sinch MCP is running"}
