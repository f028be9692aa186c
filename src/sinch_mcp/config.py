from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MCPTransport(str, Enum):
    """Transports the MCP server can be served over."""

    STDIO = "stdio"
    HTTP = "http"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    # Serving
    mcp_transport: MCPTransport = Field(
        default=MCPTransport.STDIO,
        description="Transport to serve the MCP server over (stdio or http)",
    )
    host: str = Field(default="0.0.0.0", description="Bind address for the HTTP transport")
    port: int = Field(default=8080, description="Port for the HTTP transport")

    # MCP Authentication
    mcp_auth_token: str | None = Field(
        default=None,
        description="Bearer token for MCP server authentication (optional)",
    )


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def set_app_settings(settings: AppSettings | None) -> None:
    """Set (or clear) the global app settings."""
    global _app_settings
    _app_settings = settings
