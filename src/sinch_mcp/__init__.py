"""Sinch MCP server: SMS, Numbers, Verification and sub-project tools for MCP clients."""

__version__ = "1.0.0"
