"""Sinch MCP server: the tool catalog and browsable resources on a FastMCP instance."""

from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.resources import Resource
from fastmcp.server.auth.providers.jwt import StaticTokenVerifier
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

from sinch_mcp.config import AppSettings, get_app_settings
from sinch_mcp.integrations.sinch.constants import (
    RESOURCE_MIME_TYPE,
    OperationName,
    ResourceFamily,
    ResourceKind,
)
from sinch_mcp.integrations.sinch.resources import (
    SinchResourceBrowser,
    make_resource_uri,
)
from sinch_mcp.integrations.sinch.schemas import ResourceDescriptor
from sinch_mcp.integrations.sinch.service import SinchService
from sinch_mcp.integrations.sinch.tools import TOOL_CATALOG, OperationSpec
from sinch_mcp.utils.logger import logger

SERVER_NAME = "Sinch"
SERVER_INSTRUCTIONS = (
    "Tools for the Sinch platform: send and inspect SMS batches, search and "
    "manage phone numbers, run phone verifications and manage sub-projects. "
    "Most tools accept an optional 'project_config' naming the configured "
    "project to use; call list_configured_projects to see the options."
)


class SinchTool(Tool):
    """A catalog operation exposed as a tool; calls go through ``SinchService``."""

    operation: OperationName
    service: Any = Field(exclude=True, repr=False)

    @classmethod
    def from_operation(cls, spec: OperationSpec, service: SinchService) -> "SinchTool":
        return cls(
            name=spec.name.value,
            description=spec.description,
            parameters=spec.input_schema(),
            tags={spec.family.value},
            operation=spec.name,
            service=service,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        result = await self.service.call_tool(self.operation.value, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return ToolResult(content=[TextContent(type="text", text=result.text)])


class SinchResource(Resource):
    """A listed batch or phone number; reading it goes through the browser."""

    browser: Any = Field(exclude=True, repr=False)

    @classmethod
    def from_descriptor(
        cls, descriptor: ResourceDescriptor, browser: SinchResourceBrowser
    ) -> "SinchResource":
        return cls(
            uri=descriptor.uri,
            name=descriptor.name,
            description=descriptor.description,
            mime_type=descriptor.mime_type,
            browser=browser,
        )

    async def read(self) -> str:
        contents = await self.browser.read_resource(str(self.uri))
        return contents.text


class ResourceListingMiddleware(Middleware):
    """Appends the dynamic batch and phone number resources to resource listings."""

    def __init__(self, browser: SinchResourceBrowser):
        self.browser = browser

    async def on_list_resources(self, context: MiddlewareContext, call_next):
        resources = list(await call_next(context))
        descriptors = await self.browser.list_resources()
        logger.info("[MCP Sinch] Listed resources", count=len(descriptors))
        resources.extend(
            SinchResource.from_descriptor(descriptor, self.browser)
            for descriptor in descriptors
        )
        return resources


def _register_resource_templates(mcp: FastMCP, browser: SinchResourceBrowser) -> None:
    @mcp.resource(
        "sinch://sms/batch/{batch_id}",
        name="SMS Batch",
        description="Details of an SMS batch",
        mime_type=RESOURCE_MIME_TYPE,
    )
    async def sms_batch(batch_id: str) -> str:
        uri = make_resource_uri(ResourceFamily.SMS, ResourceKind.BATCH, batch_id)
        contents = await browser.read_resource(uri)
        return contents.text

    @mcp.resource(
        "sinch://numbers/active/{phone_number}",
        name="Active Phone Number",
        description="Details of an active phone number",
        mime_type=RESOURCE_MIME_TYPE,
    )
    async def active_number(phone_number: str) -> str:
        uri = make_resource_uri(ResourceFamily.NUMBERS, ResourceKind.ACTIVE, phone_number)
        contents = await browser.read_resource(uri)
        return contents.text


def build_auth(settings: AppSettings) -> StaticTokenVerifier | None:
    """Bearer token auth for the HTTP transport, when a token is configured."""
    if not settings.mcp_auth_token:
        return None
    return StaticTokenVerifier(
        tokens={
            settings.mcp_auth_token: {
                "sub": "sinch-mcp-client",
                "aud": "sinch-mcp-server",
                "client_id": "sinch-mcp-client",
                "scopes": [],  # No scope restrictions
            }
        }
    )


def create_sinch_mcp_server(
    service: SinchService | None = None,
    auth: StaticTokenVerifier | None = None,
) -> FastMCP:
    """Create a FastMCP server exposing every catalog operation and the Sinch resources.

    Args:
        service: Service handling tool calls; a default one reading the
            environment is created when omitted
        auth: Optional token verifier for the HTTP transport

    Returns:
        FastMCP: The configured server
    """
    service = service or SinchService()
    browser = SinchResourceBrowser(service)

    mcp = FastMCP(name=SERVER_NAME, instructions=SERVER_INSTRUCTIONS, auth=auth)
    for spec in TOOL_CATALOG.values():
        mcp.add_tool(SinchTool.from_operation(spec, service))
    _register_resource_templates(mcp, browser)
    mcp.add_middleware(ResourceListingMiddleware(browser))

    logger.info("[MCP Sinch] Server created", tool_count=len(TOOL_CATALOG))
    return mcp


_sinch_mcp: FastMCP | None = None


def get_sinch_mcp_server() -> FastMCP:
    """Get the process-wide Sinch MCP server, creating it on first use."""
    global _sinch_mcp
    if _sinch_mcp is None:
        _sinch_mcp = create_sinch_mcp_server(auth=build_auth(get_app_settings()))
    return _sinch_mcp
