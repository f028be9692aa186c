"""
Sinch service layer.

Sits between the MCP server and the per-family Sinch clients. Every tool
call goes through ``SinchService.call_tool``: the arguments are validated
against the operation's argument record, the target project is resolved,
a fresh client for the operation's family is built and the raw API
response is returned. Errors are caught once here and turned into an
error-flagged ``ToolCallResult``.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from sinch_mcp.integrations.sinch.client import (
    NumbersClient,
    SMSClient,
    SubprojectClient,
    VerificationClient,
    create_numbers_client,
    create_sms_client,
    create_subproject_client,
    create_verification_client,
)
from sinch_mcp.integrations.sinch.config import SinchConfig, get_sinch_config
from sinch_mcp.integrations.sinch.constants import (
    LEGACY_PROJECT_DISPLAY_NAME,
    LEGACY_PROJECT_NAME,
    OperationName,
    ParentAccessStatus,
)
from sinch_mcp.integrations.sinch.exceptions import (
    SinchPreconditionError,
    UnknownOperationError,
)
from sinch_mcp.integrations.sinch.resolver import ResolvedProject, resolve_project
from sinch_mcp.integrations.sinch.schemas import (
    ActivateNumberArguments,
    BatchArguments,
    ConfiguredProject,
    CreateSubprojectArguments,
    DeliveryReportArguments,
    ListSMSBatchesArguments,
    NoArguments,
    ParentAccessResult,
    ParentProjectArguments,
    PhoneNumberArguments,
    ProjectScopedArguments,
    ReportVerificationArguments,
    SearchAvailableNumbersArguments,
    SendSMSArguments,
    StartVerificationArguments,
    SubprojectArguments,
    SubprojectListing,
    ToolArguments,
    ToolCallResult,
    VerificationArguments,
)
from sinch_mcp.integrations.sinch.tools import TOOL_CATALOG
from sinch_mcp.utils.logger import logger


class SinchService:
    """Service class for Sinch tool calls."""

    def __init__(
        self,
        config: SinchConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the Sinch service.

        Args:
            config: Sinch configuration; loaded from the environment on first
                use when omitted
            transport: Optional httpx transport handed to every client
        """
        self._config = config
        self._transport = transport

    @property
    def config(self) -> SinchConfig:
        if self._config is None:
            self._config = get_sinch_config()
        return self._config

    def resolve(self, project_name: str | None = None) -> ResolvedProject:
        return resolve_project(self.config, project_name)

    def _client_options(self) -> dict[str, Any]:
        return {"timeout": self.config.request_timeout, "transport": self._transport}

    def _sms_client(self, project_name: str | None) -> SMSClient:
        resolved = self.resolve(project_name)
        return create_sms_client(resolved.config, **self._client_options())

    def _numbers_client(self, project_name: str | None) -> NumbersClient:
        resolved = self.resolve(project_name)
        if not resolved.config.project_id:
            raise SinchPreconditionError(
                "Project ID required for Numbers API. "
                f"Please configure projectId for project '{resolved.name}'"
            )
        return create_numbers_client(resolved.config, **self._client_options())

    def _verification_client(self, project_name: str | None) -> VerificationClient:
        resolved = self.resolve(project_name)
        return create_verification_client(resolved.config, **self._client_options())

    def _subproject_client(self, project_name: str | None) -> SubprojectClient:
        resolved = self.resolve(project_name)
        return create_subproject_client(resolved.config, **self._client_options())

    # Meta
    async def list_configured_projects(self, args: NoArguments) -> list[dict[str, Any]]:
        """
        List the named projects, followed by the legacy project when its
        credentials are set.
        """
        config = self.config
        projects = [
            ConfiguredProject(
                name=name,
                display_name=project.display_name or name,
                project_id=project.project_id,
            )
            for name, project in config.projects.items()
        ]
        if config.has_legacy_credentials:
            projects.append(
                ConfiguredProject(
                    name=LEGACY_PROJECT_NAME,
                    display_name=LEGACY_PROJECT_DISPLAY_NAME,
                    project_id=config.project_id,
                )
            )
        return [project.to_payload() for project in projects]

    # SMS
    async def send_sms(self, args: SendSMSArguments) -> Any:
        client = self._sms_client(args.project_config)
        return await client.send_batch(
            args.to,
            args.sender,
            args.body,
            delivery_report=args.delivery_report,
            expire_at=args.expire_at,
            flash_message=args.flash_message,
        )

    async def get_sms_batch(self, args: BatchArguments) -> Any:
        client = self._sms_client(args.project_config)
        return await client.get_batch(args.batch_id)

    async def get_delivery_report(self, args: DeliveryReportArguments) -> Any:
        client = self._sms_client(args.project_config)
        return await client.get_delivery_report(args.batch_id, full=args.full)

    async def list_sms_batches(self, args: ListSMSBatchesArguments) -> Any:
        client = self._sms_client(args.project_config)
        return await client.list_batches(args.start_date, args.end_date)

    # Numbers
    async def search_available_numbers(
        self, args: SearchAvailableNumbersArguments
    ) -> Any:
        client = self._numbers_client(args.project_config)
        return await client.search_available_numbers(
            region_code=args.region_code,
            number_type=args.number_type.value if args.number_type else None,
            capabilities=[c.value for c in args.capability] if args.capability else None,
        )

    async def activate_number(self, args: ActivateNumberArguments) -> Any:
        client = self._numbers_client(args.project_config)
        sms_configuration = (
            args.sms_configuration.model_dump(by_alias=True, exclude_none=True)
            if args.sms_configuration
            else None
        )
        voice_configuration = (
            args.voice_configuration.model_dump(by_alias=True, exclude_none=True)
            if args.voice_configuration
            else None
        )
        return await client.activate_number(
            args.phone_number,
            sms_configuration=sms_configuration,
            voice_configuration=voice_configuration,
        )

    async def list_active_numbers(self, args: ProjectScopedArguments) -> Any:
        client = self._numbers_client(args.project_config)
        return await client.list_active_numbers()

    async def get_active_number(self, args: PhoneNumberArguments) -> Any:
        client = self._numbers_client(args.project_config)
        return await client.get_active_number(args.phone_number)

    async def release_number(self, args: PhoneNumberArguments) -> Any:
        client = self._numbers_client(args.project_config)
        return await client.release_number(args.phone_number)

    # Verification
    async def start_verification(self, args: StartVerificationArguments) -> Any:
        client = self._verification_client(args.project_config)
        return await client.start_verification(
            args.phone_number,
            args.method.value,
            custom=args.custom,
            reference=args.reference,
        )

    async def report_verification(self, args: ReportVerificationArguments) -> Any:
        client = self._verification_client(args.project_config)
        return await client.report_verification(args.verification_id, args.code)

    async def get_verification(self, args: VerificationArguments) -> Any:
        client = self._verification_client(args.project_config)
        return await client.get_verification(args.verification_id)

    # Sub-projects
    async def create_subproject(self, args: CreateSubprojectArguments) -> Any:
        client = self._subproject_client(args.project_config)
        return await client.create_subproject(
            args.parent_project_id, args.display_name, args.description
        )

    async def list_subprojects(self, args: ParentProjectArguments) -> Any:
        client = self._subproject_client(args.project_config)
        return await client.list_subprojects(args.parent_project_id)

    async def get_subproject(self, args: SubprojectArguments) -> Any:
        client = self._subproject_client(args.project_config)
        return await client.get_subproject(args.parent_project_id, args.subproject_id)

    async def delete_subproject(self, args: SubprojectArguments) -> Any:
        client = self._subproject_client(args.project_config)
        return await client.delete_subproject(
            args.parent_project_id, args.subproject_id
        )

    # Aggregation over parent projects
    async def _list_parent_subprojects(self, parent_project_id: str) -> SubprojectListing:
        try:
            response = await self.list_subprojects(
                ParentProjectArguments(parent_project_id=parent_project_id)
            )
        except Exception as e:
            logger.error(
                "[MCP Sinch] Error fetching subprojects for parent project",
                parent_project_id=parent_project_id,
                error=str(e),
            )
            return SubprojectListing(parent_project_id=parent_project_id, error=str(e))

        subprojects = response.get("subprojects") if isinstance(response, dict) else None
        return SubprojectListing(
            parent_project_id=parent_project_id, subprojects=subprojects or []
        )

    async def _probe_parent_project(self, parent_project_id: str) -> ParentAccessResult:
        try:
            await self.list_subprojects(
                ParentProjectArguments(parent_project_id=parent_project_id)
            )
        except Exception as e:
            logger.error(
                "[MCP Sinch] Parent project not accessible",
                parent_project_id=parent_project_id,
                error=str(e),
            )
            return ParentAccessResult(
                parent_project_id=parent_project_id,
                status=ParentAccessStatus.ERROR,
                message=str(e),
            )

        return ParentAccessResult(
            parent_project_id=parent_project_id,
            status=ParentAccessStatus.ACCESSIBLE,
            message="Successfully connected",
        )

    async def list_all_subprojects(self, args: NoArguments) -> list[dict[str, Any]]:
        """
        List sub-projects for every configured parent project concurrently.

        A failing parent yields an entry with its error and no sub-projects;
        it never fails the whole call. Results follow parent order.
        """
        parent_ids = self.config.parent_project_ids()
        logger.info(
            f"[MCP Sinch] Listing subprojects across {len(parent_ids)} parent projects"
        )
        listings = await asyncio.gather(
            *(self._list_parent_subprojects(parent_id) for parent_id in parent_ids)
        )
        return [listing.to_payload() for listing in listings]

    async def test_parent_projects(self, args: NoArguments) -> list[dict[str, Any]]:
        """Probe access to every configured parent project concurrently."""
        parent_ids = self.config.parent_project_ids()
        logger.info(f"[MCP Sinch] Testing access to {len(parent_ids)} parent projects")
        results = await asyncio.gather(
            *(self._probe_parent_project(parent_id) for parent_id in parent_ids)
        )
        return [result.to_payload() for result in results]

    # Dispatch
    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> ToolCallResult:
        """
        Run one tool call.

        Args:
            name: Tool name
            arguments: Raw tool arguments as sent by the client

        Returns:
            ToolCallResult: The raw API response, or an error-flagged result
        """
        try:
            operation = OperationName(name)
        except ValueError:
            error = UnknownOperationError(name)
            logger.error("[MCP Sinch] Unknown tool", tool_name=name)
            return ToolCallResult(is_error=True, error_message=str(error))

        spec = TOOL_CATALOG[operation]
        try:
            args = spec.arguments.model_validate(arguments or {})
            logger.info(
                f"[MCP Sinch] Calling {operation.value}",
                tool_name=operation.value,
                family=spec.family.value,
                project_name=getattr(args, "project_config", None),
            )
            content = await _HANDLERS[operation](self, args)
        except Exception as e:
            logger.error(
                f"[MCP Sinch] Error calling {operation.value}",
                tool_name=operation.value,
                error=str(e),
            )
            return ToolCallResult(is_error=True, error_message=str(e))

        logger.info(
            f"[MCP Sinch] Successfully called {operation.value}",
            tool_name=operation.value,
        )
        return ToolCallResult(content=content)


Handler = Callable[[SinchService, ToolArguments], Awaitable[Any]]

_HANDLERS: dict[OperationName, Handler] = {
    OperationName.LIST_CONFIGURED_PROJECTS: SinchService.list_configured_projects,
    OperationName.SEND_SMS: SinchService.send_sms,
    OperationName.GET_SMS_BATCH: SinchService.get_sms_batch,
    OperationName.GET_DELIVERY_REPORT: SinchService.get_delivery_report,
    OperationName.LIST_SMS_BATCHES: SinchService.list_sms_batches,
    OperationName.SEARCH_AVAILABLE_NUMBERS: SinchService.search_available_numbers,
    OperationName.ACTIVATE_NUMBER: SinchService.activate_number,
    OperationName.LIST_ACTIVE_NUMBERS: SinchService.list_active_numbers,
    OperationName.GET_ACTIVE_NUMBER: SinchService.get_active_number,
    OperationName.RELEASE_NUMBER: SinchService.release_number,
    OperationName.START_VERIFICATION: SinchService.start_verification,
    OperationName.REPORT_VERIFICATION: SinchService.report_verification,
    OperationName.GET_VERIFICATION: SinchService.get_verification,
    OperationName.CREATE_SUBPROJECT: SinchService.create_subproject,
    OperationName.LIST_SUBPROJECTS: SinchService.list_subprojects,
    OperationName.GET_SUBPROJECT: SinchService.get_subproject,
    OperationName.DELETE_SUBPROJECT: SinchService.delete_subproject,
    OperationName.LIST_ALL_SUBPROJECTS: SinchService.list_all_subprojects,
    OperationName.TEST_PARENT_PROJECTS: SinchService.test_parent_projects,
}

_unhandled = set(OperationName) - set(_HANDLERS)
if _unhandled:
    raise RuntimeError(
        f"No handler registered for operations: {sorted(op.value for op in _unhandled)}"
    )
