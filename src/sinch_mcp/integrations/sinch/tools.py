"""
Tool catalog.

One ``OperationSpec`` per ``OperationName``: the description shown to the
tool-calling client, the API family it targets and the argument record
whose JSON schema becomes the tool's input schema.
"""

from dataclasses import dataclass
from typing import Any

from sinch_mcp.integrations.sinch.constants import OperationName, SinchFamily
from sinch_mcp.integrations.sinch.schemas import (
    ActivateNumberArguments,
    BatchArguments,
    CreateSubprojectArguments,
    DeliveryReportArguments,
    ListSMSBatchesArguments,
    NoArguments,
    ParentProjectArguments,
    PhoneNumberArguments,
    ProjectScopedArguments,
    ReportVerificationArguments,
    SearchAvailableNumbersArguments,
    SendSMSArguments,
    StartVerificationArguments,
    SubprojectArguments,
    ToolArguments,
    VerificationArguments,
)


@dataclass(frozen=True)
class OperationSpec:
    """Catalog entry for one tool."""

    name: OperationName
    description: str
    family: SinchFamily
    arguments: type[ToolArguments]

    @property
    def accepts_project_selector(self) -> bool:
        return issubclass(self.arguments, ProjectScopedArguments)

    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the tool arguments, using wire names."""
        schema = self.arguments.model_json_schema(by_alias=True)
        schema.pop("title", None)
        return schema


_CATALOG = [
    OperationSpec(
        OperationName.LIST_CONFIGURED_PROJECTS,
        "List all configured Sinch projects available for use",
        SinchFamily.META,
        NoArguments,
    ),
    # SMS
    OperationSpec(
        OperationName.SEND_SMS,
        "Send an SMS message to one or more recipients",
        SinchFamily.SMS,
        SendSMSArguments,
    ),
    OperationSpec(
        OperationName.GET_SMS_BATCH,
        "Get details of a specific SMS batch",
        SinchFamily.SMS,
        BatchArguments,
    ),
    OperationSpec(
        OperationName.GET_DELIVERY_REPORT,
        "Get delivery report for an SMS batch",
        SinchFamily.SMS,
        DeliveryReportArguments,
    ),
    OperationSpec(
        OperationName.LIST_SMS_BATCHES,
        "List SMS batches within a date range",
        SinchFamily.SMS,
        ListSMSBatchesArguments,
    ),
    # Numbers
    OperationSpec(
        OperationName.SEARCH_AVAILABLE_NUMBERS,
        "Search for available phone numbers to purchase",
        SinchFamily.NUMBERS,
        SearchAvailableNumbersArguments,
    ),
    OperationSpec(
        OperationName.ACTIVATE_NUMBER,
        "Activate/purchase a phone number for use with Sinch services",
        SinchFamily.NUMBERS,
        ActivateNumberArguments,
    ),
    OperationSpec(
        OperationName.LIST_ACTIVE_NUMBERS,
        "List all active phone numbers in your account",
        SinchFamily.NUMBERS,
        ProjectScopedArguments,
    ),
    OperationSpec(
        OperationName.GET_ACTIVE_NUMBER,
        "Get details of a specific active phone number",
        SinchFamily.NUMBERS,
        PhoneNumberArguments,
    ),
    OperationSpec(
        OperationName.RELEASE_NUMBER,
        "Release/cancel a phone number",
        SinchFamily.NUMBERS,
        PhoneNumberArguments,
    ),
    # Verification
    OperationSpec(
        OperationName.START_VERIFICATION,
        "Start phone number verification process",
        SinchFamily.VERIFICATION,
        StartVerificationArguments,
    ),
    OperationSpec(
        OperationName.REPORT_VERIFICATION,
        "Report/verify the verification code",
        SinchFamily.VERIFICATION,
        ReportVerificationArguments,
    ),
    OperationSpec(
        OperationName.GET_VERIFICATION,
        "Get status of a verification request",
        SinchFamily.VERIFICATION,
        VerificationArguments,
    ),
    # Sub-projects
    OperationSpec(
        OperationName.CREATE_SUBPROJECT,
        "Create a new subproject under a parent project (useful for reseller scenarios)",
        SinchFamily.PROJECTS,
        CreateSubprojectArguments,
    ),
    OperationSpec(
        OperationName.LIST_SUBPROJECTS,
        "List all subprojects under a parent project",
        SinchFamily.PROJECTS,
        ParentProjectArguments,
    ),
    OperationSpec(
        OperationName.GET_SUBPROJECT,
        "Get details of a specific subproject",
        SinchFamily.PROJECTS,
        SubprojectArguments,
    ),
    OperationSpec(
        OperationName.DELETE_SUBPROJECT,
        "Delete a subproject when no longer needed",
        SinchFamily.PROJECTS,
        SubprojectArguments,
    ),
    OperationSpec(
        OperationName.LIST_ALL_SUBPROJECTS,
        "List all subprojects across all configured parent projects",
        SinchFamily.PROJECTS,
        NoArguments,
    ),
    OperationSpec(
        OperationName.TEST_PARENT_PROJECTS,
        "Test connectivity and access to all configured parent projects",
        SinchFamily.PROJECTS,
        NoArguments,
    ),
]

TOOL_CATALOG: dict[OperationName, OperationSpec] = {spec.name: spec for spec in _CATALOG}

_missing = set(OperationName) - set(TOOL_CATALOG)
if _missing or len(_CATALOG) != len(TOOL_CATALOG):
    raise RuntimeError(
        f"Tool catalog out of sync with OperationName: missing {sorted(_missing)}"
    )
