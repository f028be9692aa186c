"""
Sinch-specific Pydantic schemas.

Argument records for every tool (required fields non-optional, defaults
applied once at validation time) and the result shapes produced locally
by the server. Remote response bodies are passed through untouched and
have no schema here.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sinch_mcp.integrations.sinch.constants import (
    RESOURCE_MIME_TYPE,
    DeliveryReportType,
    NumberCapability,
    NumberType,
    ParentAccessStatus,
    VerificationMethod,
)


# Argument records
class ToolArguments(BaseModel):
    """Base class for tool arguments."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ProjectScopedArguments(ToolArguments):
    """Arguments for tools that accept a project selector."""

    project_config: str | None = Field(
        None,
        description="Name of the project configuration to use (optional - uses default if not specified)",
    )


class NoArguments(ToolArguments):
    """Tools that take no arguments."""


class SendSMSArguments(ProjectScopedArguments):
    to: list[str] = Field(
        ..., description="Array of phone numbers in E.164 format (e.g., +1234567890)"
    )
    sender: str = Field(
        ..., alias="from", description="Sender phone number or short code"
    )
    body: str = Field(..., description="Message content (max 1600 characters)")
    delivery_report: DeliveryReportType = Field(
        DeliveryReportType.NONE, description="Type of delivery report requested"
    )
    expire_at: str | None = Field(
        None, description="ISO 8601 timestamp when message expires"
    )
    flash_message: bool = Field(
        False, description="Send as flash SMS (displayed immediately)"
    )


class BatchArguments(ProjectScopedArguments):
    batch_id: str = Field(..., description="The ID of the SMS batch to retrieve")


class DeliveryReportArguments(ProjectScopedArguments):
    batch_id: str = Field(..., description="The ID of the SMS batch")
    full: bool = Field(False, description="Get full report with recipient details")


class ListSMSBatchesArguments(ProjectScopedArguments):
    start_date: str | None = Field(None, description="Start date in ISO 8601 format")
    end_date: str | None = Field(None, description="End date in ISO 8601 format")


class SearchAvailableNumbersArguments(ProjectScopedArguments):
    region_code: str | None = Field(
        None, description="Two-letter country code (e.g., US, GB, SE)"
    )
    number_type: NumberType | None = Field(
        None, alias="type", description="Type of phone number"
    )
    capability: list[NumberCapability] | None = Field(
        None, description="Required capabilities for the number"
    )


class SMSConfiguration(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    service_plan_id: str | None = Field(None, description="Service plan ID for SMS")
    campaign_id: str | None = Field(None, description="Campaign ID for SMS (US only)")


class VoiceConfiguration(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    app_id: str | None = Field(None, description="Application ID for voice")


class ActivateNumberArguments(ProjectScopedArguments):
    phone_number: str = Field(
        ..., description="Phone number in E.164 format to activate"
    )
    sms_configuration: SMSConfiguration | None = Field(
        None, description="SMS configuration for the number"
    )
    voice_configuration: VoiceConfiguration | None = Field(
        None, description="Voice configuration for the number"
    )


class PhoneNumberArguments(ProjectScopedArguments):
    phone_number: str = Field(..., description="Phone number in E.164 format")


class StartVerificationArguments(ProjectScopedArguments):
    phone_number: str = Field(..., description="Phone number in E.164 format to verify")
    method: VerificationMethod = Field(..., description="Verification method to use")
    custom: str | None = Field(None, description="Custom data to include in verification")
    reference: str | None = Field(None, description="Reference ID for the verification")


class ReportVerificationArguments(ProjectScopedArguments):
    verification_id: str = Field(
        ..., description="The verification ID from start_verification"
    )
    code: str = Field(..., description="The verification code received by the user")


class VerificationArguments(ProjectScopedArguments):
    verification_id: str = Field(..., description="The verification ID to check")


class CreateSubprojectArguments(ProjectScopedArguments):
    parent_project_id: str = Field(
        ..., description="The parent project ID to create the subproject under"
    )
    display_name: str = Field(..., description="Display name for the new subproject")
    description: str | None = Field(
        None, description="Optional description for the subproject"
    )


class ParentProjectArguments(ProjectScopedArguments):
    parent_project_id: str = Field(
        ..., description="The parent project ID to list subprojects for"
    )


class SubprojectArguments(ProjectScopedArguments):
    parent_project_id: str = Field(..., description="The parent project ID")
    subproject_id: str = Field(..., description="The subproject ID")


# Result shapes
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ConfiguredProject(CamelModel):
    """A project configuration as reported by ``list_configured_projects``."""

    name: str
    display_name: str
    project_id: str | None = None


class SubprojectListing(CamelModel):
    """Sub-projects of one parent project, or the error that prevented listing them."""

    parent_project_id: str
    subprojects: list[Any] = Field(default_factory=list)
    error: str | None = None


class ParentAccessResult(CamelModel):
    """Result of probing one parent project."""

    parent_project_id: str
    status: ParentAccessStatus
    message: str


class ResourceDescriptor(CamelModel):
    """A browsable resource."""

    uri: str
    mime_type: str = RESOURCE_MIME_TYPE
    name: str
    description: str


class ResourceContents(CamelModel):
    """The JSON contents of a resource."""

    uri: str
    mime_type: str = RESOURCE_MIME_TYPE
    text: str


class ToolCallResult(BaseModel):
    """Outcome of one tool call at the dispatch boundary."""

    is_error: bool = False
    content: Any = None
    error_message: str | None = None

    @property
    def text(self) -> str:
        """Text rendering sent back to the client."""
        if self.is_error:
            return f"Error: {self.error_message}"
        return json.dumps(self.content, indent=2)
