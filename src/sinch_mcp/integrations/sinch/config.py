"""
Configuration management for the Sinch integration package.

This module reads the process environment (``SINCH_*`` variables) with
Pydantic settings and normalizes it into a ``SinchConfig``: a mapping of
named project configurations, an optional legacy single-project
configuration, an optional default project name and the list of parent
projects used by the aggregation tools.
"""

import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from sinch_mcp.integrations.sinch.constants import (
    DEFAULT_REQUEST_TIMEOUT,
    LEGACY_PROJECT_NAME,
    SinchRegion,
)
from sinch_mcp.integrations.sinch.exceptions import SinchConfigurationError
from sinch_mcp.utils.logger import logger, mask_secret


class ProjectConfig(BaseModel):
    """Credentials and region for one Sinch project."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    service_plan_id: str = Field(description="SMS service plan ID")
    api_token: str = Field(description="Bearer token for the Sinch APIs")
    project_id: str | None = Field(
        default=None, description="Project ID (Numbers and sub-project APIs)"
    )
    region: SinchRegion = Field(
        default=SinchRegion.US, description="SMS API region"
    )
    display_name: str | None = Field(default=None, description="Human readable label")
    client_id: str | None = Field(default=None, description="Reserved, unused")
    client_secret: str | None = Field(default=None, description="Reserved, unused")


class ProjectsConfigStatus(str, Enum):
    """Outcome of reading the named-project JSON block."""

    NOT_SUPPLIED = "not_supplied"
    INVALID = "invalid"
    LOADED = "loaded"


class ProjectsParseResult(BaseModel):
    """Typed result of parsing ``SINCH_PROJECTS``."""

    model_config = ConfigDict(frozen=True)

    status: ProjectsConfigStatus
    projects: dict[str, ProjectConfig] = Field(default_factory=dict)
    error: str | None = None


class SinchSettings(BaseSettings):
    """Raw ``SINCH_*`` environment configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        env_prefix="SINCH_",
        env_ignore_empty=True,
    )

    # Legacy single-project configuration
    service_plan_id: str | None = Field(default=None, description="Legacy service plan ID")
    api_token: str | None = Field(default=None, description="Legacy API token")
    project_id: str | None = Field(default=None, description="Legacy project ID")
    region: SinchRegion = Field(default=SinchRegion.US, description="Legacy SMS region")
    client_id: str | None = Field(default=None, description="Reserved, unused")
    client_secret: str | None = Field(default=None, description="Reserved, unused")

    # Multi-project configuration
    projects: str | None = Field(
        default=None, description="JSON object of named project configurations"
    )
    default_project: str | None = Field(
        default=None, description="Name of the default named project"
    )
    parent_projects: str | None = Field(
        default=None, description="Comma-separated parent project IDs"
    )

    # Outbound HTTP
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT, description="HTTP request timeout in seconds"
    )


def parse_parent_projects(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated list of parent project IDs.

    Entries are trimmed; empty entries are dropped. Order and duplicates
    are preserved.
    """
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def parse_named_projects(raw: str | None) -> ProjectsParseResult:
    """Parse the named-project JSON block.

    A malformed block never raises: it is logged and reported as
    ``INVALID`` with an empty mapping so legacy configuration keeps working.
    """
    if raw is None or not raw.strip():
        return ProjectsParseResult(status=ProjectsConfigStatus.NOT_SUPPLIED)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("Error parsing SINCH_PROJECTS environment variable", error=str(e))
        return ProjectsParseResult(status=ProjectsConfigStatus.INVALID, error=str(e))

    if not isinstance(data, dict):
        message = "SINCH_PROJECTS must be a JSON object keyed by project name"
        logger.error(message, value_type=type(data).__name__)
        return ProjectsParseResult(status=ProjectsConfigStatus.INVALID, error=message)

    projects: dict[str, ProjectConfig] = {}
    for project_name, entry in data.items():
        try:
            projects[project_name] = ProjectConfig.model_validate(entry)
        except ValidationError as e:
            message = f"Invalid configuration for project '{project_name}': {e}"
            logger.error(
                "Error parsing SINCH_PROJECTS entry",
                project_name=project_name,
                error=str(e),
            )
            return ProjectsParseResult(status=ProjectsConfigStatus.INVALID, error=message)

    return ProjectsParseResult(status=ProjectsConfigStatus.LOADED, projects=projects)


class SinchConfig(BaseModel):
    """Normalized, read-only view of the process-wide Sinch configuration."""

    model_config = ConfigDict(frozen=True)

    projects: dict[str, ProjectConfig] = Field(default_factory=dict)
    projects_status: ProjectsConfigStatus = ProjectsConfigStatus.NOT_SUPPLIED
    projects_error: str | None = None
    default_project: str | None = None

    service_plan_id: str | None = None
    api_token: str | None = None
    project_id: str | None = None
    region: SinchRegion = SinchRegion.US
    client_id: str | None = None
    client_secret: str | None = None

    parent_projects: tuple[str, ...] = ()
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def has_legacy_credentials(self) -> bool:
        """Whether the flat legacy fields are enough to build a project."""
        return bool(self.service_plan_id and self.api_token)

    def legacy_project(self) -> ProjectConfig | None:
        """Synthesize the unnamed legacy project, if its credentials are set."""
        if not self.has_legacy_credentials:
            return None
        return ProjectConfig(
            service_plan_id=self.service_plan_id,
            api_token=self.api_token,
            project_id=self.project_id,
            region=self.region,
            client_id=self.client_id,
            client_secret=self.client_secret,
        )

    def parent_project_ids(self) -> list[str]:
        """Parent projects to aggregate over, derived fresh on every call.

        The configured parent projects come first, followed by the legacy
        project ID when one is set.
        """
        parent_ids = list(self.parent_projects)
        if self.project_id:
            parent_ids.append(self.project_id)
        return parent_ids

    @classmethod
    def from_settings(cls, settings: SinchSettings) -> "SinchConfig":
        """Build and validate a config from raw settings.

        Raises:
            SinchConfigurationError: If neither legacy credentials nor any
                named project is available.
        """
        parsed = parse_named_projects(settings.projects)

        config = cls(
            projects=parsed.projects,
            projects_status=parsed.status,
            projects_error=parsed.error,
            default_project=settings.default_project or None,
            service_plan_id=settings.service_plan_id,
            api_token=settings.api_token,
            project_id=settings.project_id,
            region=settings.region,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            parent_projects=parse_parent_projects(settings.parent_projects),
            request_timeout=settings.request_timeout,
        )

        if not config.has_legacy_credentials and not config.projects:
            message = (
                "Either legacy config (SINCH_SERVICE_PLAN_ID + SINCH_API_TOKEN) "
                "or SINCH_PROJECTS environment variable is required"
            )
            if parsed.status == ProjectsConfigStatus.INVALID:
                message = f"{message} (SINCH_PROJECTS is invalid: {parsed.error})"
            raise SinchConfigurationError(message)

        return config


def load_sinch_config(settings: SinchSettings | None = None) -> SinchConfig:
    """Read the environment and build a ``SinchConfig``.

    Raises:
        SinchConfigurationError: If the settings fail validation or no
            usable project configuration exists.
    """
    try:
        settings = settings or SinchSettings()
    except ValidationError as e:
        raise SinchConfigurationError(f"Invalid Sinch configuration: {e}") from e

    config = SinchConfig.from_settings(settings)

    logger.info(
        "SinchConfig loaded",
        named_projects=sorted(config.projects),
        projects_status=config.projects_status.value,
        default_project=config.default_project,
        has_legacy_config=config.has_legacy_credentials,
        parent_project_count=len(config.parent_projects),
    )
    if config.has_legacy_credentials:
        logger.info(
            "Sinch legacy API token (first 5 chars)",
            api_token_preview=mask_secret(config.api_token),
            project_name=LEGACY_PROJECT_NAME,
        )
    return config


# Global config instance
_sinch_config: SinchConfig | None = None


def get_sinch_config() -> SinchConfig:
    """
    Get the global Sinch config, loading it on first use.

    Returns:
        SinchConfig: The global config instance

    Raises:
        SinchConfigurationError: If no usable configuration exists
    """
    global _sinch_config
    if _sinch_config is None:
        _sinch_config = load_sinch_config()
    return _sinch_config


def set_sinch_config(config: SinchConfig | None) -> None:
    """
    Set (or clear) the global Sinch config.

    Args:
        config: The config to install, or None to force a reload on next use
    """
    global _sinch_config
    _sinch_config = config
