"""
Project resolution for incoming calls.

Decides which project configuration a single call runs against:

1. an explicitly named project, which must exist;
2. the configured default project, if it exists in the mapping;
3. the legacy single-project configuration;
4. otherwise, an error.

An explicit name is never redirected to the default or legacy project.
"""

from pydantic import BaseModel, ConfigDict

from sinch_mcp.integrations.sinch.config import ProjectConfig, SinchConfig
from sinch_mcp.integrations.sinch.constants import LEGACY_PROJECT_NAME
from sinch_mcp.integrations.sinch.exceptions import (
    ProjectNotFoundError,
    SinchConfigurationError,
)


class ResolvedProject(BaseModel):
    """The project configuration selected for one call."""

    model_config = ConfigDict(frozen=True)

    name: str
    config: ProjectConfig


def resolve_project(
    config: SinchConfig, project_name: str | None = None
) -> ResolvedProject:
    """Resolve the project configuration for one call.

    Args:
        config: The process-wide Sinch configuration
        project_name: Optional name of a configured project

    Returns:
        ResolvedProject: The selected project and its name

    Raises:
        ProjectNotFoundError: If ``project_name`` is given but not configured
        SinchConfigurationError: If nothing can be resolved implicitly
    """
    if project_name:
        project = config.projects.get(project_name)
        if project is None:
            raise ProjectNotFoundError(project_name)
        return ResolvedProject(name=project_name, config=project)

    if config.default_project:
        project = config.projects.get(config.default_project)
        if project is not None:
            return ResolvedProject(name=config.default_project, config=project)

    legacy = config.legacy_project()
    if legacy is not None:
        return ResolvedProject(name=LEGACY_PROJECT_NAME, config=legacy)

    raise SinchConfigurationError(
        "No valid project configuration found. "
        "Either provide project name or configure default project."
    )
