"""
Sinch integrations package.

This package exposes the Sinch SMS, Numbers, Verification and sub-project
APIs as MCP tools, routing every call to one of several configured Sinch
projects.
"""

from .config import ProjectConfig, SinchConfig, get_sinch_config, load_sinch_config
from .exceptions import (
    ProjectNotFoundError,
    ResourceNotFoundError,
    SinchAPIError,
    SinchConfigurationError,
    SinchError,
    SinchPreconditionError,
    UnknownOperationError,
)
from .resolver import ResolvedProject, resolve_project
from .resources import (
    ResourceAddress,
    SinchResourceBrowser,
    make_resource_uri,
    parse_resource_uri,
)
from .service import SinchService
from .tools import TOOL_CATALOG, OperationSpec

__all__ = [
    "OperationSpec",
    "ProjectConfig",
    "ProjectNotFoundError",
    "ResolvedProject",
    "ResourceAddress",
    "ResourceNotFoundError",
    "SinchAPIError",
    "SinchConfig",
    "SinchConfigurationError",
    "SinchError",
    "SinchPreconditionError",
    "SinchResourceBrowser",
    "SinchService",
    "TOOL_CATALOG",
    "UnknownOperationError",
    "get_sinch_config",
    "load_sinch_config",
    "make_resource_uri",
    "parse_resource_uri",
    "resolve_project",
]
