"""Custom exception classes for the Sinch integration."""

from typing import Any


class SinchError(Exception):
    """Base exception for all Sinch integration errors."""

    def __init__(self, message: str, error_code: str = "SINCH_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        return self.message


class SinchConfigurationError(SinchError):
    """No usable project configuration, or the settings could not be loaded."""

    def __init__(self, message: str, error_code: str = "CONFIGURATION_ERROR") -> None:
        super().__init__(message, error_code)


class ProjectNotFoundError(SinchConfigurationError):
    """A project configuration was requested by name but is not configured."""

    def __init__(self, project_name: str) -> None:
        super().__init__(
            f"Project configuration '{project_name}' not found",
            error_code="PROJECT_NOT_FOUND",
        )
        self.project_name = project_name


class SinchPreconditionError(SinchError):
    """An operation's family-specific requirement is not met by the resolved project."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="PRECONDITION_FAILED")


class SinchAPIError(SinchError):
    """The outbound call to the Sinch API failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any = None,
    ) -> None:
        """Initialize SinchAPIError.

        Args:
            message: Error message
            status_code: HTTP status code if the remote answered
            response_data: Parsed (or raw text) response body if available
        """
        super().__init__(message, error_code="API_ERROR")
        self.status_code = status_code
        self.response_data = response_data


class ResourceNotFoundError(SinchError):
    """A resource URI does not map to any known resource shape."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Resource not found: {uri}", error_code="RESOURCE_NOT_FOUND")
        self.uri = uri


class UnknownOperationError(SinchError):
    """A tool call named an operation that is not in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}", error_code="UNKNOWN_OPERATION")
        self.name = name
