"""
Sinch API clients, one per API family.

Each client is bound to a single resolved project: the base URL comes from
the family (and, for SMS, the project's region) and every request carries
the project's bearer token. A new ``httpx.AsyncClient`` is opened for every
request and closed right after it, so nothing is shared between calls.
"""

from typing import Any
from urllib.parse import quote

import httpx

from sinch_mcp.integrations.sinch.config import ProjectConfig
from sinch_mcp.integrations.sinch.constants import (
    DEFAULT_REQUEST_TIMEOUT,
    DeliveryReportType,
    SinchBaseURL,
    SinchEndpoints,
    SinchFamily,
)
from sinch_mcp.integrations.sinch.exceptions import SinchAPIError
from sinch_mcp.utils.logger import logger

def _path_segment(value: str) -> str:
    return quote(value, safe="")


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


class SinchAPIClient:
    """Base async client for one Sinch API family."""

    family: SinchFamily

    def __init__(
        self,
        project: ProjectConfig,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            project: Resolved project configuration to authenticate with
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.project = project
        self.timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        raise NotImplementedError

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.project.api_token}",
            "Content-Type": "application/json",
        }

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request and return the decoded body.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            json: Optional JSON request body
            params: Optional query parameters; None values are dropped

        Returns:
            The decoded JSON body, or an empty dict for an empty body

        Raises:
            SinchAPIError: On transport failures, non-2xx responses or
                undecodable bodies
        """
        logger.debug(
            "Sinch API request",
            family=self.family.value,
            method=method,
            endpoint=endpoint,
        )

        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(
                    method,
                    endpoint,
                    json=json,
                    params=_drop_none(params) if params else None,
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                try:
                    response_data = e.response.json()
                except ValueError:
                    response_data = e.response.text
                message = f"Request failed with status code {status_code}"
                if e.response.text:
                    message = f"{message}: {e.response.text}"
                raise SinchAPIError(
                    message, status_code=status_code, response_data=response_data
                ) from e
            except httpx.RequestError as e:
                raise SinchAPIError(f"Request error: {e}") from e

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise SinchAPIError(
                f"Invalid response format: {e}",
                status_code=response.status_code,
                response_data=response.text,
            ) from e


class SMSClient(SinchAPIClient):
    """Client for the region-specific SMS (XMS) API."""

    family = SinchFamily.SMS

    @property
    def base_url(self) -> str:
        return SinchBaseURL.SMS.format(region=self.project.region.value)

    async def send_batch(
        self,
        to: list[str],
        sender: str,
        body: str,
        *,
        delivery_report: DeliveryReportType = DeliveryReportType.NONE,
        expire_at: str | None = None,
        flash_message: bool = False,
    ) -> Any:
        payload = _drop_none(
            {
                "to": to,
                "from": sender,
                "body": body,
                "delivery_report": delivery_report.value,
                "expire_at": expire_at,
                "flash_message": flash_message,
            }
        )
        endpoint = SinchEndpoints.BATCHES.format(
            service_plan_id=self.project.service_plan_id
        )
        return await self._make_request("POST", endpoint, json=payload)

    async def get_batch(self, batch_id: str) -> Any:
        endpoint = SinchEndpoints.BATCH_BY_ID.format(
            service_plan_id=self.project.service_plan_id,
            batch_id=_path_segment(batch_id),
        )
        return await self._make_request("GET", endpoint)

    async def get_delivery_report(self, batch_id: str, full: bool = False) -> Any:
        endpoint = SinchEndpoints.DELIVERY_REPORT.format(
            service_plan_id=self.project.service_plan_id,
            batch_id=_path_segment(batch_id),
            report_type="full" if full else "summary",
        )
        return await self._make_request("GET", endpoint)

    async def list_batches(
        self, start_date: str | None = None, end_date: str | None = None
    ) -> Any:
        endpoint = SinchEndpoints.BATCHES.format(
            service_plan_id=self.project.service_plan_id
        )
        return await self._make_request(
            "GET", endpoint, params={"start_date": start_date, "end_date": end_date}
        )


class NumbersClient(SinchAPIClient):
    """Client for the Numbers API. Requires a project ID."""

    family = SinchFamily.NUMBERS

    @property
    def base_url(self) -> str:
        return SinchBaseURL.NUMBERS

    @property
    def project_id(self) -> str:
        return self.project.project_id or ""

    def _active_number_endpoint(self, phone_number: str) -> str:
        return SinchEndpoints.ACTIVE_NUMBER_BY_PHONE.format(
            project_id=self.project_id, phone_number=_path_segment(phone_number)
        )

    async def search_available_numbers(
        self,
        region_code: str | None = None,
        number_type: str | None = None,
        capabilities: list[str] | None = None,
    ) -> Any:
        endpoint = SinchEndpoints.AVAILABLE_NUMBERS.format(project_id=self.project_id)
        params = {
            "regionCode": region_code,
            "type": number_type,
            "capability": ",".join(capabilities) if capabilities else None,
        }
        return await self._make_request("GET", endpoint, params=params)

    async def activate_number(
        self,
        phone_number: str,
        sms_configuration: dict[str, Any] | None = None,
        voice_configuration: dict[str, Any] | None = None,
    ) -> Any:
        endpoint = SinchEndpoints.ACTIVE_NUMBERS.format(project_id=self.project_id)
        payload = _drop_none(
            {
                "phoneNumber": phone_number,
                "smsConfiguration": sms_configuration,
                "voiceConfiguration": voice_configuration,
            }
        )
        return await self._make_request("POST", endpoint, json=payload)

    async def list_active_numbers(self) -> Any:
        endpoint = SinchEndpoints.ACTIVE_NUMBERS.format(project_id=self.project_id)
        return await self._make_request("GET", endpoint)

    async def get_active_number(self, phone_number: str) -> Any:
        return await self._make_request(
            "GET", self._active_number_endpoint(phone_number)
        )

    async def release_number(self, phone_number: str) -> Any:
        return await self._make_request(
            "DELETE", self._active_number_endpoint(phone_number)
        )


class VerificationClient(SinchAPIClient):
    """Client for the Verification API."""

    family = SinchFamily.VERIFICATION

    @property
    def base_url(self) -> str:
        return SinchBaseURL.VERIFICATION

    async def start_verification(
        self,
        phone_number: str,
        method: str,
        *,
        custom: str | None = None,
        reference: str | None = None,
    ) -> Any:
        payload = _drop_none(
            {
                "identity": {"type": "number", "endpoint": phone_number},
                "method": method,
                "custom": custom,
                "reference": reference,
            }
        )
        return await self._make_request(
            "POST", SinchEndpoints.VERIFICATIONS, json=payload
        )

    async def report_verification(self, verification_id: str, code: str) -> Any:
        endpoint = SinchEndpoints.VERIFICATION_BY_ID.format(
            verification_id=_path_segment(verification_id)
        )
        return await self._make_request(
            "PUT", endpoint, json={"method": "sms", "sms": {"code": code}}
        )

    async def get_verification(self, verification_id: str) -> Any:
        endpoint = SinchEndpoints.VERIFICATION_BY_ID.format(
            verification_id=_path_segment(verification_id)
        )
        return await self._make_request("GET", endpoint)


class SubprojectClient(SinchAPIClient):
    """Client for the sub-project management API."""

    family = SinchFamily.PROJECTS

    @property
    def base_url(self) -> str:
        return SinchBaseURL.SUBPROJECTS

    async def create_subproject(
        self,
        parent_project_id: str,
        display_name: str,
        description: str | None = None,
    ) -> Any:
        endpoint = SinchEndpoints.SUBPROJECTS.format(parent_project_id=parent_project_id)
        payload = _drop_none({"displayName": display_name, "description": description})
        return await self._make_request("POST", endpoint, json=payload)

    async def list_subprojects(self, parent_project_id: str) -> Any:
        endpoint = SinchEndpoints.SUBPROJECTS.format(parent_project_id=parent_project_id)
        return await self._make_request("GET", endpoint)

    async def get_subproject(self, parent_project_id: str, subproject_id: str) -> Any:
        endpoint = SinchEndpoints.SUBPROJECT_BY_ID.format(
            parent_project_id=parent_project_id,
            subproject_id=_path_segment(subproject_id),
        )
        return await self._make_request("GET", endpoint)

    async def delete_subproject(
        self, parent_project_id: str, subproject_id: str
    ) -> Any:
        endpoint = SinchEndpoints.SUBPROJECT_BY_ID.format(
            parent_project_id=parent_project_id,
            subproject_id=_path_segment(subproject_id),
        )
        return await self._make_request("DELETE", endpoint)


def create_sms_client(project: ProjectConfig, **kwargs: Any) -> SMSClient:
    return SMSClient(project, **kwargs)


def create_numbers_client(project: ProjectConfig, **kwargs: Any) -> NumbersClient:
    return NumbersClient(project, **kwargs)


def create_verification_client(
    project: ProjectConfig, **kwargs: Any
) -> VerificationClient:
    return VerificationClient(project, **kwargs)


def create_subproject_client(
    project: ProjectConfig, **kwargs: Any
) -> SubprojectClient:
    return SubprojectClient(project, **kwargs)
