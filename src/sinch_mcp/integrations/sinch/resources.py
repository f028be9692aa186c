"""
Browsable Sinch resources.

Resources are addressed as ``sinch://<family>/<kind>/<identifier>``, e.g.
``sinch://sms/batch/01FC66621XXXXX119Z8PMV1QPQ`` or
``sinch://numbers/active/%2B15551234567``. The identifier is percent-encoded
so phone numbers and other reserved characters survive the round trip.
Listing and reading always run against the default project.
"""

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, unquote, urlsplit

from sinch_mcp.integrations.sinch.constants import (
    RESOURCE_SCHEME,
    ResourceFamily,
    ResourceKind,
)
from sinch_mcp.integrations.sinch.exceptions import ResourceNotFoundError
from sinch_mcp.integrations.sinch.schemas import (
    BatchArguments,
    ListSMSBatchesArguments,
    PhoneNumberArguments,
    ProjectScopedArguments,
    ResourceContents,
    ResourceDescriptor,
)
from sinch_mcp.utils.logger import logger

if TYPE_CHECKING:
    from sinch_mcp.integrations.sinch.service import SinchService

SUPPORTED_RESOURCES = {
    (ResourceFamily.SMS, ResourceKind.BATCH),
    (ResourceFamily.NUMBERS, ResourceKind.ACTIVE),
}


@dataclass(frozen=True)
class ResourceAddress:
    family: ResourceFamily
    kind: ResourceKind
    identifier: str


def make_resource_uri(family: ResourceFamily, kind: ResourceKind, identifier: str) -> str:
    """Build the URI of a resource, percent-encoding the identifier."""
    if (family, kind) not in SUPPORTED_RESOURCES:
        raise ValueError(f"Unsupported resource type: {family.value}/{kind.value}")
    return f"{RESOURCE_SCHEME}://{family.value}/{kind.value}/{quote(identifier, safe='')}"


def parse_resource_uri(uri: str) -> ResourceAddress:
    """
    Translate a resource URI back into its address.

    Raises:
        ResourceNotFoundError: If the scheme, family or kind is unknown, or
            the identifier is missing
    """
    parts = urlsplit(uri)
    segments = [parts.netloc, *parts.path.lstrip("/").split("/")]
    if parts.scheme != RESOURCE_SCHEME or len(segments) != 3 or not segments[2]:
        raise ResourceNotFoundError(uri)

    try:
        family = ResourceFamily(segments[0])
        kind = ResourceKind(segments[1])
    except ValueError as e:
        raise ResourceNotFoundError(uri) from e

    if (family, kind) not in SUPPORTED_RESOURCES:
        raise ResourceNotFoundError(uri)

    return ResourceAddress(family=family, kind=kind, identifier=unquote(segments[2]))


class SinchResourceBrowser:
    """Lists and reads resources through the service, using the default project."""

    def __init__(self, service: "SinchService"):
        self.service = service

    async def list_resources(self) -> list[ResourceDescriptor]:
        """
        List recent SMS batches and, when the legacy project ID is set,
        active phone numbers.

        Best effort: a failure is logged and whatever was collected before
        it is returned.
        """
        resources: list[ResourceDescriptor] = []
        try:
            batches = await self.service.list_sms_batches(ListSMSBatchesArguments())
            for batch in _items(batches, "batches"):
                batch_id = str(batch.get("id", ""))
                if not batch_id:
                    continue
                resources.append(
                    ResourceDescriptor(
                        uri=make_resource_uri(ResourceFamily.SMS, ResourceKind.BATCH, batch_id),
                        name=f"SMS Batch {batch_id}",
                        description=f"SMS batch to {len(batch.get('to') or [])} recipients",
                    )
                )

            if self.service.config.project_id:
                numbers = await self.service.list_active_numbers(ProjectScopedArguments())
                for number in _items(numbers, "activeNumbers"):
                    phone_number = str(number.get("phoneNumber", ""))
                    if not phone_number:
                        continue
                    capability = number.get("capability") or []
                    if isinstance(capability, list):
                        capabilities = ", ".join(str(item) for item in capability)
                    else:
                        capabilities = str(capability)
                    resources.append(
                        ResourceDescriptor(
                            uri=make_resource_uri(
                                ResourceFamily.NUMBERS, ResourceKind.ACTIVE, phone_number
                            ),
                            name=f"Phone Number {phone_number}",
                            description=f"Active phone number with capabilities: {capabilities}",
                        )
                    )
        except Exception as e:
            logger.error("[MCP Sinch] Error listing resources", error=str(e))

        return resources

    async def read_resource(self, uri: str) -> ResourceContents:
        """
        Read one resource.

        Raises:
            ResourceNotFoundError: If the URI does not address a known resource
            SinchError: If the underlying API call fails
        """
        address = parse_resource_uri(uri)
        logger.info(
            "[MCP Sinch] Reading resource",
            resource_family=address.family.value,
            resource_kind=address.kind.value,
        )

        if address.family == ResourceFamily.SMS:
            data = await self.service.get_sms_batch(
                BatchArguments(batch_id=address.identifier)
            )
        else:
            data = await self.service.get_active_number(
                PhoneNumberArguments(phone_number=address.identifier)
            )

        return ResourceContents(uri=uri, text=json.dumps(data, indent=2))


def _items(response: Any, key: str) -> list[dict[str, Any]]:
    if not isinstance(response, dict):
        return []
    return [item for item in response.get(key) or [] if isinstance(item, dict)]
