"""
Sinch integration constants and enums.

This module contains all constants, enums, and static values used
across the Sinch integration: regions, API families, base URLs,
endpoint templates, operation names and resource URI parts.
"""

from enum import Enum


# Seconds before an outbound API request is abandoned
DEFAULT_REQUEST_TIMEOUT = 30.0


class SinchRegion(str, Enum):
    """Regions served by the SMS API."""

    US = "us"
    EU = "eu"
    AU = "au"
    BR = "br"
    CA = "ca"


class SinchFamily(str, Enum):
    """Remote API families the server talks to."""

    META = "meta"
    SMS = "sms"
    NUMBERS = "numbers"
    VERIFICATION = "verification"
    PROJECTS = "projects"


class SinchBaseURL:
    """Base addresses per API family."""

    SMS = "https://{region}.sms.api.sinch.com"
    NUMBERS = "https://numbers.api.sinch.com"
    VERIFICATION = "https://verification.api.sinch.com"
    SUBPROJECTS = "https://subproject.api.sinch.com"


class SinchEndpoints:
    """Sinch API endpoint templates."""

    # SMS
    BATCHES = "/xms/v1/{service_plan_id}/batches"
    BATCH_BY_ID = "/xms/v1/{service_plan_id}/batches/{batch_id}"
    DELIVERY_REPORT = "/xms/v1/{service_plan_id}/batches/{batch_id}/delivery_report/{report_type}"

    # Numbers
    AVAILABLE_NUMBERS = "/v1/projects/{project_id}/availableNumbers"
    ACTIVE_NUMBERS = "/v1/projects/{project_id}/activeNumbers"
    ACTIVE_NUMBER_BY_PHONE = "/v1/projects/{project_id}/activeNumbers/{phone_number}"

    # Verification
    VERIFICATIONS = "/verification/v1/verifications"
    VERIFICATION_BY_ID = "/verification/v1/verifications/id/{verification_id}"

    # Sub-projects
    SUBPROJECTS = "/v1alpha1/projects/{parent_project_id}/subprojects"
    SUBPROJECT_BY_ID = "/v1alpha1/projects/{parent_project_id}/subprojects/{subproject_id}"


class DeliveryReportType(str, Enum):
    """Delivery report modes accepted when sending a batch."""

    NONE = "none"
    SUMMARY = "summary"
    FULL = "full"
    PER_RECIPIENT = "per_recipient"


class NumberType(str, Enum):
    """Phone number types for number search."""

    LOCAL = "LOCAL"
    MOBILE = "MOBILE"
    TOLL_FREE = "TOLL_FREE"


class NumberCapability(str, Enum):
    """Capabilities a phone number can be searched by."""

    SMS = "SMS"
    VOICE = "VOICE"


class VerificationMethod(str, Enum):
    """Verification methods."""

    SMS = "sms"
    FLASHCALL = "flashcall"
    CALLOUT = "callout"


class OperationName(str, Enum):
    """Every tool exposed by the server."""

    LIST_CONFIGURED_PROJECTS = "list_configured_projects"

    SEND_SMS = "send_sms"
    GET_SMS_BATCH = "get_sms_batch"
    GET_DELIVERY_REPORT = "get_delivery_report"
    LIST_SMS_BATCHES = "list_sms_batches"

    SEARCH_AVAILABLE_NUMBERS = "search_available_numbers"
    ACTIVATE_NUMBER = "activate_number"
    LIST_ACTIVE_NUMBERS = "list_active_numbers"
    GET_ACTIVE_NUMBER = "get_active_number"
    RELEASE_NUMBER = "release_number"

    START_VERIFICATION = "start_verification"
    REPORT_VERIFICATION = "report_verification"
    GET_VERIFICATION = "get_verification"

    CREATE_SUBPROJECT = "create_subproject"
    LIST_SUBPROJECTS = "list_subprojects"
    GET_SUBPROJECT = "get_subproject"
    DELETE_SUBPROJECT = "delete_subproject"
    LIST_ALL_SUBPROJECTS = "list_all_subprojects"
    TEST_PARENT_PROJECTS = "test_parent_projects"


class ParentAccessStatus(str, Enum):
    """Outcome of probing a parent project."""

    ACCESSIBLE = "accessible"
    ERROR = "error"


class ResourceFamily(str, Enum):
    """First path segment of a resource URI."""

    SMS = "sms"
    NUMBERS = "numbers"


class ResourceKind(str, Enum):
    """Second path segment of a resource URI."""

    BATCH = "batch"
    ACTIVE = "active"


RESOURCE_SCHEME = "sinch"
RESOURCE_MIME_TYPE = "application/json"

LEGACY_PROJECT_NAME = "default"
LEGACY_PROJECT_DISPLAY_NAME = "Default Project"
