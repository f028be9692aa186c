"""Tests for tool dispatch in SinchService."""

import json
from unittest.mock import patch

import pytest

from sinch_mcp.integrations.sinch.config import SinchConfig, SinchSettings
from sinch_mcp.integrations.sinch.constants import OperationName
from sinch_mcp.integrations.sinch.service import _HANDLERS, SinchService
from sinch_mcp.integrations.sinch.tools import TOOL_CATALOG


class TestCatalog:
    """Test cases for the operation catalog."""

    def test_every_operation_has_a_catalog_entry_and_handler(self):
        assert set(TOOL_CATALOG) == set(OperationName)
        assert set(_HANDLERS) == set(OperationName)

    def test_selector_property_on_scoped_tools(self):
        schema = TOOL_CATALOG[OperationName.SEND_SMS].input_schema()

        assert "project_config" in schema["properties"]
        assert "from" in schema["properties"]
        assert set(schema["required"]) == {"to", "from", "body"}

    @pytest.mark.parametrize(
        "operation",
        [
            OperationName.LIST_CONFIGURED_PROJECTS,
            OperationName.LIST_ALL_SUBPROJECTS,
            OperationName.TEST_PARENT_PROJECTS,
        ],
    )
    def test_unscoped_tools_take_no_arguments(self, operation):
        spec = TOOL_CATALOG[operation]

        assert not spec.accepts_project_selector
        assert spec.input_schema()["properties"] == {}


class TestCallTool:
    """Test cases for SinchService.call_tool."""

    @pytest.mark.asyncio
    async def test_send_sms_routes_to_default_project(self, fake_api, monkeypatch):
        monkeypatch.setenv(
            "SINCH_PROJECTS",
            json.dumps({"staging": {"servicePlanId": "sp1", "apiToken": "tok1", "region": "eu"}}),
        )
        monkeypatch.setenv("SINCH_DEFAULT_PROJECT", "staging")
        fake_api.add("POST", "/xms/v1/sp1/batches", json={"id": "batch-1"})
        service = SinchService(transport=fake_api.transport)

        result = await service.call_tool(
            "send_sms", {"to": ["+15551234567"], "from": "+15557654321", "body": "hi"}
        )

        assert not result.is_error
        assert result.content == {"id": "batch-1"}
        assert json.loads(result.text) == {"id": "batch-1"}
        request = fake_api.last_request
        assert str(request.url) == "https://eu.sms.api.sinch.com/xms/v1/sp1/batches"
        assert request.headers["Authorization"] == "Bearer tok1"
        assert "project_config" not in fake_api.last_json()

    @pytest.mark.asyncio
    async def test_explicit_project_selector(self, multi_project_config, fake_api):
        service = SinchService(multi_project_config, transport=fake_api.transport)

        result = await service.call_tool(
            "get_sms_batch", {"batch_id": "b1", "project_config": "prod"}
        )

        assert not result.is_error
        request = fake_api.last_request
        assert str(request.url) == "https://us.sms.api.sinch.com/xms/v1/sp2/batches/b1"
        assert request.headers["Authorization"] == "Bearer tok2"

    @pytest.mark.asyncio
    async def test_unknown_project_is_error_without_network_call(
        self, multi_project_config, fake_api
    ):
        service = SinchService(multi_project_config, transport=fake_api.transport)

        result = await service.call_tool(
            "get_sms_batch", {"batch_id": "b1", "project_config": "nope"}
        )

        assert result.is_error
        assert result.text == "Error: Project configuration 'nope' not found"
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_numbers_precondition_names_legacy_project(self, fake_api, monkeypatch):
        monkeypatch.setenv("SINCH_SERVICE_PLAN_ID", "legacy-sp")
        monkeypatch.setenv("SINCH_API_TOKEN", "legacy-token")
        service = SinchService(transport=fake_api.transport)

        result = await service.call_tool("list_active_numbers", {})

        assert result.is_error
        assert result.error_message == (
            "Project ID required for Numbers API. "
            "Please configure projectId for project 'default'"
        )
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_numbers_precondition_names_selected_project(
        self, multi_project_config, fake_api
    ):
        service = SinchService(multi_project_config, transport=fake_api.transport)

        result = await service.call_tool(
            "get_active_number", {"phone_number": "+15551234567", "project_config": "prod"}
        )

        assert result.is_error
        assert "project 'prod'" in result.error_message
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_search_available_numbers(self, multi_project_config, fake_api):
        service = SinchService(multi_project_config, transport=fake_api.transport)

        result = await service.call_tool(
            "search_available_numbers",
            {"region_code": "US", "type": "MOBILE", "capability": ["SMS", "VOICE"]},
        )

        assert not result.is_error
        request = fake_api.last_request
        assert request.url.path == "/v1/projects/pid-staging/availableNumbers"
        assert request.url.params["type"] == "MOBILE"
        assert request.url.params["capability"] == "SMS,VOICE"

    @pytest.mark.asyncio
    async def test_activate_number_configuration_uses_wire_names(
        self, multi_project_config, fake_api
    ):
        service = SinchService(multi_project_config, transport=fake_api.transport)

        await service.call_tool(
            "activate_number",
            {
                "phone_number": "+15551234567",
                "sms_configuration": {"servicePlanId": "sp1", "campaignId": "c1"},
                "voice_configuration": {"appId": "app-1"},
            },
        )

        assert fake_api.last_json() == {
            "phoneNumber": "+15551234567",
            "smsConfiguration": {"servicePlanId": "sp1", "campaignId": "c1"},
            "voiceConfiguration": {"appId": "app-1"},
        }

    @pytest.mark.asyncio
    async def test_start_verification(self, legacy_config, fake_api):
        service = SinchService(legacy_config, transport=fake_api.transport)

        await service.call_tool(
            "start_verification", {"phone_number": "+15551234567", "method": "flashcall"}
        )

        assert fake_api.last_json() == {
            "identity": {"type": "number", "endpoint": "+15551234567"},
            "method": "flashcall",
        }

    @pytest.mark.asyncio
    async def test_delete_subproject(self, legacy_config, fake_api):
        service = SinchService(legacy_config, transport=fake_api.transport)

        await service.call_tool(
            "delete_subproject", {"parent_project_id": "p1", "subproject_id": "s1"}
        )

        assert fake_api.last_request.method == "DELETE"
        assert fake_api.last_request.url.host == "subproject.api.sinch.com"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, legacy_config):
        service = SinchService(legacy_config)

        result = await service.call_tool("make_coffee", {})

        assert result.is_error
        assert result.text == "Error: Unknown tool: make_coffee"

    @pytest.mark.asyncio
    async def test_missing_required_argument_is_error(self, legacy_config, fake_api):
        service = SinchService(legacy_config, transport=fake_api.transport)

        result = await service.call_tool("send_sms", {"to": ["+1"], "body": "hi"})

        assert result.is_error
        assert "from" in result.error_message
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_invalid_enum_value_is_error(self, legacy_config, fake_api):
        service = SinchService(legacy_config, transport=fake_api.transport)

        result = await service.call_tool(
            "start_verification", {"phone_number": "+1", "method": "carrier-pigeon"}
        )

        assert result.is_error
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_missing_configuration_is_error(self):
        service = SinchService()

        result = await service.call_tool("get_sms_batch", {"batch_id": "b1"})

        assert result.is_error
        assert "SINCH_PROJECTS" in result.error_message

    @pytest.mark.asyncio
    async def test_remote_failure_is_error_result(self, legacy_config, fake_api):
        fake_api.add("GET", "/xms/v1/legacy-sp/batches/b1", status_code=401, json={"error": "denied"})
        service = SinchService(legacy_config, transport=fake_api.transport)

        result = await service.call_tool("get_sms_batch", {"batch_id": "b1"})

        assert result.is_error
        assert result.text.startswith("Error: Request failed with status code 401")

    @pytest.mark.asyncio
    async def test_handler_exception_is_caught(self, legacy_config):
        service = SinchService(legacy_config)
        with patch.object(
            service, "_verification_client", side_effect=RuntimeError("boom")
        ):
            result = await service.call_tool(
                "get_verification", {"verification_id": "v1"}
            )

        assert result.is_error
        assert result.error_message == "boom"


class TestListConfiguredProjects:
    """Test cases for list_configured_projects."""

    @pytest.mark.asyncio
    async def test_named_then_legacy(self, multi_project_config, fake_api):
        service = SinchService(multi_project_config, transport=fake_api.transport)

        result = await service.call_tool("list_configured_projects", {})

        assert result.content == [
            {"name": "staging", "displayName": "Staging", "projectId": "pid-staging"},
            {"name": "prod", "displayName": "prod"},
            {"name": "default", "displayName": "Default Project"},
        ]
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_named_only(self):
        config = SinchConfig.from_settings(
            SinchSettings(projects='{"only": {"servicePlanId": "sp", "apiToken": "t"}}')
        )
        service = SinchService(config)

        result = await service.call_tool("list_configured_projects", {})

        assert result.content == [{"name": "only", "displayName": "only"}]


class TestConfigLifecycle:
    """Test cases for lazy configuration loading."""

    def test_config_is_loaded_once(self, monkeypatch):
        monkeypatch.setenv("SINCH_SERVICE_PLAN_ID", "sp")
        monkeypatch.setenv("SINCH_API_TOKEN", "tok")
        service = SinchService()

        first = service.config
        monkeypatch.setenv("SINCH_SERVICE_PLAN_ID", "other")

        assert service.config is first
