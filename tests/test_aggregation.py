"""Tests for the multi-project aggregation tools."""

import httpx
import pytest

from sinch_mcp.integrations.sinch.config import SinchConfig, SinchSettings
from sinch_mcp.integrations.sinch.service import SinchService


@pytest.fixture
def parents_config():
    return SinchConfig.from_settings(
        SinchSettings(
            service_plan_id="legacy-sp",
            api_token="legacy-token",
            project_id="c",
            parent_projects="a, b ,b",
        )
    )


def _parent_ids(fake_api):
    return [request.url.path.split("/")[3] for request in fake_api.requests]


class TestListAllSubprojects:
    """Test cases for list_all_subprojects."""

    @pytest.mark.asyncio
    async def test_parent_list_is_stable_across_calls(self, parents_config, fake_api):
        service = SinchService(parents_config, transport=fake_api.transport)

        first = await service.call_tool("list_all_subprojects", {})
        first_parents = _parent_ids(fake_api)
        fake_api.requests.clear()
        second = await service.call_tool("list_all_subprojects", {})

        assert sorted(first_parents) == ["a", "b", "b", "c"]
        assert sorted(_parent_ids(fake_api)) == ["a", "b", "b", "c"]
        assert [entry["parentProjectId"] for entry in first.content] == ["a", "b", "b", "c"]
        assert [entry["parentProjectId"] for entry in second.content] == ["a", "b", "b", "c"]

    @pytest.mark.asyncio
    async def test_uses_default_project_credentials(self, parents_config, fake_api):
        service = SinchService(parents_config, transport=fake_api.transport)

        await service.call_tool("list_all_subprojects", {})

        assert {request.headers["Authorization"] for request in fake_api.requests} == {
            "Bearer legacy-token"
        }
        assert {request.url.host for request in fake_api.requests} == {
            "subproject.api.sinch.com"
        }

    @pytest.mark.asyncio
    async def test_failures_are_isolated_per_parent(self, parents_config, fake_api):
        fake_api.add(
            "GET",
            "/v1alpha1/projects/a/subprojects",
            json={"subprojects": [{"projectId": "a-1"}]},
        )
        fake_api.add("GET", "/v1alpha1/projects/b/subprojects", status_code=403, json={})
        fake_api.fail(
            "GET", "/v1alpha1/projects/c/subprojects", httpx.ConnectError("unreachable")
        )
        service = SinchService(parents_config, transport=fake_api.transport)

        result = await service.call_tool("list_all_subprojects", {})

        assert not result.is_error
        a, b1, b2, c = result.content
        assert a == {"parentProjectId": "a", "subprojects": [{"projectId": "a-1"}]}
        assert b1["subprojects"] == []
        assert b1["error"].startswith("Request failed with status code 403")
        assert b2 == b1
        assert c["subprojects"] == []
        assert "unreachable" in c["error"]

    @pytest.mark.asyncio
    async def test_no_parents(self, fake_api):
        config = SinchConfig.from_settings(
            SinchSettings(service_plan_id="sp", api_token="tok")
        )
        service = SinchService(config, transport=fake_api.transport)

        result = await service.call_tool("list_all_subprojects", {})

        assert result.content == []
        assert fake_api.requests == []


class TestTestParentProjects:
    """Test cases for test_parent_projects."""

    @pytest.mark.asyncio
    async def test_reports_access_per_parent(self, parents_config, fake_api):
        fake_api.add("GET", "/v1alpha1/projects/b/subprojects", status_code=401, json={})
        service = SinchService(parents_config, transport=fake_api.transport)

        result = await service.call_tool("test_parent_projects", {})

        assert not result.is_error
        assert [entry["parentProjectId"] for entry in result.content] == ["a", "b", "b", "c"]
        assert result.content[0] == {
            "parentProjectId": "a",
            "status": "accessible",
            "message": "Successfully connected",
        }
        assert result.content[1]["status"] == "error"
        assert "401" in result.content[1]["message"]
        assert result.content[3]["status"] == "accessible"

    @pytest.mark.asyncio
    async def test_repeated_calls_see_same_parents(self, parents_config, fake_api):
        service = SinchService(parents_config, transport=fake_api.transport)

        first = await service.call_tool("test_parent_projects", {})
        second = await service.call_tool("test_parent_projects", {})

        assert first.content == second.content
        assert len(fake_api.requests) == 8
