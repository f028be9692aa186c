"""Shared fixtures for the Sinch MCP tests."""

import json
import os

import httpx
import pytest

from sinch_mcp.config import set_app_settings
from sinch_mcp.integrations.sinch.config import (
    SinchConfig,
    SinchSettings,
    set_sinch_config,
)


class FakeSinchAPI:
    """Records outbound requests and answers them from a route table.

    Routes are keyed by method and raw path (query string excluded).
    Unrouted requests get a 200 with an empty JSON object.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}
        self.failures: dict[tuple[str, str], Exception] = {}

    def add(self, method: str, path: str, status_code: int = 200, json=None) -> None:
        self.routes[(method, path)] = (status_code, {} if json is None else json)

    def fail(self, method: str, path: str, error: Exception) -> None:
        self.failures[(method, path)] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.raw_path.split(b"?")[0].decode())
        if key in self.failures:
            raise self.failures[key]
        status_code, body = self.routes.get(key, (200, {}))
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate every test from SINCH_* / MCP_* variables and cached settings."""
    for key in list(os.environ):
        if key.upper().startswith(("SINCH_", "MCP_")):
            monkeypatch.delenv(key, raising=False)
    set_sinch_config(None)
    set_app_settings(None)
    yield
    set_sinch_config(None)
    set_app_settings(None)


@pytest.fixture
def fake_api():
    """Fake Sinch API behind an httpx mock transport."""
    return FakeSinchAPI()


@pytest.fixture
def legacy_config():
    """Legacy single-project configuration with a project ID."""
    return SinchConfig.from_settings(
        SinchSettings(
            service_plan_id="legacy-sp",
            api_token="legacy-token",
            project_id="legacy-pid",
        )
    )


@pytest.fixture
def multi_project_config():
    """Two named projects, a default and legacy credentials."""
    projects = {
        "staging": {
            "servicePlanId": "sp1",
            "apiToken": "tok1",
            "projectId": "pid-staging",
            "region": "eu",
            "displayName": "Staging",
        },
        "prod": {
            "servicePlanId": "sp2",
            "apiToken": "tok2",
            "region": "us",
        },
    }
    return SinchConfig.from_settings(
        SinchSettings(
            projects=json.dumps(projects),
            default_project="staging",
            service_plan_id="legacy-sp",
            api_token="legacy-token",
        )
    )
