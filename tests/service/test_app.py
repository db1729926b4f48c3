"""Tests for the FastAPI service mode."""

from __future__ import annotations

import json

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from compdoc.models import Manifest
from compdoc.query import TOOL_DESCRIPTIONS, ComponentIndex, QueryTools
from compdoc.service import create_app


@pytest.fixture
def client(manifest: Manifest) -> TestClient:
    tools = QueryTools(ComponentIndex(manifest))
    app = create_app(lambda: tools)
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "components": 3}


def test_lists_tool_descriptions(client: TestClient) -> None:
    response = client.get("/tools")
    assert response.status_code == 200
    tools = response.json()
    assert [tool["name"] for tool in tools] == list(TOOL_DESCRIPTIONS)
    get_tokens = next(tool for tool in tools if tool["name"] == "get_tokens")
    assert get_tokens["required"] == ["type"]
    assert "maxWidth" in get_tokens["parameters"]["type"]["enum"]


def test_call_tool_returns_text_content(client: TestClient) -> None:
    response = client.post("/tools/get_component", json={"name": "button"})
    assert response.status_code == 200
    body = response.json()
    assert body["isError"] is False
    assert body["content"][0]["type"] == "text"
    assert json.loads(body["content"][0]["text"])["pascalName"] == "Button"


def test_call_tool_without_body(client: TestClient) -> None:
    response = client.post("/tools/list_assets")
    assert response.status_code == 200
    assert json.loads(response.json()["content"][0]["text"])["images"][0]["name"] == "logo"


def test_tool_errors_are_reported_in_band(client: TestClient) -> None:
    response = client.post("/tools/get_tokens", json={"type": "shadows"})
    assert response.status_code == 200
    body = response.json()
    assert body["isError"] is True
    assert body["content"][0]["text"].startswith('Invalid token type "shadows"')


def test_unknown_tool_returns_404(client: TestClient) -> None:
    response = client.post("/tools/drop_tables", json={})
    assert response.status_code == 404
    assert response.json() == {"detail": "Unknown tool: drop_tables"}
