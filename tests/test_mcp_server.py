from __future__ import annotations

import asyncio

import pytest

pytest.importorskip("mcp")

from mcp.server.fastmcp.exceptions import ToolError

from compdoc.mcp_server import _unwrap, create_server
from compdoc.models import Manifest
from compdoc.query import TOOL_DESCRIPTIONS, ComponentIndex, QueryTools, ToolResult


def test_registers_every_query_tool(manifest: Manifest) -> None:
    server = create_server(QueryTools(ComponentIndex(manifest)), name="test-components")

    listed = asyncio.run(server.list_tools())

    assert sorted(tool.name for tool in listed) == sorted(TOOL_DESCRIPTIONS)
    get_component = next(tool for tool in listed if tool.name == "get_component")
    assert set(get_component.inputSchema["properties"]) == {"name", "subComponent"}
    assert get_component.inputSchema["required"] == ["name"]


def test_error_results_raise_tool_error() -> None:
    assert _unwrap(ToolResult("[]")) == "[]"
    with pytest.raises(ToolError, match="not found"):
        _unwrap(ToolResult.error('Store "x" not found.'))
