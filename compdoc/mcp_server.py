"""MCP stdio server exposing the component query tools."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from .logging import get_logger
from .query import QueryTools, ToolResult

SERVER_INSTRUCTIONS = """\
Answers questions about the components of a Vue design system from a
pre-built manifest. Call list_components or search_components first, then
get_component for props, emits, slots and a usage example. Design tokens,
assets and stores are available through get_tokens, list_assets and get_store.
"""

logger = get_logger("mcp")


def _unwrap(result: ToolResult) -> str:
    if result.is_error:
        raise ToolError(result.content)
    return result.content


def create_server(tools: QueryTools, name: str = "compdoc") -> FastMCP:
    """Register the query tools on a new FastMCP server."""
    mcp = FastMCP(name, instructions=SERVER_INSTRUCTIONS)

    @mcp.tool()
    def list_components(category: str | None = None) -> str:
        """List all available components, optionally filtered by category.

        Args:
            category: Optional category such as "form", "layout" or "feedback"
        """
        return _unwrap(tools.list_components(category))

    @mcp.tool()
    def get_component(name: str, subComponent: str | None = None) -> str:
        """Get props, emits, slots, types, composables and a usage example for a component.

        Args:
            name: Component name, e.g. "button" (case-insensitive)
            subComponent: Optional sub-component to describe instead
        """
        return _unwrap(tools.get_component(name, subComponent))

    @mcp.tool()
    def search_components(query: str) -> str:
        """Search components by name, PascalCase name or prop name."""
        return _unwrap(tools.search_components(query))

    @mcp.tool()
    def search_by_prop(propName: str | None = None, propType: str | None = None) -> str:
        """Find components declaring a prop with the given name and/or type."""
        return _unwrap(tools.search_by_prop(propName, propType))

    @mcp.tool()
    def get_component_source(name: str) -> str:
        """Return the raw .vue and .ts sources of a component, keyed by relative path."""
        return _unwrap(tools.get_component_source(name))

    @mcp.tool()
    def get_tokens(type: str) -> str:
        """Get design tokens.

        Args:
            type: One of colors, spacing, radius, maxWidth, utilities, all
        """
        return _unwrap(tools.get_tokens(type))

    @mcp.tool()
    def list_assets() -> str:
        """List image and empty-state assets shipped with the library."""
        return _unwrap(tools.list_assets())

    @mcp.tool()
    def get_store(name: str | None = None) -> str:
        """List stores, or return the source of one store."""
        return _unwrap(tools.get_store(name))

    return mcp


def run_server(tools: QueryTools, name: str = "compdoc") -> None:
    """Serve the tools over stdio until the client disconnects."""
    logger.info("Starting MCP stdio server %s", name)
    create_server(tools, name).run(transport="stdio")


__all__ = ["SERVER_INSTRUCTIONS", "create_server", "run_server"]
