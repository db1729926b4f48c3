"""Read-only query layer over a loaded manifest."""

from .index import TOKEN_TYPES, ComponentIndex
from .tools import TOOL_DESCRIPTIONS, QueryTools, ToolResult, UnknownToolError
from .usage import UsageExampleRenderer, generate_usage_example

__all__ = [
    "ComponentIndex",
    "QueryTools",
    "TOKEN_TYPES",
    "TOOL_DESCRIPTIONS",
    "ToolResult",
    "UnknownToolError",
    "UsageExampleRenderer",
    "generate_usage_example",
]
