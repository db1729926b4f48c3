"""FastAPI application exposing the query tools over HTTP."""

from __future__ import annotations

from typing import Any, Callable, Dict, List

try:  # pragma: no cover - optional dependency
    from fastapi import Body, Depends, FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Body = None  # type: ignore[assignment]
    Depends = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..query import TOOL_DESCRIPTIONS, QueryTools, UnknownToolError


class HealthResponse(BaseModel):
    status: str
    components: int


class ToolInfo(BaseModel):
    name: str
    description: str
    parameters: Dict[str, Any]
    required: List[str]


class TextContent(BaseModel):
    type: str = "text"
    text: str


class ToolResponse(BaseModel):
    content: List[TextContent]
    isError: bool = False


def create_app(tools_factory: Callable[[], QueryTools]) -> FastAPI:
    """Create the FastAPI application serving ``tools_factory()``'s tools."""

    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for the HTTP transport. Install it with `pip install fastapi uvicorn`."
        )

    app = FastAPI(title="compdoc", version="1.0.0")
    tools = tools_factory()

    async def get_tools() -> QueryTools:
        return tools

    @app.get("/health", response_model=HealthResponse)
    async def health(query_tools: QueryTools = Depends(get_tools)) -> HealthResponse:
        return HealthResponse(status="ok", components=len(query_tools.index.components))

    @app.get("/tools", response_model=List[ToolInfo])
    async def list_tools() -> List[ToolInfo]:
        return [ToolInfo(name=name, **details) for name, details in TOOL_DESCRIPTIONS.items()]

    @app.post("/tools/{name}", response_model=ToolResponse)
    async def call_tool(
        name: str,
        arguments: Dict[str, Any] | None = Body(default=None),
        query_tools: QueryTools = Depends(get_tools),
    ) -> ToolResponse:
        result = query_tools.call(name, arguments or {})
        return ToolResponse(**result.to_dict())

    @app.exception_handler(UnknownToolError)
    async def unknown_tool_handler(
        _: Any, exc: UnknownToolError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": f"Unknown tool: {exc.args[0]}"})

    return app


def run_service(
    tools_factory: Callable[[], QueryTools], host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for the HTTP transport. Install it with `pip install fastapi uvicorn`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app(tools_factory)
    uvicorn.run(app, host=host, port=port)
