"""
FastAPI Service Bus
-------------------
HTTP surface that lets a hosting agent list the Pages tools and call
them by name.

Every call answers with the ToolResult shape; HTTP errors are only used
for unknown tool names.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from tools import ToolExecutor, ToolRegistry, create_pages_registry


# Request/Response Models

class ToolCallRequest(BaseModel):
    """Arguments for one tool call."""
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Tool arguments")
    call_id: Optional[str] = Field(None, description="Optional id used in log lines")


class ToolCallResponse(BaseModel):
    """Result of a tool call."""
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


class ToolInfo(BaseModel):
    """Tool information."""
    name: str
    description: str
    permission: str
    category: str
    parameters: Dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    tools_loaded: int
    version: str = "0.1.0"
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())


# Service Bus

class ServiceBus:
    """
    Tool service for a hosting agent.

    Provides REST API for:
    - Health
    - Tool listing
    - Tool calls
    """

    def __init__(self, registry: Optional[ToolRegistry] = None):
        self._registry = registry if registry is not None else create_pages_registry()
        self._executor = ToolExecutor(self._registry)
        self._logger = logging.getLogger("pages.infra.service_bus")
        self._app: Optional[FastAPI] = None

    def create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            self._logger.info(f"Service bus starting with {len(self._registry)} tools")
            yield
            self._logger.info("Service bus shutting down")

        app = FastAPI(
            title="Pages Tools API",
            description="AppleScript-backed tools for Apple Pages",
            version="0.1.0",
            lifespan=lifespan
        )

        self._register_routes(app)

        self._app = app
        return app

    def _register_routes(self, app: FastAPI) -> None:
        """Register all API routes."""

        @app.get("/health", response_model=HealthResponse, tags=["System"])
        async def health_check():
            """Health check endpoint."""
            return HealthResponse(status="healthy", tools_loaded=len(self._registry))

        @app.get("/tools", response_model=List[ToolInfo], tags=["Tools"])
        async def list_tools():
            """List available tools in registration order."""
            return [
                ToolInfo(
                    name=tool.name,
                    description=tool.description,
                    permission=tool.permission.value,
                    category=tool.category,
                    parameters=tool.schema.to_json_schema()
                )
                for tool in self._registry.list_tools()
            ]

        @app.post("/tools/{name}", response_model=ToolCallResponse, tags=["Tools"])
        async def call_tool(name: str, request: ToolCallRequest):
            """Call a tool with a JSON object of arguments."""
            if name not in self._registry:
                raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")

            result = await self._executor.execute(
                name, request.arguments, call_id=request.call_id
            )
            return ToolCallResponse(**result.to_dict())


def create_app(registry: Optional[ToolRegistry] = None) -> FastAPI:
    """Create the FastAPI application."""
    bus = ServiceBus(registry)
    return bus.create_app()
