"""FastAPI MCP Server for Directus."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from . import __version__
from .config import Settings, settings as default_settings
from .directus import DirectusClient
from .exceptions import UnknownToolError
from .mcp import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    build_tool_definitions,
    jsonrpc_error,
    jsonrpc_response,
)
from .models import HealthResponse
from .schema import SchemaCache
from .tools import ToolContext, ToolDefinition, execute_tool, find_tool, get_tools

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "Directus MCP Server"


@dataclass
class ServerContext:
    """Process-wide state owned by the app: one client, one schema cache, the enabled tools."""

    settings: Settings
    client: DirectusClient
    schema: SchemaCache
    tools: list[ToolDefinition]

    @classmethod
    def from_settings(cls, settings: Settings, client: DirectusClient) -> "ServerContext":
        return cls(
            settings=settings,
            client=client,
            schema=SchemaCache(client, settings.schema_limits),
            tools=get_tools(settings),
        )

    @property
    def tool_context(self) -> ToolContext:
        return ToolContext(client=self.client, schema=self.schema, settings=self.settings)


def log_level(settings: Settings) -> str:
    """DEBUG overrides LOG_LEVEL."""
    return "DEBUG" if settings.debug else settings.log_level.upper()


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr so stdout stays free for protocol traffic."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _filter_sentry_event(event: dict) -> dict:
    """Remove credentials from Sentry events."""
    if "request" in event and "headers" in event["request"]:
        headers = event["request"]["headers"]
        for key in ["authorization", "cookie"]:
            if key in headers:
                headers[key] = "[REDACTED]"
    return event


def init_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        logger.debug("Sentry DSN not configured - error tracking disabled")
        return
    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.starlette import StarletteIntegration

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1 if settings.environment == "production" else 1.0,
            integrations=[FastApiIntegration(), StarletteIntegration()],
            before_send=lambda event, hint: _filter_sentry_event(event),
        )
        logger.info("Sentry error tracking initialized")
    except ImportError:
        logger.warning("Sentry DSN configured but sentry-sdk not installed")


# ============ JSON-RPC HANDLING ============


async def _handle_call_tool(id: Any, params: dict, context: ServerContext) -> dict:
    """Handle MCP tools/call request."""
    name = params.get("name", "")
    arguments = params.get("arguments") or {}

    try:
        tool = find_tool(context.tools, name)
    except UnknownToolError as e:
        return jsonrpc_error(id, INVALID_PARAMS, str(e))

    try:
        result = await execute_tool(tool, arguments, context.tool_context)
    except ValidationError as e:
        return jsonrpc_error(id, INVALID_PARAMS, f"Invalid arguments for {name}: {e}")

    return jsonrpc_response(id, result.to_mcp())


async def handle_jsonrpc_request(body: Any, context: ServerContext) -> dict | None:
    """Handle a single JSON-RPC request. Returns None for notifications."""
    if not isinstance(body, dict):
        return jsonrpc_error(None, INVALID_REQUEST, "Invalid request")

    method = body.get("method")
    id = body.get("id")
    params = body.get("params") or {}

    if id is None:  # Notification - no response
        return None

    if not isinstance(params, dict):
        return jsonrpc_error(id, INVALID_PARAMS, "params must be an object")

    if method == "initialize":
        return jsonrpc_response(
            id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
                "capabilities": {"tools": {}},
            },
        )
    elif method == "tools/list":
        return jsonrpc_response(id, {"tools": build_tool_definitions(context.tools)})
    elif method == "tools/call":
        return await _handle_call_tool(id, params, context)
    elif method == "ping":
        return jsonrpc_response(id, {})
    else:
        return jsonrpc_error(id, METHOD_NOT_FOUND, f"Method not found: {method}")


# ============ APP ============


def create_app(context: ServerContext | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        context: Prebuilt server context (tests); when omitted the lifespan
            connects to Directus using settings
        settings: Settings used to build the context (defaults to environment)
    """
    settings = settings or (context.settings if context else default_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"Starting {SERVER_NAME} v{__version__}")
        owns_client = app.state.context is None
        if owns_client:
            client = DirectusClient.from_settings(settings)
            await client.authenticate()
            app.state.context = ServerContext.from_settings(settings, client)
        logger.info(f"{len(app.state.context.tools)} tools enabled")

        yield

        if owns_client:
            await app.state.context.client.aclose()

    app = FastAPI(
        title=SERVER_NAME,
        description="MCP endpoint exposing token-efficient Directus tools",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = context

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=jsonrpc_error(None, INTERNAL_ERROR, "An internal server error occurred."),
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request) -> HealthResponse:
        """Liveness check; reports whether the schema has been loaded."""
        ctx: ServerContext | None = request.app.state.context
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            schema_loaded=ctx.schema.is_loaded if ctx else False,
            tools=len(ctx.tools) if ctx else 0,
        )

    @app.post("/mcp", tags=["MCP Transport"])
    async def mcp_transport_endpoint(request: Request):
        """MCP Streamable HTTP endpoint (JSON-RPC format)."""
        ctx: ServerContext = request.app.state.context

        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(jsonrpc_error(None, PARSE_ERROR, "Parse error"), status_code=400)

        if isinstance(body, list):
            responses = []
            for req in body:
                resp = await handle_jsonrpc_request(req, ctx)
                if resp:  # Skip notifications (no id)
                    responses.append(resp)
            return JSONResponse(responses) if responses else Response(status_code=204)

        response = await handle_jsonrpc_request(body, ctx)
        return JSONResponse(response) if response else Response(status_code=204)

    return app


# ============ MAIN ============


def main():
    """Run the server with uvicorn."""
    import uvicorn

    configure_logging(log_level(default_settings))
    init_sentry(default_settings)
    uvicorn.run(
        create_app(settings=default_settings),
        host=default_settings.host,
        port=default_settings.port,
        log_level=log_level(default_settings).lower(),
    )


if __name__ == "__main__":
    main()
