"""FastAPI application exposing the Bankless MCP tools over HTTP JSON-RPC."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from bankless_mcp import __version__, gateway
from bankless_mcp.bankless_api import default_client
from bankless_mcp.metrics import default_metrics

logger = logging.getLogger(__name__)

HEALTH_STATUS = {"status": "ok"}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Startup
    yield
    # Shutdown
    await default_client.aclose()


app = FastAPI(
    title="Bankless Onchain MCP Server",
    description="Bankless blockchain-data tool surface for LLM agents.",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    default_metrics.incr_request()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    default_metrics.record_duration(request_id, duration_ms)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content=HEALTH_STATUS)


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Return in-process metrics snapshot."""
    return JSONResponse(content=default_metrics.snapshot())


@app.post("/mcp")
async def mcp_gateway(request: Request) -> Response:
    """JSON-RPC gateway for MCP clients; see bankless_mcp.gateway for methods."""
    request_id = getattr(request.state, "request_id", None)
    try:
        body = await request.json()
    except ValueError:
        reply = gateway.parse_error_reply()
    else:
        reply = await gateway.handle_message(body, request_id=request_id)

    if reply.payload is None:
        # Notifications should not return a JSON-RPC response body.
        return Response(status_code=204)
    return JSONResponse(status_code=reply.status_code, content=reply.payload)


# Run with: uvicorn bankless_mcp.server:app --reload
