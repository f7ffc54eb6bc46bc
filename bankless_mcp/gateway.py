"""
JSON-RPC handling behind the HTTP MCP gateway.

Supported methods:
  - initialize
  - ping
  - list_tools / tools/list
  - call_tool / tools/call
  - notifications (any message without an id; never answered)

The FastAPI route feeds decoded messages through ``handle_message``. The
stdio server in ``bankless_mcp.stdio`` speaks the protocol through the MCP SDK
and shares ``invoke_tool`` so both transports log and count tool calls alike.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from bankless_mcp import __version__, mcp
from bankless_mcp.bankless_api import BanklessApiClient
from bankless_mcp.metrics import default_metrics

logger = logging.getLogger(__name__)

MCP_SERVER_NAME = "bankless-onchain-mcp-server"
MCP_SERVER_VERSION = __version__

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


@dataclass(slots=True)
class RpcReply:
    """JSON-RPC payload to send back; ``payload`` is None for notifications."""

    payload: Optional[Dict[str, Any]]
    status_code: int = 200


def jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}


def parse_error_reply() -> RpcReply:
    return RpcReply(jsonrpc_error_payload(None, PARSE_ERROR, "Parse error"), status_code=400)


def _text_content(text: str, *, is_error: bool = False) -> Dict[str, Any]:
    wrapped: Dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        wrapped["isError"] = True
    return wrapped


def _log_tool_result(
    tool_name: str,
    *,
    error: Optional[str] = None,
    error_kind: Optional[str] = None,
    request_id: Optional[str] = None,
) -> None:
    if error is not None:
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool_name,
            error,
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": error},
        )
        default_metrics.record_tool(tool_name, success=False, error_kind=error_kind)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            tool_name,
            request_id,
            extra={"tool": tool_name, "request_id": request_id},
        )
        default_metrics.record_tool(tool_name, success=True)


def _error_kind(exc: mcp.ToolCallError) -> str:
    if isinstance(exc, mcp.ToolExecutionError):
        return exc.error.kind.value
    if isinstance(exc, mcp.InvalidInputError):
        return "invalid_input"
    if isinstance(exc, mcp.UnknownToolError):
        return "unknown_tool"
    return "missing_arguments"


async def invoke_tool(
    tool_name: str,
    arguments: Optional[Dict[str, Any]],
    *,
    request_id: Optional[str] = None,
    client: Optional[BanklessApiClient] = None,
) -> str:
    """
    Run one tool call and record its outcome in the logs and metrics.

    Every exception is re-raised after it is recorded; callers decide how a
    ``ToolCallError`` or an unexpected crash reaches their transport.
    """
    start = time.perf_counter()
    try:
        text = await mcp.call_tool(tool_name, arguments, client=client)
    except mcp.ToolCallError as exc:
        _log_tool_result(tool_name, error=str(exc), error_kind=_error_kind(exc), request_id=request_id)
        raise
    except Exception:
        logger.exception(
            "tool=%s outcome=crash request_id=%s",
            tool_name,
            request_id,
            extra={"tool": tool_name, "request_id": request_id},
        )
        default_metrics.record_tool(tool_name, success=False, error_kind="internal")
        raise

    logger.debug("tool=%s duration_ms=%.2f", tool_name, (time.perf_counter() - start) * 1000)
    _log_tool_result(tool_name, request_id=request_id)
    return text


async def _call_tool(
    rpc_id: Any,
    params: Dict[str, Any],
    *,
    request_id: Optional[str],
    client: Optional[BanklessApiClient],
) -> RpcReply:
    tool_name = params.get("name") or params.get("tool")
    if not isinstance(tool_name, str) or not tool_name.strip():
        return RpcReply(jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params"))

    arguments = params.get("arguments")
    if arguments is None:
        arguments = params.get("params")
    if arguments is not None and not isinstance(arguments, dict):
        return RpcReply(jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params"))

    try:
        text = await invoke_tool(tool_name, arguments, request_id=request_id, client=client)
    except mcp.ToolCallError as exc:
        return RpcReply(jsonrpc_success_payload(rpc_id, _text_content(str(exc), is_error=True)))
    except Exception as exc:
        # Not a domain failure; reported as an internal JSON-RPC error.
        return RpcReply(jsonrpc_error_payload(rpc_id, INTERNAL_ERROR, str(exc) or type(exc).__name__))
    return RpcReply(jsonrpc_success_payload(rpc_id, _text_content(text)))


async def handle_message(
    body: Any,
    *,
    request_id: Optional[str] = None,
    client: Optional[BanklessApiClient] = None,
) -> RpcReply:
    """Handle one decoded JSON-RPC message."""
    if not isinstance(body, dict):
        return RpcReply(jsonrpc_error_payload(None, INVALID_REQUEST, "Invalid request"), status_code=400)

    if "id" not in body:
        # Notifications never get a reply, known or not.
        logger.debug("mcp notification method=%s request_id=%s", body.get("method"), request_id)
        return RpcReply(None, status_code=204)

    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params: Dict[str, Any] = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        return RpcReply(jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params"))

    if not isinstance(method, str) or not method:
        return RpcReply(jsonrpc_error_payload(rpc_id, INVALID_REQUEST, "Invalid request"))

    logger.debug("mcp method=%s id=%s request_id=%s", method, rpc_id, request_id, extra={"request_id": request_id})

    if method == "initialize":
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str) or not protocol_version:
            return RpcReply(jsonrpc_error_payload(rpc_id, INVALID_PARAMS, "Invalid params"))
        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
            "capabilities": {"tools": {"listChanged": False}},
        }
        return RpcReply(jsonrpc_success_payload(rpc_id, result))

    if method == "ping":
        return RpcReply(jsonrpc_success_payload(rpc_id, {}))

    if method in ("list_tools", "tools/list"):
        return RpcReply(jsonrpc_success_payload(rpc_id, {"tools": mcp.list_tools()}))

    if method in ("call_tool", "tools/call"):
        return await _call_tool(rpc_id, params, request_id=request_id, client=client)

    return RpcReply(jsonrpc_error_payload(rpc_id, METHOD_NOT_FOUND, "Method not found"))
