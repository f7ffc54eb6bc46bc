"""
Tool catalog and dispatcher for the MCP surface.

The registry is fixed at import time. ``call_tool`` validates arguments against
the tool's schema, runs the handler and renders Bankless domain errors into a
single caller-facing message. Unexpected exceptions are not reformatted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type, assert_never

from pydantic import ValidationError

from bankless_mcp.bankless_api import (
    BanklessApiClient,
    BanklessError,
    BanklessRateLimitError,
    BanklessValidationError,
    ErrorKind,
    default_client,
    is_bankless_error,
)
from bankless_mcp.schemas import (
    BuildEventTopicArgs,
    GetAbiArgs,
    GetEventLogsArgs,
    GetProxyArgs,
    GetSourceArgs,
    NativeBalanceArgs,
    ReadContractArgs,
    TokenBalancesOnNetworkArgs,
    ToolArguments,
    TransactionHistoryArgs,
    describe_schema,
    validate_arguments,
)
from bankless_mcp.tools import (
    build_event_topic,
    get_abi,
    get_events,
    get_native_balance,
    get_proxy,
    get_source,
    get_token_balances_on_network,
    get_transaction_history,
    read_contract,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Awaitable[Any]]


class ToolCallError(Exception):
    """A tool invocation failed; the message is safe to show to the caller."""


class MissingArgumentsError(ToolCallError):
    def __init__(self) -> None:
        super().__init__("Arguments are required")


class UnknownToolError(ToolCallError):
    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class InvalidInputError(ToolCallError):
    """Local schema validation failed before any remote call."""

    def __init__(self, violations: List[Dict[str, Any]]) -> None:
        super().__init__(f"Invalid input: {json.dumps(violations, default=str)}")
        self.violations = violations


class ToolExecutionError(ToolCallError):
    """The handler raised a Bankless domain error."""

    def __init__(self, error: BanklessError) -> None:
        super().__init__(format_bankless_error(error))
        self.error = error


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    name: str
    description: str
    args_model: Type[ToolArguments]
    handler: ToolHandler

    def input_schema(self) -> Dict[str, Any]:
        return describe_schema(self.args_model)


def _register(*definitions: ToolDefinition) -> Dict[str, ToolDefinition]:
    registry: Dict[str, ToolDefinition] = {}
    for definition in definitions:
        if definition.name in registry:
            raise ValueError(f"Duplicate tool name: {definition.name}")
        registry[definition.name] = definition
    return registry


TOOL_REGISTRY: Dict[str, ToolDefinition] = _register(
    ToolDefinition(
        name="read_contract",
        description="Read contract state from a blockchain",
        args_model=ReadContractArgs,
        handler=read_contract,
    ),
    ToolDefinition(
        name="get_proxy",
        description="Gets the proxy address for a given network and contract",
        args_model=GetProxyArgs,
        handler=get_proxy,
    ),
    ToolDefinition(
        name="get_abi",
        description="Gets the ABI for a given contract on a specific network",
        args_model=GetAbiArgs,
        handler=get_abi,
    ),
    ToolDefinition(
        name="get_source",
        description="Gets the source code for a given contract on a specific network",
        args_model=GetSourceArgs,
        handler=get_source,
    ),
    ToolDefinition(
        name="get_events",
        description="Fetches event logs for a given network and filter criteria",
        args_model=GetEventLogsArgs,
        handler=get_events,
    ),
    ToolDefinition(
        name="build_event_topic",
        description="Builds an event topic signature based on event name and arguments",
        args_model=BuildEventTopicArgs,
        handler=build_event_topic,
    ),
    ToolDefinition(
        name="get_transaction_history",
        description="Gets transaction history for a user and optional contract",
        args_model=TransactionHistoryArgs,
        handler=get_transaction_history,
    ),
    ToolDefinition(
        name="get_native_balance",
        description="Gets the native token balance for an address on a specific network",
        args_model=NativeBalanceArgs,
        handler=get_native_balance,
    ),
    ToolDefinition(
        name="get_token_balances_on_network",
        description="Gets all token balances, prices and dollar values for an address on a network",
        args_model=TokenBalancesOnNetworkArgs,
        handler=get_token_balances_on_network,
    ),
)


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_bankless_error(error: BanklessError) -> str:
    """Render a domain error as one caller-facing message, keyed on its kind."""
    kind = error.kind
    if kind is ErrorKind.VALIDATION:
        message = f"Validation Error: {error.message}"
        detail = error.detail if isinstance(error, BanklessValidationError) else None
        if detail is not None:
            message += f"\nDetails: {json.dumps(detail, default=str)}"
        return message
    if kind is ErrorKind.RESOURCE_NOT_FOUND:
        return f"Not Found: {error.message}"
    if kind is ErrorKind.AUTHENTICATION:
        return f"Authentication Failed: {error.message}"
    if kind is ErrorKind.RATE_LIMIT:
        message = f"Rate Limit Exceeded: {error.message}"
        if isinstance(error, BanklessRateLimitError):
            message += f"\nResets at: {_format_timestamp(error.reset_at)}"
        return message
    if kind is ErrorKind.GENERIC:
        return f"Bankless API Error: {error.message}"
    assert_never(kind)


def list_tools() -> List[Dict[str, Any]]:
    """Return every registered tool with its advertised input schema."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "inputSchema": tool.input_schema(),
        }
        for tool in TOOL_REGISTRY.values()
    ]


def render_result(result: Any) -> str:
    """Serialize a handler result as text; plain strings pass through untouched."""
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2)


async def call_tool(
    tool_name: str,
    arguments: Optional[Mapping[str, Any]],
    *,
    client: Optional[BanklessApiClient] = None,
) -> str:
    """
    Dispatch one invocation to its handler.

    Returns:
        The handler result rendered as text.

    Raises:
        ToolCallError: missing arguments, unknown tool, invalid input, or a
            Bankless domain error raised by the handler.
    """
    if arguments is None:
        raise MissingArgumentsError()

    tool = TOOL_REGISTRY.get(tool_name)
    if tool is None:
        raise UnknownToolError(tool_name)

    try:
        args = validate_arguments(tool.args_model, arguments)
    except ValidationError as exc:
        violations = exc.errors(include_url=False, include_context=False)
        logger.info("tool=%s outcome=invalid_input violations=%d", tool_name, len(violations))
        raise InvalidInputError(violations) from exc

    try:
        result = await tool.handler(args, client=client or default_client)
    except Exception as exc:
        if is_bankless_error(exc):
            raise ToolExecutionError(exc) from exc
        raise
    return render_result(result)
