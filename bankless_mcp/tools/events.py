"""Event-log tools."""

from __future__ import annotations

from typing import Any

from bankless_mcp.bankless_api import default_client
from bankless_mcp.schemas import BuildEventTopicArgs, GetEventLogsArgs
from bankless_mcp.tools.paths import internal_chain_path


async def get_events(args: GetEventLogsArgs, client=default_client) -> Any:
    """Fetch event logs matching the address list and topic filters."""
    payload = {
        "addresses": list(args.addresses),
        "topic": args.topic,
        # Null entries are wildcards at their topic position.
        "optionalTopics": list(args.optional_topics or []),
    }
    return await client.call(
        "POST",
        f"{internal_chain_path(args.network)}/events/logs",
        payload,
        action="fetch event logs",
    )


async def build_event_topic(args: BuildEventTopicArgs, client=default_client) -> Any:
    """Return the topic hash for an event signature, exactly as the API sends it."""
    payload = {
        "name": args.name,
        "arguments": [item.model_dump() for item in args.arguments],
    }
    return await client.call(
        "POST",
        f"{internal_chain_path(args.network)}/contract/build-event-topic",
        payload,
        action="build event topic",
    )
