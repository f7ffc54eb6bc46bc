"""LLM-facing tool implementations."""

from .contracts import get_abi, get_proxy, get_source, read_contract
from .events import build_event_topic, get_events
from .transactions import get_transaction_history
from .tokens import get_native_balance, get_token_balances_on_network

__all__ = [
    "read_contract",
    "get_proxy",
    "get_abi",
    "get_source",
    "get_events",
    "build_event_topic",
    "get_transaction_history",
    "get_native_balance",
    "get_token_balances_on_network",
]
