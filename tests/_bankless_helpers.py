"""Mock HTTP plumbing shared by the Bankless MCP tests."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from bankless_mcp.bankless_api.client import BanklessApiClient
from bankless_mcp.config import BanklessConfig

TEST_TOKEN = "test-token"
NO_JSON = object()

GOOD_ARGS: Dict[str, Dict[str, Any]] = {
    "read_contract": {
        "network": "ethereum",
        "contract": "0x6B175474E89094C44Da98b954EedeAC495271d0F",
        "method": "balanceOf",
        "inputs": [{"type": "address", "value": "0x28C6c06298d514Db089934071355E5743bf21d60"}],
        "outputs": [{"type": "uint256"}],
    },
    "get_proxy": {"network": "ethereum", "contract": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"},
    "get_abi": {"network": "ethereum", "contract": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"},
    "get_source": {"network": "base", "contract": "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"},
    "get_events": {
        "network": "ethereum",
        "addresses": ["0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"],
        "topic": "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef",
    },
    "build_event_topic": {
        "network": "ethereum",
        "name": "Transfer(address,address,uint256)",
        "arguments": [{"type": "address"}, {"type": "address"}, {"type": "uint256"}],
    },
    "get_transaction_history": {"network": "ethereum", "user": "0x28C6c06298d514Db089934071355E5743bf21d60"},
    "get_native_balance": {"network": "ethereum", "address": "0x28C6c06298d514Db089934071355E5743bf21d60"},
    "get_token_balances_on_network": {"network": "base", "address": "0x28C6c06298d514Db089934071355E5743bf21d60"},
}


class MockResponse:
    def __init__(
        self,
        status_code: int,
        json_body: Any = NO_JSON,
        *,
        text: str = "",
        headers: Optional[Dict[str, str]] = None,
        reason_phrase: str = "",
    ):
        self.status_code = status_code
        self._json = json_body
        self.text = text
        self.headers = headers or {}
        self.reason_phrase = reason_phrase

    def json(self):
        if self._json is NO_JSON:
            raise ValueError("no json")
        return self._json


class MockAsyncClient:
    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    async def request(self, method, path, json=None, headers=None):
        self.calls.append({"method": method, "path": path, "json": json, "headers": headers})
        if not self.responses:
            raise RuntimeError("No mock responses")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def aclose(self):
        self.closed = True


def make_client(responses=None, *, token: Optional[str] = TEST_TOKEN):
    mock = MockAsyncClient(responses)
    client = BanklessApiClient(BanklessConfig(api_token=token), async_client=mock)
    return client, mock
