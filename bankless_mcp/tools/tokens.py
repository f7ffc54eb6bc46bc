"""Balance tools served by the MCP surface of the Bankless API."""

from __future__ import annotations

import logging
from typing import Any

from bankless_mcp.bankless_api import BanklessGenericError, default_client
from bankless_mcp.schemas import NativeBalanceArgs, TokenBalancesOnNetworkArgs
from bankless_mcp.tools.paths import encode_segment

logger = logging.getLogger(__name__)


def _to_wei(raw_balance: Any) -> int:
    """Convert the numeric-string balance to an int without passing through float."""
    if isinstance(raw_balance, bool):
        raise ValueError("boolean is not a balance")
    if isinstance(raw_balance, float):
        raise ValueError("float balance would lose precision")
    text = str(raw_balance).strip()
    digits = text[1:] if text.startswith("-") else text
    if not (digits.isascii() and digits.isdecimal()):
        raise ValueError(f"not an integer balance: {text!r}")
    return int(text)


async def get_native_balance(args: NativeBalanceArgs, client=default_client) -> int:
    """
    Fetch the native token balance of an address.

    Returns:
        The balance in the chain's smallest unit as an unbounded int.
    """
    network = encode_segment(args.network)
    address = encode_segment(args.address)
    raw_balance = await client.call(
        "GET",
        f"/mcp/chains/{network}/balance/{address}",
        not_found_message=f"Address not found: {args.address}",
        action="get native balance",
    )
    try:
        return _to_wei(raw_balance)
    except (TypeError, ValueError) as exc:
        logger.warning("Unexpected native balance payload for %s on %s", args.address, args.network)
        raise BanklessGenericError("Unexpected balance response from Bankless API.") from exc


async def get_token_balances_on_network(
    args: TokenBalancesOnNetworkArgs, client=default_client
) -> Any:
    """Fetch every token balance with price and dollar value, plus the total."""
    network = encode_segment(args.network)
    address = encode_segment(args.address)
    return await client.call(
        "GET",
        f"/mcp/token/balance/{address}/{network}",
        not_found_message=f"Address or network not found: {args.address} on {args.network}",
        action="get token balances",
    )
