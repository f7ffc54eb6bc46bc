"""Transaction history tool."""

from __future__ import annotations

from typing import Any

from bankless_mcp.bankless_api import default_client
from bankless_mcp.schemas import TransactionHistoryArgs
from bankless_mcp.tools.paths import internal_chain_path


async def get_transaction_history(args: TransactionHistoryArgs, client=default_client) -> Any:
    """
    List transactions sent by a user, optionally narrowed to one contract,
    one method selector, or blocks from ``startBlock`` onwards.
    """
    payload = {
        "user": args.user,
        "contract": args.contract,
        "methodId": args.method_id,
        "startBlock": args.start_block,
        "includeData": args.include_data,
    }
    return await client.call(
        "POST",
        f"{internal_chain_path(args.network)}/transaction-history",
        payload,
        action="get transaction history",
    )
