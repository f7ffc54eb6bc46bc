"""Contract-related tools: state reads, proxy resolution, ABI and source lookup."""

from __future__ import annotations

from typing import Any

from bankless_mcp.bankless_api import default_client
from bankless_mcp.schemas import GetAbiArgs, GetProxyArgs, GetSourceArgs, ReadContractArgs
from bankless_mcp.tools.paths import encode_segment, internal_chain_path


async def read_contract(args: ReadContractArgs, client=default_client) -> Any:
    """
    Read contract state from a blockchain.

    Args:
        args: Validated read_contract arguments.
        client: Bankless API client (override for testing).

    Returns:
        Ordered list of ``{"value", "type"}`` entries, one per requested output.
    """
    payload = {
        "contract": args.contract,
        "method": args.method,
        "inputs": [item.model_dump() for item in args.inputs],
        "outputs": [item.model_dump() for item in args.outputs],
    }
    return await client.call(
        "POST",
        f"{internal_chain_path(args.network)}/contract/read",
        payload,
        action="read contract state",
    )


async def get_proxy(args: GetProxyArgs, client=default_client) -> Any:
    """Resolve the implementation address behind a proxy contract."""
    contract = encode_segment(args.contract)
    return await client.call(
        "GET",
        f"{internal_chain_path(args.network)}/contract/{contract}/find-proxy",
        action="get proxy information",
    )


async def get_abi(args: GetAbiArgs, client=default_client) -> Any:
    """Fetch the verified ABI for a contract."""
    contract = encode_segment(args.contract)
    return await client.call(
        "GET",
        f"{internal_chain_path(args.network)}/get_abi/{contract}",
        action="get contract ABI",
    )


async def get_source(args: GetSourceArgs, client=default_client) -> Any:
    """Fetch verified source code, including proxy/implementation hints."""
    contract = encode_segment(args.contract)
    return await client.call(
        "GET",
        f"{internal_chain_path(args.network)}/get_source/{contract}",
        action="get contract source",
    )
