"""Shared endpoint path helpers for Bankless MCP tools."""

from __future__ import annotations

from urllib.parse import quote


def encode_segment(value: str) -> str:
    """Percent-encode one path segment; the value is otherwise passed through untouched."""
    return quote(value, safe="")


def internal_chain_path(network: str) -> str:
    return f"/internal/chains/{encode_segment(network)}"
