"""
Bankless Onchain MCP server package.

This package exposes LLM-friendly tools backed by the Bankless blockchain-data
API. See DESIGN.md for full details.
"""

__version__ = "1.0.6"

__all__ = ["__version__", "config"]
