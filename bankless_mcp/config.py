"""
Configuration helpers for the Bankless Onchain MCP server.

This module centralizes base URL selection, API token lookup, the HTTP timeout
and logging settings. No secrets are stored in the repository; the API token is
read from the environment on every outbound call unless passed explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

# Default connection settings
DEFAULT_BASE_URL = os.getenv("BANKLESS_API_BASE_URL", "https://api.bankless.com")


def _load_timeout() -> float:
    raw_timeout = os.getenv("BANKLESS_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return 30.0
    return 30.0


DEFAULT_TIMEOUT = _load_timeout()

# API token handling
API_TOKEN_ENV_VAR = "BANKLESS_API_TOKEN"
API_TOKEN_HEADER = "X-BANKLESS-TOKEN"

# Rate-limit cooldown used when the upstream gives no usable Retry-After
DEFAULT_RATE_LIMIT_RESET_SECONDS = 60

LOG_LEVEL = os.getenv("BANKLESS_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("BANKLESS_MCP_LOG_FORMAT", "json")  # json or plain


def load_api_token() -> Optional[str]:
    """
    Read the Bankless API token from the environment.

    Returns:
        The token string if set and non-blank, otherwise None. The token is
        never logged or returned to callers.
    """
    env_token = os.getenv(API_TOKEN_ENV_VAR)
    if env_token and env_token.strip():
        return env_token.strip()
    return None


@dataclass(slots=True)
class BanklessConfig:
    """Runtime configuration for Bankless API access."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    # Explicit token; when None the environment is consulted on every call.
    api_token: Optional[str] = None
    rate_limit_reset_seconds: int = DEFAULT_RATE_LIMIT_RESET_SECONDS
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT

    def resolve_api_token(self) -> Optional[str]:
        if self.api_token:
            return self.api_token
        return load_api_token()


default_config = BanklessConfig()
