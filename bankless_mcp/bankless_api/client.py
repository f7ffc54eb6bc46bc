"""
Thin HTTP client for the Bankless blockchain-data API.

Every call is authenticated with the configured token and every failure is
classified into the domain error taxonomy so the tool dispatcher can turn it
into a caller-facing message. No retries are performed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx

from bankless_mcp.bankless_api.errors import (
    BanklessAuthenticationError,
    BanklessError,
    BanklessGenericError,
    BanklessRateLimitError,
    BanklessResourceNotFoundError,
    BanklessValidationError,
)
from bankless_mcp.config import API_TOKEN_ENV_VAR, API_TOKEN_HEADER, BanklessConfig, default_config

logger = logging.getLogger(__name__)

ALLOWED_METHODS = frozenset({"GET", "POST"})

_NOT_JSON = object()


def _parse_retry_after(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        seconds = int(raw.strip())
    except (AttributeError, ValueError):
        return None
    if seconds < 0:
        return None
    return seconds


class BanklessApiClient:
    """Async adapter issuing one authenticated request per tool invocation."""

    def __init__(
        self,
        config: BanklessConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url.rstrip("/"), timeout=self.config.timeout
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, token: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            API_TOKEN_HEADER: token,
        }

    def _rate_limit_reset(self, response: httpx.Response) -> datetime:
        # Never later than the configured window.
        seconds = self.config.rate_limit_reset_seconds
        retry_after = _parse_retry_after(response.headers.get("Retry-After"))
        if retry_after is not None:
            seconds = min(retry_after, seconds)
        return datetime.now(timezone.utc) + timedelta(seconds=seconds)

    def _map_error(
        self,
        response: httpx.Response,
        body: Any,
        *,
        not_found_message: Optional[str] = None,
    ) -> BanklessError:
        status_code = response.status_code
        message: Optional[str] = None
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            message = body["message"]
        if not message:
            message = response.reason_phrase or "Request failed"

        if status_code in {401, 403}:
            return BanklessAuthenticationError(message, status_code=status_code)
        if status_code == 404:
            return BanklessResourceNotFoundError(
                not_found_message or message, status_code=status_code
            )
        if status_code == 422:
            return BanklessValidationError(message, body, status_code=status_code)
        if status_code == 429:
            return BanklessRateLimitError(
                message, self._rate_limit_reset(response), status_code=status_code
            )
        return BanklessGenericError(
            f"Bankless API Error ({status_code}): {message}", status_code=status_code
        )

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return _NOT_JSON

    async def call(
        self,
        method: str,
        path: str,
        payload: Any = None,
        *,
        not_found_message: Optional[str] = None,
        action: Optional[str] = None,
    ) -> Any:
        """
        Perform one request against the Bankless API.

        Args:
            method: "GET" or "POST". GET requests never carry a body.
            path: Endpoint path appended to the configured base URL.
            payload: JSON body for POST requests.
            not_found_message: Message used for a 404, naming the missing resource.
            action: Short description used in transport failure messages.

        Returns:
            The decoded JSON body, or the raw text when the body is not JSON.

        Raises:
            BanklessError: classified failure; never retried.
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        token = self.config.resolve_api_token()
        if not token:
            raise BanklessAuthenticationError(f"{API_TOKEN_ENV_VAR} environment variable is not set")

        client = await self._get_client()
        headers = self._build_headers(token)
        try:
            if method == "POST":
                response = await client.request(method, path, json=payload, headers=headers)
            else:
                response = await client.request(method, path, headers=headers)
        except httpx.RequestError as exc:
            logger.warning("Bankless API unreachable method=%s path=%s", method, path)
            raise BanklessGenericError(
                f"Failed to {action or 'call Bankless API'}: {exc}"
            ) from exc

        if response.status_code >= 400:
            body = self._decode_body(response)
            if body is _NOT_JSON:
                body = None
            error = self._map_error(response, body, not_found_message=not_found_message)
            logger.warning(
                "Bankless API error method=%s path=%s status=%s kind=%s",
                method,
                path,
                response.status_code,
                error.kind.value,
            )
            raise error

        body = self._decode_body(response)
        if body is _NOT_JSON:
            # Some endpoints answer with a bare string rather than JSON.
            return response.text
        return body


default_client = BanklessApiClient()
