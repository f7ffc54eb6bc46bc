"""Domain error taxonomy for Bankless API failures."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    RATE_LIMIT = "rate_limit"
    GENERIC = "generic"


class BanklessError(Exception):
    """Base exception for classified Bankless API errors."""

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BanklessAuthenticationError(BanklessError):
    """Raised when the token is missing or rejected upstream (401/403)."""

    kind = ErrorKind.AUTHENTICATION


class BanklessValidationError(BanklessError):
    """Raised when the upstream rejects semantically invalid arguments (422)."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        detail: Any = None,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.detail = detail


class BanklessResourceNotFoundError(BanklessError):
    """Raised when the requested network, contract or address does not exist (404)."""

    kind = ErrorKind.RESOURCE_NOT_FOUND


class BanklessRateLimitError(BanklessError):
    """Raised on upstream throttling (429); reset_at is a UTC timestamp."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str,
        reset_at: datetime,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.reset_at = reset_at


class BanklessGenericError(BanklessError):
    """Fallback for any other status or a transport failure."""

    kind = ErrorKind.GENERIC


def is_bankless_error(error: object) -> bool:
    return isinstance(error, BanklessError)
