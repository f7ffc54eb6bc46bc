"""HTTP client and error taxonomy for the Bankless API."""

from .client import BanklessApiClient, default_client
from .errors import (
    BanklessAuthenticationError,
    BanklessError,
    BanklessGenericError,
    BanklessRateLimitError,
    BanklessResourceNotFoundError,
    BanklessValidationError,
    ErrorKind,
    is_bankless_error,
)

__all__ = [
    "BanklessApiClient",
    "BanklessError",
    "BanklessAuthenticationError",
    "BanklessValidationError",
    "BanklessResourceNotFoundError",
    "BanklessRateLimitError",
    "BanklessGenericError",
    "ErrorKind",
    "is_bankless_error",
    "default_client",
]
