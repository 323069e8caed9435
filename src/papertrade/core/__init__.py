"""Core utilities and shared functionality."""

from papertrade.core.timezone import (
    now_eastern,
    to_eastern,
    to_naive_eastern,
    parse_datetime_eastern,
    EASTERN_TZ,
)
from papertrade.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InvalidOrderError,
    PriceUnavailableError,
    InsufficientFundsError,
    InsufficientHoldingsError,
    UserNotFoundError,
    UnauthenticatedError,
    StorageConflictError,
    StorageFailureError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "to_naive_eastern",
    "parse_datetime_eastern",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InvalidOrderError",
    "PriceUnavailableError",
    "InsufficientFundsError",
    "InsufficientHoldingsError",
    "UserNotFoundError",
    "UnauthenticatedError",
    "StorageConflictError",
    "StorageFailureError",
]
