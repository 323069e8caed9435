"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InvalidOrderError(AppError):
    """Raised when an order is malformed (non-positive quantity, unknown side)."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_ORDER")


class PriceUnavailableError(AppError):
    """Raised when no usable price can be obtained for a symbol. Retryable."""

    status_code = 503

    def __init__(self, symbol: str, reason: str = "no quote available"):
        self.symbol = symbol
        super().__init__(f"Price unavailable for {symbol}: {reason}", code="PRICE_UNAVAILABLE")


class InsufficientFundsError(AppError):
    """Raised when a buy costs more than the available cash balance."""

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class InsufficientHoldingsError(AppError):
    """Raised when attempting to sell more shares than owned."""

    def __init__(self, symbol: str, requested: int, available: int):
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_HOLDINGS",
        )


class UserNotFoundError(AppError):
    """Raised when the acting user does not exist.

    The message stays generic: callers see an authentication problem,
    not which identifiers exist.
    """

    status_code = 401

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("Unknown user", code="USER_NOT_FOUND")


class UnauthenticatedError(AppError):
    """Raised when a credential cannot be resolved to a user."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHENTICATED")


class StorageConflictError(AppError):
    """Raised on a unique-constraint or concurrent-update conflict. Retryable no-op."""

    status_code = 409

    def __init__(self, message: str = "Concurrent modification detected, please retry"):
        super().__init__(message, code="STORAGE_CONFLICT")


class StorageFailureError(AppError):
    """Raised when persistence fails mid-transaction; the unit was rolled back."""

    status_code = 500

    def __init__(self, message: str = "Internal storage error"):
        super().__init__(message, code="STORAGE_FAILURE")
