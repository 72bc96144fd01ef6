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


class InvalidSideError(ValidationError):
    """Raised when an order side is not buy or sell."""

    def __init__(self, side: str):
        super().__init__(f"Invalid order side: {side!r} (expected 'buy' or 'sell')")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class UnknownBucketError(NotFoundError):
    """Raised when a market bucket is not in the registry."""

    def __init__(self, bucket: str):
        super().__init__("Market bucket", bucket)


class AuthenticationError(AppError):
    """Raised when a bearer credential is missing, malformed or expired."""

    status_code = 401

    def __init__(self, message: str = "Bearer token required"):
        super().__init__(message, code="UNAUTHENTICATED")


class ForbiddenError(AppError):
    """Raised when a role or ownership check fails."""

    status_code = 403

    def __init__(self, message: str):
        super().__init__(message, code="FORBIDDEN")


class NotVerifiedError(ForbiddenError):
    """Raised when an unverified account attempts to trade."""

    def __init__(self, account_id: str):
        super().__init__(f"Only verified accounts can trade: {account_id}")


class UnavailableError(AppError):
    """Raised when an external provider is unreachable or misconfigured."""

    status_code = 503

    def __init__(self, message: str):
        super().__init__(message, code="UNAVAILABLE")


class MarketPausedError(UnavailableError):
    """Raised when quotes are requested for a paused bucket."""

    status_code = 423

    def __init__(self, bucket: str):
        super().__init__(f"Market is paused: {bucket}")
        self.code = "MARKET_PAUSED"


class ConflictError(AppError):
    """Raised when a state transition is not allowed from the current status."""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")
