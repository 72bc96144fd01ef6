"""Core utilities and shared functionality."""

from brokerage.core.timezone import now_utc, to_utc, UTC
from brokerage.core.exceptions import (
    AppError,
    ValidationError,
    InvalidSideError,
    NotFoundError,
    UnknownBucketError,
    AuthenticationError,
    ForbiddenError,
    NotVerifiedError,
    UnavailableError,
    MarketPausedError,
    ConflictError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "UTC",
    "AppError",
    "ValidationError",
    "InvalidSideError",
    "NotFoundError",
    "UnknownBucketError",
    "AuthenticationError",
    "ForbiddenError",
    "NotVerifiedError",
    "UnavailableError",
    "MarketPausedError",
    "ConflictError",
]
