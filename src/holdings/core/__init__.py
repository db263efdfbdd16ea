"""Core utilities and shared functionality."""

from holdings.core.timezone import (
    now_eastern,
    today_eastern,
    to_eastern,
    parse_datetime_eastern,
    as_market_date,
    EASTERN_TZ,
)
from holdings.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    NotAuthenticatedError,
    PermissionDeniedError,
    ACCESS_ERRORS,
)

__all__ = [
    "now_eastern",
    "today_eastern",
    "to_eastern",
    "parse_datetime_eastern",
    "as_market_date",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "NotAuthenticatedError",
    "PermissionDeniedError",
    "ACCESS_ERRORS",
]
