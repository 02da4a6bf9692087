"""Core utilities and shared functionality."""

from fundbalance.core.timezone import now_local, to_local, to_utc_naive
from fundbalance.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    TransportError,
)
from fundbalance.core.result import Result, ErrorInfo, capture

__all__ = [
    "now_local",
    "to_local",
    "to_utc_naive",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "TransportError",
    "Result",
    "ErrorInfo",
    "capture",
]
