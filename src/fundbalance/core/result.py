"""Tagged result type and its wire envelope.

A ``Result`` carries either a payload or a structured error. It is the value
the API layer turns into the ``{success, message, data}`` envelope, so the
wire shape lives in exactly one place.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from fundbalance.core.exceptions import AppError

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorInfo:
    """Structured error: machine code plus human-readable message."""

    code: str
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either ``value`` (success) or ``error`` (failure), never both."""

    value: Optional[T] = None
    error: Optional[ErrorInfo] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, value: T, message: Optional[str] = None) -> "Result[T]":
        return cls(value=value, message=message)

    @classmethod
    def fail(cls, code: str, message: str) -> "Result[T]":
        return cls(error=ErrorInfo(code=code, message=message))

    @classmethod
    def from_exception(cls, exc: AppError) -> "Result[T]":
        return cls.fail(exc.code, exc.message)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def to_envelope(self) -> dict[str, Any]:
        """Serialize to the ``{success, message, data}`` wire shape."""
        if self.error is not None:
            return {
                "success": False,
                "message": self.error.message,
                "code": self.error.code,
            }
        envelope: dict[str, Any] = {"success": True, "data": self.value}
        if self.message:
            envelope["message"] = self.message
        return envelope


def capture(fn: Callable[[], T]) -> Result[T]:
    """Run ``fn`` and fold an ``AppError`` into a failed result."""
    try:
        return Result.ok(fn())
    except AppError as exc:
        return Result.from_exception(exc)
