"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

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

    def __init__(self, resource: str, identifier: str, message: Optional[str] = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            message or f"{resource} not found: {identifier}",
            code="NOT_FOUND",
        )


class PersistenceError(AppError):
    """Raised when a store write or read fails at the database level."""

    def __init__(self, message: str):
        super().__init__(message, code="PERSISTENCE_ERROR")


class TransportError(AppError):
    """Raised by API clients on network failure or an unusable HTTP response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, code="TRANSPORT_ERROR")
