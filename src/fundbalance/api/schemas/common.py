"""Response envelope shared by every endpoint."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from fundbalance.core.result import Result

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Wire envelope: {success, message, data}; failures also carry code."""

    success: bool
    message: Optional[str] = None
    data: Optional[T] = None
    code: Optional[str] = None

    @classmethod
    def from_result(cls, result: Result[T]) -> "ApiResponse[T]":
        return cls(**result.to_envelope())
