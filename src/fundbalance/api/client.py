"""HTTP client for the rebalancer API.

Separates two kinds of failure:

- transport failures (network errors, non-JSON or empty bodies, HTTP error
  statuses without an envelope) raise ``TransportError``;
- application failures (``success=false``) raise the matching ``AppError``
  subclass with the server's message.
"""

import logging
from typing import Any, Optional, Union

import httpx

from fundbalance.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    TransportError,
)

logger = logging.getLogger(__name__)

Number = Union[float, int, str]


def _app_error(code: Optional[str], message: str) -> AppError:
    if code == "VALIDATION_ERROR" or code == "INVALID_REQUEST":
        return ValidationError(message)
    if code == "NOT_FOUND":
        return NotFoundError("Resource", "", message=message)
    if code == "PERSISTENCE_ERROR":
        return PersistenceError(message)
    return AppError(message, code=code or "APP_ERROR")


class RebalancerClient:
    """
    Thin client over the JSON envelope API.

    Each method returns the envelope's ``data`` on success.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8080",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "RebalancerClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Portfolio
    def list_buckets(self) -> list[dict]:
        return self._call("GET", "/api/buckets")

    def add_fund(
        self,
        bucket_index: int,
        name: str,
        code: str,
        current: Number,
        weight: Number,
    ) -> list[dict]:
        return self._call("POST", "/api/funds", json={
            "bucket_index": bucket_index,
            "name": name,
            "code": code,
            "current": current,
            "weight": weight,
        })

    def update_fund_field(
        self,
        bucket_index: int,
        fund_index: int,
        field: str,
        value: Number,
    ) -> list[dict]:
        return self._call("PUT", "/api/funds", json={
            "bucket_index": bucket_index,
            "fund_index": fund_index,
            "field": field,
            "value": value,
        })

    def edit_fund(self, bucket_index: int, fund_index: int, **changes: Any) -> list[dict]:
        body = {"bucket_index": bucket_index, "fund_index": fund_index}
        body.update(changes)
        return self._call("PATCH", "/api/funds", json=body)

    def delete_fund(self, bucket_index: int, fund_index: int) -> list[dict]:
        return self._call("DELETE", "/api/funds", json={
            "bucket_index": bucket_index,
            "fund_index": fund_index,
        })

    # Rebalance
    def rebalance(self, threshold: Optional[Number] = None) -> list[dict]:
        body = {} if threshold is None else {"threshold": threshold}
        return self._call("POST", "/api/rebalance", json=body)

    def list_history(self, limit: int = 10) -> list[dict]:
        return self._call("GET", "/api/rebalance/history", params={"limit": limit})

    def get_history(self, record_id: int) -> dict:
        return self._call("GET", f"/api/rebalance/history/{record_id}")

    def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(f"Request failed: {e}") from e

        envelope = self._parse_envelope(response)
        if envelope is None:
            if response.is_error:
                raise TransportError(
                    f"HTTP {response.status_code}: {response.reason_phrase}",
                    status_code=response.status_code,
                )
            raise TransportError(
                "Malformed or empty response body",
                status_code=response.status_code,
            )

        if not envelope["success"]:
            raise _app_error(envelope.get("code"), envelope.get("message") or "Request failed")
        if response.is_error:
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )
        return envelope.get("data")

    @staticmethod
    def _parse_envelope(response: httpx.Response) -> Optional[dict]:
        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict) or not isinstance(body.get("success"), bool):
            return None
        return body
