"""Portfolio service: validated bucket/fund mutations."""

import logging
import threading
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from fundbalance.core.amounts import to_amount, to_rate
from fundbalance.core.exceptions import ValidationError, NotFoundError
from fundbalance.domain.models import Bucket, Fund, FundField, FundPatch
from fundbalance.repositories.protocols import PortfolioRepository

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_ONE = Decimal("1")


def parse_decimal(value: Any, field_name: str) -> Decimal:
    """Parse a user-supplied number, raising ValidationError if it is not one."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid number for {field_name}: {value!r}")
    if isinstance(value, Decimal):
        parsed = value
    else:
        text = str(value).strip()
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            raise ValidationError(f"Invalid number for {field_name}: {value!r}")
    if not parsed.is_finite():
        raise ValidationError(f"Invalid number for {field_name}: {value!r}")
    return parsed


def validate_name(value: Any) -> str:
    name = str(value).strip() if value is not None else ""
    if not name:
        raise ValidationError("Fund name is required")
    return name


def validate_code(value: Any) -> str:
    code = str(value).strip() if value is not None else ""
    if not code:
        raise ValidationError("Fund code is required")
    return code


def validate_current(value: Any) -> Decimal:
    current = to_amount(parse_decimal(value, "current"), "current")
    if current < _ZERO:
        raise ValidationError("Current value cannot be negative")
    return current


def validate_weight(value: Any) -> Decimal:
    weight = to_rate(parse_decimal(value, "weight"), "weight")
    if weight <= _ZERO or weight > _ONE:
        raise ValidationError(f"Weight must be in (0, 1], got {weight}")
    return weight


_FIELD_VALIDATORS = {
    FundField.NAME: validate_name,
    FundField.CODE: validate_code,
    FundField.CURRENT: validate_current,
    FundField.WEIGHT: validate_weight,
}


class PortfolioService:
    """
    Service owning the bucket/fund hierarchy.

    Buckets and funds are addressed by position (bucket_index, fund_index) at
    the API boundary and resolved to stable ids here. Every operation runs
    under the injected lock, so a mutation never interleaves with another
    mutation or with a snapshot read. Validation always completes before the
    first write; a rejected request leaves the store unchanged.
    """

    def __init__(
        self,
        portfolio_repo: PortfolioRepository,
        lock: Optional[threading.RLock] = None,
        enforce_weight_budget: bool = False,
    ):
        self._repo = portfolio_repo
        self._lock = lock or threading.RLock()
        self._enforce_weight_budget = enforce_weight_budget

    def list_buckets(self) -> list[Bucket]:
        """Return a snapshot of the current portfolio."""
        with self._lock:
            return self._repo.list_buckets()

    def add_fund(
        self,
        bucket_index: int,
        name: Any,
        code: Any,
        current: Any,
        weight: Any,
    ) -> list[Bucket]:
        """
        Append a fund to the bucket at `bucket_index`.

        Returns:
            The full updated portfolio
        """
        fund = Fund(
            name=validate_name(name),
            code=validate_code(code),
            current=validate_current(current),
            weight=validate_weight(weight),
        )
        with self._lock:
            buckets = self._repo.list_buckets()
            bucket = self._resolve_bucket(buckets, bucket_index)
            self._check_weight_budget(bucket, fund.weight, exclude_fund_id=None)

            created = self._repo.add_fund(bucket.bucket_id, fund)
            logger.info(
                "Added fund %s (%s) to bucket %s",
                created.name, created.code, bucket.name,
            )
            return self._repo.list_buckets()

    def edit_fund_field(
        self,
        bucket_index: int,
        fund_index: int,
        field: Union[str, FundField],
        value: Any,
    ) -> list[Bucket]:
        """
        Update exactly one field of one fund.

        Only the named field is re-validated, with the same rules as add_fund.
        """
        try:
            fund_field = FundField(field)
        except ValueError:
            raise ValidationError(f"Invalid field: {field!r}")
        parsed = _FIELD_VALIDATORS[fund_field](value)
        return self.edit_fund(
            bucket_index,
            fund_index,
            FundPatch(**{fund_field.value: parsed}),
        )

    def edit_fund(
        self,
        bucket_index: int,
        fund_index: int,
        patch: FundPatch,
    ) -> list[Bucket]:
        """
        Apply a partial update to one fund atomically.

        Every field in the patch is validated before anything is written;
        all of them are then committed in a single transaction.
        """
        if patch.is_empty():
            raise ValidationError("No fields to update")

        changes: dict[str, Any] = {}
        if patch.name is not None:
            changes["name"] = validate_name(patch.name)
        if patch.code is not None:
            changes["code"] = validate_code(patch.code)
        if patch.current is not None:
            changes["current"] = validate_current(patch.current)
        if patch.weight is not None:
            changes["weight"] = validate_weight(patch.weight)

        with self._lock:
            buckets = self._repo.list_buckets()
            bucket = self._resolve_bucket(buckets, bucket_index)
            fund = self._resolve_fund(bucket, bucket_index, fund_index)
            if "weight" in changes:
                self._check_weight_budget(
                    bucket, changes["weight"], exclude_fund_id=fund.fund_id
                )

            self._repo.update_fund(replace(fund, **changes))
            logger.info(
                "Updated fund %s (%s): %s",
                fund.name, fund.code, ", ".join(sorted(changes)),
            )
            return self._repo.list_buckets()

    def delete_fund(self, bucket_index: int, fund_index: int) -> list[Bucket]:
        """Remove one fund; returns the full updated portfolio."""
        with self._lock:
            buckets = self._repo.list_buckets()
            bucket = self._resolve_bucket(buckets, bucket_index)
            fund = self._resolve_fund(bucket, bucket_index, fund_index)

            self._repo.delete_fund(fund.fund_id)
            logger.info("Deleted fund %s (%s) from bucket %s", fund.name, fund.code, bucket.name)
            return self._repo.list_buckets()

    def seed_defaults(self, buckets: list[Bucket]) -> bool:
        """
        Insert the given buckets when the store is empty.

        Returns:
            True if the buckets were inserted, False if data already existed
        """
        with self._lock:
            if self._repo.count_buckets() > 0:
                logger.info("Portfolio already has data, skipping default seed")
                return False
            for bucket in buckets:
                self._repo.create_bucket(bucket)
            logger.info("Seeded default portfolio with %d buckets", len(buckets))
            return True

    @staticmethod
    def _resolve_bucket(buckets: list[Bucket], bucket_index: int) -> Bucket:
        if not isinstance(bucket_index, int) or not 0 <= bucket_index < len(buckets):
            raise NotFoundError("Bucket", f"index {bucket_index}")
        return buckets[bucket_index]

    @staticmethod
    def _resolve_fund(bucket: Bucket, bucket_index: int, fund_index: int) -> Fund:
        if not isinstance(fund_index, int) or not 0 <= fund_index < len(bucket.funds):
            raise NotFoundError("Fund", f"index {fund_index} in bucket {bucket_index}")
        return bucket.funds[fund_index]

    def _check_weight_budget(
        self,
        bucket: Bucket,
        weight: Decimal,
        exclude_fund_id: Optional[int],
    ) -> None:
        """Reject a weight that would push the bucket total above 1."""
        if not self._enforce_weight_budget:
            return
        others = sum(
            (f.weight for f in bucket.funds if f.fund_id != exclude_fund_id),
            _ZERO,
        )
        if others + weight > _ONE:
            raise ValidationError(
                f"Weight exceeds bucket limit: other funds total {others:.2f}, "
                f"remaining {(_ONE - others):.2f}"
            )
