"""Bucket and Fund domain models."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass
class Fund:
    """
    A single holding inside a bucket.

    `current` is the market value in the reporting unit; `weight` is the
    fund's share of its bucket's target, in (0, 1].
    """

    name: str
    code: str
    current: Decimal
    weight: Decimal
    fund_id: Optional[int] = None
    bucket_id: Optional[int] = None


@dataclass
class Bucket:
    """
    A named group of funds sharing one target allocation rate.

    Funds are kept in display order; the engine does not depend on it.
    """

    name: str
    target_rate: Decimal
    funds: list[Fund] = field(default_factory=list)
    bucket_id: Optional[int] = None

    @property
    def current_value(self) -> Decimal:
        """Sum of the current values of all funds in the bucket."""
        return sum((f.current for f in self.funds), Decimal("0"))


@dataclass
class FundPatch:
    """Partial update for a fund; None means leave unchanged."""

    name: Optional[str] = None
    code: Optional[str] = None
    current: Optional[Decimal] = None
    weight: Optional[Decimal] = None

    def is_empty(self) -> bool:
        return all(
            v is None for v in (self.name, self.code, self.current, self.weight)
        )
