"""Rebalance suggestion and history record domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fundbalance.domain.models.enums import Advice


@dataclass(frozen=True)
class Suggestion:
    """
    Engine output for one fund.

    Holds copies of the fund's identifying fields so that later edits to the
    fund never change a stored record. `diff_value` is current minus target.
    """

    fund_name: str
    fund_code: str
    current_value: Decimal
    target_value: Decimal
    diff_value: Decimal
    advice: Advice
    reason: str
    fund_id: Optional[int] = None


@dataclass(frozen=True)
class RebalanceRecord:
    """
    Immutable history entry for one rebalance run.

    Summary listings leave `suggestions` empty; point lookups fill it.
    """

    record_id: int
    created_at: datetime
    threshold: Decimal
    total_value: Decimal
    suggestions: tuple[Suggestion, ...] = field(default_factory=tuple)
