"""View models for rebalance outputs."""

from dataclasses import dataclass, field
from decimal import Decimal

from fundbalance.domain.models import Suggestion


@dataclass(frozen=True)
class BucketSuggestions:
    """Suggestions for the funds of one bucket, in bucket order."""

    name: str
    target_rate: Decimal
    current_value: Decimal
    target_value: Decimal
    suggestions: tuple[Suggestion, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RebalanceResult:
    """Full engine output: total value plus per-bucket suggestions."""

    threshold: Decimal
    total_value: Decimal
    buckets: tuple[BucketSuggestions, ...] = field(default_factory=tuple)

    @property
    def suggestions(self) -> list[Suggestion]:
        """All suggestions flattened in bucket order."""
        return [s for b in self.buckets for s in b.suggestions]


@dataclass
class AdviceStats:
    """Aggregate counts and amounts derived from a set of suggestions."""

    buy_count: int = 0
    sell_count: int = 0
    hold_count: int = 0
    total_buy_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    total_sell_amount: Decimal = field(default_factory=lambda: Decimal("0"))
