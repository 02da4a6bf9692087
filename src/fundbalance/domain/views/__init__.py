"""View models for engine and history outputs."""

from fundbalance.domain.views.rebalance import (
    BucketSuggestions,
    RebalanceResult,
    AdviceStats,
)

__all__ = [
    "BucketSuggestions",
    "RebalanceResult",
    "AdviceStats",
]
