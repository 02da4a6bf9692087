"""Domain layer - pure business models with no external dependencies."""

from fundbalance.domain.models import (
    Advice,
    FundField,
    Fund,
    Bucket,
    FundPatch,
    Suggestion,
    RebalanceRecord,
)

__all__ = [
    "Advice",
    "FundField",
    "Fund",
    "Bucket",
    "FundPatch",
    "Suggestion",
    "RebalanceRecord",
]
