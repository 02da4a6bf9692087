"""Domain models package."""

from fundbalance.domain.models.enums import Advice, FundField
from fundbalance.domain.models.portfolio import Fund, Bucket, FundPatch
from fundbalance.domain.models.history import Suggestion, RebalanceRecord

__all__ = [
    "Advice",
    "FundField",
    "Fund",
    "Bucket",
    "FundPatch",
    "Suggestion",
    "RebalanceRecord",
]
