"""Service layer - business logic orchestration."""

from fundbalance.services.rebalance_engine import RebalanceEngine
from fundbalance.services.portfolio_service import PortfolioService
from fundbalance.services.history_service import HistoryService, summarize_suggestions
from fundbalance.services.rebalance_service import RebalanceService
from fundbalance.services.seed import default_buckets

__all__ = [
    "RebalanceEngine",
    "PortfolioService",
    "HistoryService",
    "summarize_suggestions",
    "RebalanceService",
    "default_buckets",
]
