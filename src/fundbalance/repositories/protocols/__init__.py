"""Repository protocol definitions (interfaces)."""

from fundbalance.repositories.protocols.portfolio_repo import PortfolioRepository
from fundbalance.repositories.protocols.history_repo import HistoryRepository

__all__ = [
    "PortfolioRepository",
    "HistoryRepository",
]
