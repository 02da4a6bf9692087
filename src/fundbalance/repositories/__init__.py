"""Repository layer - data access abstractions and implementations."""

from fundbalance.repositories.protocols import (
    PortfolioRepository,
    HistoryRepository,
)

__all__ = [
    "PortfolioRepository",
    "HistoryRepository",
]
