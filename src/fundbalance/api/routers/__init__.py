"""API routers package."""

from fundbalance.api.routers.portfolio import router as portfolio_router
from fundbalance.api.routers.rebalance import router as rebalance_router

__all__ = [
    "portfolio_router",
    "rebalance_router",
]
