"""Dependency injection for FastAPI."""

import threading

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from fundbalance.repositories.sqlalchemy.database import get_db
from fundbalance.repositories.sqlalchemy import (
    SqlAlchemyPortfolioRepository,
    SqlAlchemyHistoryRepository,
)
from fundbalance.services import (
    PortfolioService,
    HistoryService,
    RebalanceService,
)
from fundbalance.config.settings import get_settings


def get_portfolio_lock(request: Request) -> threading.RLock:
    """Provide the application's portfolio write lock."""
    return request.app.state.portfolio_lock


def get_history_lock(request: Request) -> threading.RLock:
    """Provide the application's history append lock."""
    return request.app.state.history_lock


def get_portfolio_repo(db: Session = Depends(get_db)) -> SqlAlchemyPortfolioRepository:
    """Provide PortfolioRepository instance."""
    return SqlAlchemyPortfolioRepository(db)


def get_history_repo(db: Session = Depends(get_db)) -> SqlAlchemyHistoryRepository:
    """Provide HistoryRepository instance."""
    return SqlAlchemyHistoryRepository(db)


def get_portfolio_service(
    portfolio_repo: SqlAlchemyPortfolioRepository = Depends(get_portfolio_repo),
    lock: threading.RLock = Depends(get_portfolio_lock),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(
        portfolio_repo=portfolio_repo,
        lock=lock,
        enforce_weight_budget=get_settings().enforce_weight_budget,
    )


def get_history_service(
    history_repo: SqlAlchemyHistoryRepository = Depends(get_history_repo),
    lock: threading.RLock = Depends(get_history_lock),
) -> HistoryService:
    """Provide HistoryService instance."""
    return HistoryService(history_repo=history_repo, lock=lock)


def get_rebalance_service(
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
    history_service: HistoryService = Depends(get_history_service),
) -> RebalanceService:
    """Provide RebalanceService instance."""
    return RebalanceService(
        portfolio_service=portfolio_service,
        history_service=history_service,
        default_threshold=get_settings().default_threshold,
    )
