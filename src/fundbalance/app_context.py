"""Application context for in-process service management.

Provides access to all services without HTTP. Used by the CLI.
"""

import threading
from pathlib import Path
from typing import Optional

from fundbalance.config.settings import set_settings, get_settings
from fundbalance.repositories.sqlalchemy.database import (
    init_db_with_path,
    reset_database,
    get_session,
)
from fundbalance.repositories.sqlalchemy import (
    SqlAlchemyPortfolioRepository,
    SqlAlchemyHistoryRepository,
)
from fundbalance.services import (
    PortfolioService,
    HistoryService,
    RebalanceService,
    default_buckets,
)


class AppContext:
    """
    Application context providing in-process access to all services.

    Owns the store locks, so every service built from one context shares the
    same concurrency guard.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = data_dir
        self._session = None

        self._portfolio_lock = threading.RLock()
        self._history_lock = threading.RLock()

        # Service instances (lazy initialized)
        self._portfolio_service: Optional[PortfolioService] = None
        self._history_service: Optional[HistoryService] = None
        self._rebalance_service: Optional[RebalanceService] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize or reinitialize the application with a data directory.

        Seeds the default portfolio into an empty database when enabled.
        """
        if data_dir:
            self._data_dir = data_dir

        current = get_settings()
        settings = current.model_copy(update={"data_dir": self._data_dir or current.data_dir})
        set_settings(settings)

        reset_database()
        db_path = settings.get_data_dir() / "fund_data.db"
        init_db_with_path(db_path)

        self._reset_services()

        if settings.seed_default_portfolio:
            self.portfolio.seed_defaults(default_buckets())

    def _get_session(self):
        """Get or create database session."""
        if self._session is None:
            self._session = get_session()
        return self._session

    def _reset_services(self) -> None:
        if self._session:
            self._session.close()
        self._session = None
        self._portfolio_service = None
        self._history_service = None
        self._rebalance_service = None

    # Service accessors
    @property
    def portfolio(self) -> PortfolioService:
        """Get the PortfolioService instance."""
        if self._portfolio_service is None:
            self._portfolio_service = PortfolioService(
                portfolio_repo=SqlAlchemyPortfolioRepository(self._get_session()),
                lock=self._portfolio_lock,
                enforce_weight_budget=get_settings().enforce_weight_budget,
            )
        return self._portfolio_service

    @property
    def history(self) -> HistoryService:
        """Get the HistoryService instance."""
        if self._history_service is None:
            self._history_service = HistoryService(
                history_repo=SqlAlchemyHistoryRepository(self._get_session()),
                lock=self._history_lock,
            )
        return self._history_service

    @property
    def rebalance(self) -> RebalanceService:
        """Get the RebalanceService instance."""
        if self._rebalance_service is None:
            self._rebalance_service = RebalanceService(
                portfolio_service=self.portfolio,
                history_service=self.history,
                default_threshold=get_settings().default_threshold,
            )
        return self._rebalance_service

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None
