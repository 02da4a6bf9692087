"""SQLAlchemy repository implementations."""

from fundbalance.repositories.sqlalchemy.database import (
    create_db_engine,
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from fundbalance.repositories.sqlalchemy.portfolio_repo import SqlAlchemyPortfolioRepository
from fundbalance.repositories.sqlalchemy.history_repo import SqlAlchemyHistoryRepository

__all__ = [
    "create_db_engine",
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyPortfolioRepository",
    "SqlAlchemyHistoryRepository",
]
