"""
Pytest configuration and fixtures for the fund rebalancer tests.

This module provides:
- In-memory SQLite database fixtures
- Repository and service fixtures wired with shared locks
- Builders for buckets and funds
- A FastAPI test client bound to the test database
"""

import threading
from decimal import Decimal
from typing import Callable

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from fundbalance.main import app
from fundbalance.config.settings import Settings, set_settings, reset_settings
from fundbalance.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from fundbalance.repositories.sqlalchemy import orm_models  # noqa: F401
from fundbalance.repositories.sqlalchemy import (
    SqlAlchemyPortfolioRepository,
    SqlAlchemyHistoryRepository,
)
from fundbalance.services import (
    RebalanceEngine,
    PortfolioService,
    HistoryService,
    RebalanceService,
    default_buckets,
)
from fundbalance.domain.models import Bucket, Fund


# =============================================================================
# DOMAIN BUILDERS
# =============================================================================


def make_fund(
    name: str = "Fund",
    code: str = "000000",
    current: str = "0",
    weight: str = "1",
) -> Fund:
    """Create a Fund from string amounts."""
    return Fund(name=name, code=code, current=Decimal(current), weight=Decimal(weight))


def make_bucket(name: str, target_rate: str, funds: list[Fund]) -> Bucket:
    """Create a Bucket from a string target rate."""
    return Bucket(name=name, target_rate=Decimal(target_rate), funds=funds)


@pytest.fixture
def fund_builder() -> Callable[..., Fund]:
    return make_fund


@pytest.fixture
def bucket_builder() -> Callable[..., Bucket]:
    return make_bucket


@pytest.fixture
def simple_buckets() -> list[Bucket]:
    """One bucket at 100% holding a 60/40 split of two half-weight funds."""
    return [
        make_bucket("All", "1.0", [
            make_fund("Fund A", "A001", "60", "0.5"),
            make_fund("Fund B", "B001", "40", "0.5"),
        ]),
    ]


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_repo(test_session) -> SqlAlchemyPortfolioRepository:
    """Provide test PortfolioRepository."""
    return SqlAlchemyPortfolioRepository(test_session)


@pytest.fixture
def history_repo(test_session) -> SqlAlchemyHistoryRepository:
    """Provide test HistoryRepository."""
    return SqlAlchemyHistoryRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def engine() -> RebalanceEngine:
    """Provide the pure rebalance engine."""
    return RebalanceEngine()


@pytest.fixture
def portfolio_service(portfolio_repo) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(portfolio_repo=portfolio_repo, lock=threading.RLock())


@pytest.fixture
def history_service(history_repo) -> HistoryService:
    """Provide test HistoryService."""
    return HistoryService(history_repo=history_repo, lock=threading.RLock())


@pytest.fixture
def rebalance_service(portfolio_service, history_service) -> RebalanceService:
    """Provide test RebalanceService."""
    return RebalanceService(
        portfolio_service=portfolio_service,
        history_service=history_service,
    )


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def seeded_portfolio(portfolio_service) -> list[Bucket]:
    """Store the default three-bucket portfolio and return the snapshot."""
    portfolio_service.seed_defaults(default_buckets())
    return portfolio_service.list_buckets()


@pytest.fixture
def simple_portfolio(portfolio_repo, simple_buckets) -> list[Bucket]:
    """Store the single-bucket 60/40 portfolio and return the snapshot."""
    for bucket in simple_buckets:
        portfolio_repo.create_bucket(bucket)
    return portfolio_repo.list_buckets()


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database."""
    set_settings(Settings(database_url="sqlite:///:memory:", seed_default_portfolio=False))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


@pytest.fixture
def seeded_client(client, test_session) -> TestClient:
    """Test client whose database holds the default portfolio."""
    service = PortfolioService(SqlAlchemyPortfolioRepository(test_session))
    service.seed_defaults(default_buckets())
    return client


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.0001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(str(actual)) - Decimal(str(expected)))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
