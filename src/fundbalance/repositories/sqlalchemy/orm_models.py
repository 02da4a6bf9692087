"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    ForeignKey,
    Numeric,
    Index,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from fundbalance.core.amounts import (
    AMOUNT_PRECISION,
    AMOUNT_SCALE,
    RATE_PRECISION,
    RATE_SCALE,
)
from fundbalance.repositories.sqlalchemy.database import Base
from fundbalance.domain.models.enums import Advice


def _amount() -> Numeric:
    return Numeric(precision=AMOUNT_PRECISION, scale=AMOUNT_SCALE)


def _rate() -> Numeric:
    return Numeric(precision=RATE_PRECISION, scale=RATE_SCALE)


class BucketORM(Base):
    """SQLAlchemy model for Bucket."""

    __tablename__ = "buckets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
    target_rate = Column(_rate(), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    funds = relationship(
        "FundORM",
        back_populates="bucket",
        order_by="FundORM.id",
        cascade="all, delete-orphan",
    )


class FundORM(Base):
    """SQLAlchemy model for Fund."""

    __tablename__ = "funds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bucket_id = Column(
        Integer,
        ForeignKey("buckets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    code = Column(String(64), nullable=False)
    current = Column(_amount(), nullable=False, default=Decimal("0"))
    weight = Column(_rate(), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    bucket = relationship("BucketORM", back_populates="funds")


class RebalanceRecordORM(Base):
    """SQLAlchemy model for a rebalance history record (append-only)."""

    __tablename__ = "rebalance_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    threshold = Column(_rate(), nullable=False)
    total_value = Column(_amount(), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    suggestions = relationship(
        "RebalanceSuggestionORM",
        back_populates="record",
        order_by="RebalanceSuggestionORM.id",
        cascade="all, delete-orphan",
    )


class RebalanceSuggestionORM(Base):
    """SQLAlchemy model for one suggestion inside a history record."""

    __tablename__ = "rebalance_suggestions"
    __table_args__ = (Index("idx_suggestions_record_id", "record_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    record_id = Column(
        Integer,
        ForeignKey("rebalance_records.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Plain column, not a foreign key: deleting a fund must not touch history
    fund_id = Column(Integer, nullable=True)
    fund_name = Column(String(255), nullable=False)
    fund_code = Column(String(64), nullable=False)
    current_value = Column(_amount(), nullable=False)
    target_value = Column(_amount(), nullable=False)
    diff_value = Column(_amount(), nullable=False)
    advice = Column(SqlEnum(Advice), nullable=False)
    reason = Column(Text, nullable=False, default="")

    record = relationship("RebalanceRecordORM", back_populates="suggestions")
