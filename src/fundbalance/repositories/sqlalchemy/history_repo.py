"""SQLAlchemy implementation of HistoryRepository."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from fundbalance.core.exceptions import PersistenceError
from fundbalance.core.timezone import to_local, to_utc_naive
from fundbalance.domain.models import RebalanceRecord, Suggestion
from fundbalance.repositories.sqlalchemy.orm_models import (
    RebalanceRecordORM,
    RebalanceSuggestionORM,
)

logger = logging.getLogger(__name__)


class SqlAlchemyHistoryRepository:
    """SQLAlchemy-backed, append-only rebalance history."""

    def __init__(self, db: Session):
        self._db = db

    def append(
        self,
        threshold: Decimal,
        total_value: Decimal,
        suggestions: Sequence[Suggestion],
        created_at: datetime,
    ) -> RebalanceRecord:
        """Store a record and its suggestions in one transaction."""
        orm_record = RebalanceRecordORM(
            threshold=threshold,
            total_value=total_value,
            created_at=to_utc_naive(created_at),
        )
        for s in suggestions:
            orm_record.suggestions.append(
                RebalanceSuggestionORM(
                    fund_id=s.fund_id,
                    fund_name=s.fund_name,
                    fund_code=s.fund_code,
                    current_value=s.current_value,
                    target_value=s.target_value,
                    diff_value=s.diff_value,
                    advice=s.advice,
                    reason=s.reason,
                )
            )
        try:
            self._db.add(orm_record)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error("Failed to save rebalance record: %s", e)
            raise PersistenceError(f"Failed to save rebalance record: {e}") from e
        self._db.refresh(orm_record)
        return self._to_domain(orm_record, with_suggestions=True)

    def list_recent(self, limit: int) -> list[RebalanceRecord]:
        """List record summaries, most recent first."""
        try:
            orm_records = (
                self._db.query(RebalanceRecordORM)
                .order_by(RebalanceRecordORM.id.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load rebalance history: {e}") from e
        return [self._to_domain(r, with_suggestions=False) for r in orm_records]

    def get(self, record_id: int) -> Optional[RebalanceRecord]:
        """Retrieve a full record including suggestions."""
        try:
            orm_record = (
                self._db.query(RebalanceRecordORM)
                .options(selectinload(RebalanceRecordORM.suggestions))
                .filter(RebalanceRecordORM.id == record_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load rebalance record: {e}") from e
        return self._to_domain(orm_record, with_suggestions=True) if orm_record else None

    @staticmethod
    def _suggestion_to_domain(orm: RebalanceSuggestionORM) -> Suggestion:
        return Suggestion(
            fund_id=orm.fund_id,
            fund_name=orm.fund_name,
            fund_code=orm.fund_code,
            current_value=orm.current_value,
            target_value=orm.target_value,
            diff_value=orm.diff_value,
            advice=orm.advice,
            reason=orm.reason or "",
        )

    @classmethod
    def _to_domain(cls, orm: RebalanceRecordORM, with_suggestions: bool) -> RebalanceRecord:
        """Convert ORM model to domain model."""
        suggestions: tuple[Suggestion, ...] = ()
        if with_suggestions:
            suggestions = tuple(cls._suggestion_to_domain(s) for s in orm.suggestions)
        return RebalanceRecord(
            record_id=orm.id,
            created_at=to_local(orm.created_at),
            threshold=orm.threshold,
            total_value=orm.total_value,
            suggestions=suggestions,
        )
