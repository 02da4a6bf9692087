"""SQLAlchemy implementation of PortfolioRepository."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from fundbalance.core.exceptions import NotFoundError, PersistenceError
from fundbalance.domain.models import Bucket, Fund
from fundbalance.repositories.sqlalchemy.orm_models import BucketORM, FundORM

logger = logging.getLogger(__name__)


class SqlAlchemyPortfolioRepository:
    """SQLAlchemy-backed bucket/fund repository."""

    def __init__(self, db: Session):
        self._db = db

    def list_buckets(self) -> list[Bucket]:
        """List all buckets with their funds, in creation order."""
        try:
            orm_buckets = (
                self._db.query(BucketORM)
                .options(selectinload(BucketORM.funds))
                .order_by(BucketORM.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load buckets: {e}") from e
        return [self._bucket_to_domain(b) for b in orm_buckets]

    def count_buckets(self) -> int:
        """Return the number of buckets."""
        try:
            return self._db.query(BucketORM).count()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to count buckets: {e}") from e

    def create_bucket(self, bucket: Bucket) -> Bucket:
        """Persist a new bucket together with any funds it holds."""
        orm_bucket = BucketORM(name=bucket.name, target_rate=bucket.target_rate)
        for fund in bucket.funds:
            orm_bucket.funds.append(
                FundORM(
                    name=fund.name,
                    code=fund.code,
                    current=fund.current,
                    weight=fund.weight,
                )
            )
        self._db.add(orm_bucket)
        self._commit("create bucket")
        self._db.refresh(orm_bucket)
        return self._bucket_to_domain(orm_bucket)

    def add_fund(self, bucket_id: int, fund: Fund) -> Fund:
        """Append a fund to a bucket."""
        orm_fund = FundORM(
            bucket_id=bucket_id,
            name=fund.name,
            code=fund.code,
            current=fund.current,
            weight=fund.weight,
        )
        self._db.add(orm_fund)
        self._commit("add fund")
        self._db.refresh(orm_fund)
        return self._fund_to_domain(orm_fund)

    def update_fund(self, fund: Fund) -> Fund:
        """Overwrite the editable fields of an existing fund."""
        orm_fund = self._db.query(FundORM).filter(FundORM.id == fund.fund_id).first()
        if not orm_fund:
            raise NotFoundError("Fund", str(fund.fund_id))

        orm_fund.name = fund.name
        orm_fund.code = fund.code
        orm_fund.current = fund.current
        orm_fund.weight = fund.weight

        self._commit("update fund")
        self._db.refresh(orm_fund)
        return self._fund_to_domain(orm_fund)

    def delete_fund(self, fund_id: int) -> None:
        """Delete a fund."""
        self._db.query(FundORM).filter(FundORM.id == fund_id).delete()
        self._commit("delete fund")

    def _commit(self, action: str) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error("Failed to %s: %s", action, e)
            raise PersistenceError(f"Failed to {action}: {e}") from e

    @staticmethod
    def _fund_to_domain(orm: FundORM) -> Fund:
        """Convert ORM model to domain model."""
        return Fund(
            fund_id=orm.id,
            bucket_id=orm.bucket_id,
            name=orm.name,
            code=orm.code,
            current=orm.current,
            weight=orm.weight,
        )

    @classmethod
    def _bucket_to_domain(cls, orm: BucketORM) -> Bucket:
        """Convert ORM model to domain model."""
        return Bucket(
            bucket_id=orm.id,
            name=orm.name,
            target_rate=orm.target_rate,
            funds=[cls._fund_to_domain(f) for f in orm.funds],
        )
