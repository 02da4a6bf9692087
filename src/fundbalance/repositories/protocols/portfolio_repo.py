"""Portfolio repository protocol."""

from typing import Protocol

from fundbalance.domain.models import Bucket, Fund


class PortfolioRepository(Protocol):
    """Interface for bucket and fund data access."""

    def list_buckets(self) -> list[Bucket]:
        """List all buckets with their funds, in creation order."""
        ...

    def count_buckets(self) -> int:
        """Return the number of buckets."""
        ...

    def create_bucket(self, bucket: Bucket) -> Bucket:
        """Persist a new bucket together with any funds it holds."""
        ...

    def add_fund(self, bucket_id: int, fund: Fund) -> Fund:
        """Append a fund to a bucket."""
        ...

    def update_fund(self, fund: Fund) -> Fund:
        """Overwrite the editable fields of an existing fund."""
        ...

    def delete_fund(self, fund_id: int) -> None:
        """Delete a fund (hard delete)."""
        ...
