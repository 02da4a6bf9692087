"""History repository protocol."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Optional, Sequence

from fundbalance.domain.models import RebalanceRecord, Suggestion


class HistoryRepository(Protocol):
    """Interface for rebalance history data access (append-only)."""

    def append(
        self,
        threshold: Decimal,
        total_value: Decimal,
        suggestions: Sequence[Suggestion],
        created_at: datetime,
    ) -> RebalanceRecord:
        """Store a record and its suggestions in one transaction."""
        ...

    def list_recent(self, limit: int) -> list[RebalanceRecord]:
        """List record summaries, most recent first."""
        ...

    def get(self, record_id: int) -> Optional[RebalanceRecord]:
        """Retrieve a full record including suggestions."""
        ...
