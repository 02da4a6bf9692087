"""History service for rebalance records."""

import logging
import threading
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from fundbalance.core.exceptions import ValidationError, NotFoundError
from fundbalance.core.timezone import now_local
from fundbalance.domain.models import Advice, RebalanceRecord, Suggestion
from fundbalance.domain.views import AdviceStats
from fundbalance.repositories.protocols import HistoryRepository

logger = logging.getLogger(__name__)


def summarize_suggestions(suggestions: Iterable[Suggestion]) -> AdviceStats:
    """
    Reduce suggestions to per-advice counts and BUY/SELL amounts.

    Amounts are sums of |diff_value|; HOLD contributes to the count only.
    """
    stats = AdviceStats()
    for s in suggestions:
        if s.advice == Advice.BUY:
            stats.buy_count += 1
            stats.total_buy_amount += abs(s.diff_value)
        elif s.advice == Advice.SELL:
            stats.sell_count += 1
            stats.total_sell_amount += abs(s.diff_value)
        else:
            stats.hold_count += 1
    return stats


class HistoryService:
    """
    Append-only store of rebalance runs.

    Records are never edited or deleted. Appends are serialized by the
    injected lock; ids come from the database and increase strictly.
    """

    def __init__(
        self,
        history_repo: HistoryRepository,
        lock: Optional[threading.RLock] = None,
    ):
        self._repo = history_repo
        self._lock = lock or threading.RLock()

    def append(
        self,
        threshold: Decimal,
        total_value: Decimal,
        suggestions: Sequence[Suggestion],
    ) -> RebalanceRecord:
        """Store a new record stamped with the current time."""
        with self._lock:
            record = self._repo.append(
                threshold=threshold,
                total_value=total_value,
                suggestions=list(suggestions),
                created_at=now_local(),
            )
        logger.info(
            "Saved rebalance record %d (%d suggestions)",
            record.record_id, len(record.suggestions),
        )
        return record

    def list_records(self, limit: int) -> list[RebalanceRecord]:
        """List record summaries, most recent first."""
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValidationError(f"Limit must be a positive integer, got {limit!r}")
        return self._repo.list_recent(limit)

    def get_record(self, record_id: int) -> RebalanceRecord:
        """Get a full record including all suggestions."""
        record = self._repo.get(record_id)
        if not record:
            raise NotFoundError("Rebalance record", str(record_id))
        return record
