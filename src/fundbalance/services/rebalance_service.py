"""Rebalance service: snapshot, compute, record."""

import logging
from decimal import Decimal
from typing import Any, Optional

from fundbalance.domain.models import RebalanceRecord
from fundbalance.domain.views import RebalanceResult
from fundbalance.services.history_service import HistoryService
from fundbalance.services.portfolio_service import PortfolioService, parse_decimal
from fundbalance.services.rebalance_engine import RebalanceEngine

logger = logging.getLogger(__name__)


class RebalanceService:
    """
    Runs the rebalance engine against the live portfolio and records the run.

    The portfolio read and the history write are separate steps. If the
    portfolio changes in between, the record reflects the snapshot as read.
    """

    def __init__(
        self,
        portfolio_service: PortfolioService,
        history_service: HistoryService,
        engine: Optional[RebalanceEngine] = None,
        default_threshold: Decimal = Decimal("0.05"),
    ):
        self._portfolio = portfolio_service
        self._history = history_service
        self._engine = engine or RebalanceEngine()
        self._default_threshold = default_threshold

    def run(self, threshold: Any = None) -> tuple[RebalanceResult, RebalanceRecord]:
        """
        Rebalance the current portfolio.

        Args:
            threshold: Fractional tolerance (0.05 = 5%). None uses the default.

        Returns:
            The engine result and the stored history record
        """
        if threshold is None:
            resolved = self._default_threshold
        else:
            resolved = parse_decimal(threshold, "threshold")

        buckets = self._portfolio.list_buckets()
        result = self._engine.run(buckets, resolved)
        record = self._history.append(
            threshold=result.threshold,
            total_value=result.total_value,
            suggestions=result.suggestions,
        )
        logger.info(
            "Rebalance run %d: threshold=%s total_value=%s",
            record.record_id, result.threshold, result.total_value,
        )
        return result, record
