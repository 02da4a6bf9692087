"""Rebalance and history endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fundbalance.api.deps import get_rebalance_service, get_history_service
from fundbalance.api.schemas import (
    ApiResponse,
    RebalanceRequest,
    SuggestionOut,
    BucketSuggestionsOut,
    RecordSummaryOut,
    AdviceStatsOut,
    RecordDetailOut,
)
from fundbalance.config.settings import get_settings
from fundbalance.core.result import Result
from fundbalance.services import HistoryService, RebalanceService, summarize_suggestions

router = APIRouter(prefix="/api/rebalance", tags=["rebalance"])

RebalanceResponse = ApiResponse[list[BucketSuggestionsOut]]
HistoryListResponse = ApiResponse[list[RecordSummaryOut]]
HistoryDetailResponse = ApiResponse[RecordDetailOut]


@router.post("", response_model=RebalanceResponse)
def run_rebalance(
    data: Optional[RebalanceRequest] = None,
    rebalance: RebalanceService = Depends(get_rebalance_service),
) -> RebalanceResponse:
    """Run the rebalance engine and record the run in history."""
    threshold = data.threshold if data else None
    result, _record = rebalance.run(threshold)
    return RebalanceResponse.from_result(
        Result.ok(
            [BucketSuggestionsOut.from_domain(b) for b in result.buckets],
            message="Rebalance analysis complete",
        )
    )


@router.get("/history", response_model=HistoryListResponse)
def list_history(
    limit: Optional[str] = Query(None, description="Maximum number of records"),
    history: HistoryService = Depends(get_history_service),
) -> HistoryListResponse:
    """List recent rebalance runs, most recent first."""
    records = history.list_records(_parse_limit(limit))
    return HistoryListResponse.from_result(
        Result.ok([RecordSummaryOut.from_domain(r) for r in records])
    )


@router.get("/history/{record_id}", response_model=HistoryDetailResponse)
def get_history_detail(
    record_id: int,
    history: HistoryService = Depends(get_history_service),
) -> HistoryDetailResponse:
    """Return one rebalance run with all suggestions and derived stats."""
    record = history.get_record(record_id)
    detail = RecordDetailOut(
        record=RecordSummaryOut.from_domain(record),
        suggestions=[SuggestionOut.from_domain(s) for s in record.suggestions],
        stats=AdviceStatsOut.from_domain(summarize_suggestions(record.suggestions)),
    )
    return HistoryDetailResponse.from_result(Result.ok(detail))


def _parse_limit(raw: Optional[str]) -> int:
    """Missing, non-numeric or non-positive limits fall back to the default."""
    default = get_settings().history_default_limit
    if raw is None:
        return default
    try:
        limit = int(raw)
    except ValueError:
        return default
    return limit if limit > 0 else default
