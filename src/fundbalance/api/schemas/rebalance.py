"""Pydantic schemas for rebalance and history endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from fundbalance.api.schemas.portfolio import NumberInput
from fundbalance.domain.models import Advice, RebalanceRecord, Suggestion
from fundbalance.domain.views import AdviceStats, BucketSuggestions


class RebalanceRequest(BaseModel):
    """Request schema for a rebalance run; omitted threshold uses the default."""

    threshold: Optional[NumberInput] = None


class SuggestionOut(BaseModel):
    """Response schema for one fund's suggestion."""

    fund_name: str
    fund_code: str
    current_value: float
    target_value: float
    diff_value: float
    advice: Advice
    reason: str

    @classmethod
    def from_domain(cls, s: Suggestion) -> "SuggestionOut":
        return cls(
            fund_name=s.fund_name,
            fund_code=s.fund_code,
            current_value=s.current_value,
            target_value=s.target_value,
            diff_value=s.diff_value,
            advice=s.advice,
            reason=s.reason,
        )


class BucketSuggestionsOut(BaseModel):
    """Response schema for a bucket with its funds' suggestions."""

    name: str
    target_rate: float
    current_value: float
    target_value: float
    suggestions: list[SuggestionOut]

    @classmethod
    def from_domain(cls, b: BucketSuggestions) -> "BucketSuggestionsOut":
        return cls(
            name=b.name,
            target_rate=b.target_rate,
            current_value=b.current_value,
            target_value=b.target_value,
            suggestions=[SuggestionOut.from_domain(s) for s in b.suggestions],
        )


class RecordSummaryOut(BaseModel):
    """Response schema for a history record without its suggestions."""

    id: int
    created_at: datetime
    threshold: float
    total_value: float

    @classmethod
    def from_domain(cls, r: RebalanceRecord) -> "RecordSummaryOut":
        return cls(
            id=r.record_id,
            created_at=r.created_at,
            threshold=r.threshold,
            total_value=r.total_value,
        )


class AdviceStatsOut(BaseModel):
    """Response schema for derived advice statistics."""

    buy_count: int
    sell_count: int
    hold_count: int
    total_buy_amount: float
    total_sell_amount: float

    @classmethod
    def from_domain(cls, stats: AdviceStats) -> "AdviceStatsOut":
        return cls(
            buy_count=stats.buy_count,
            sell_count=stats.sell_count,
            hold_count=stats.hold_count,
            total_buy_amount=stats.total_buy_amount,
            total_sell_amount=stats.total_sell_amount,
        )


class RecordDetailOut(BaseModel):
    """Response schema for one history record with all suggestions."""

    record: RecordSummaryOut
    suggestions: list[SuggestionOut]
    stats: AdviceStatsOut
