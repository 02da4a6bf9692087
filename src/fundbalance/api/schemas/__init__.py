"""Pydantic schemas for API request/response."""

from fundbalance.api.schemas.common import ApiResponse
from fundbalance.api.schemas.portfolio import (
    FundOut,
    BucketOut,
    portfolio_out,
    AddFundRequest,
    UpdateFundFieldRequest,
    EditFundRequest,
    DeleteFundRequest,
)
from fundbalance.api.schemas.rebalance import (
    RebalanceRequest,
    SuggestionOut,
    BucketSuggestionsOut,
    RecordSummaryOut,
    AdviceStatsOut,
    RecordDetailOut,
)

__all__ = [
    "ApiResponse",
    "FundOut",
    "BucketOut",
    "portfolio_out",
    "AddFundRequest",
    "UpdateFundFieldRequest",
    "EditFundRequest",
    "DeleteFundRequest",
    "RebalanceRequest",
    "SuggestionOut",
    "BucketSuggestionsOut",
    "RecordSummaryOut",
    "AdviceStatsOut",
    "RecordDetailOut",
]
