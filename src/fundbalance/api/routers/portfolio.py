"""Bucket and fund endpoints."""

from fastapi import APIRouter, Depends

from fundbalance.api.deps import get_portfolio_service
from fundbalance.api.schemas import (
    ApiResponse,
    BucketOut,
    portfolio_out,
    AddFundRequest,
    UpdateFundFieldRequest,
    EditFundRequest,
    DeleteFundRequest,
)
from fundbalance.core.result import Result
from fundbalance.domain.models import FundPatch
from fundbalance.services import PortfolioService

router = APIRouter(prefix="/api", tags=["portfolio"])

PortfolioResponse = ApiResponse[list[BucketOut]]


@router.get("/buckets", response_model=PortfolioResponse)
def list_buckets(
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Return the current portfolio."""
    buckets = portfolio.list_buckets()
    return PortfolioResponse.from_result(Result.ok(portfolio_out(buckets)))


@router.post("/funds", response_model=PortfolioResponse)
def add_fund(
    data: AddFundRequest,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Append a fund to a bucket."""
    buckets = portfolio.add_fund(
        bucket_index=data.bucket_index,
        name=data.name,
        code=data.code,
        current=data.current,
        weight=data.weight,
    )
    return PortfolioResponse.from_result(
        Result.ok(portfolio_out(buckets), message="Fund added")
    )


@router.put("/funds", response_model=PortfolioResponse)
def update_fund_field(
    data: UpdateFundFieldRequest,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Update a single field of a fund."""
    buckets = portfolio.edit_fund_field(
        bucket_index=data.bucket_index,
        fund_index=data.fund_index,
        field=data.field,
        value=data.value,
    )
    return PortfolioResponse.from_result(
        Result.ok(portfolio_out(buckets), message="Fund updated")
    )


@router.patch("/funds", response_model=PortfolioResponse)
def edit_fund(
    data: EditFundRequest,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Update several fields of a fund in one atomic step."""
    patch = FundPatch(
        name=data.name,
        code=data.code,
        current=data.current,
        weight=data.weight,
    )
    buckets = portfolio.edit_fund(data.bucket_index, data.fund_index, patch)
    return PortfolioResponse.from_result(
        Result.ok(portfolio_out(buckets), message="Fund updated")
    )


@router.delete("/funds", response_model=PortfolioResponse)
def delete_fund(
    data: DeleteFundRequest,
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Delete a fund."""
    buckets = portfolio.delete_fund(data.bucket_index, data.fund_index)
    return PortfolioResponse.from_result(
        Result.ok(portfolio_out(buckets), message="Fund deleted")
    )
