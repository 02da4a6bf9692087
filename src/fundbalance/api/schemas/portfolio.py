"""Pydantic schemas for bucket and fund endpoints."""

from typing import Optional, Union

from pydantic import BaseModel, Field, StrictStr

from fundbalance.domain.models import Bucket, Fund

# Numbers arrive as JSON numbers or strings; the service layer parses them so
# that a non-numeric value is reported as a validation error. Strings and ints
# are matched before float so a numeric code such as 110020 keeps its text.
NumberInput = Union[StrictStr, int, float]


class FundOut(BaseModel):
    """Response schema for a single fund."""

    name: str
    code: str
    current: float
    weight: float

    @classmethod
    def from_domain(cls, fund: Fund) -> "FundOut":
        return cls(
            name=fund.name,
            code=fund.code,
            current=fund.current,
            weight=fund.weight,
        )


class BucketOut(BaseModel):
    """Response schema for a bucket and its funds."""

    name: str
    target_rate: float
    funds: list[FundOut]

    @classmethod
    def from_domain(cls, bucket: Bucket) -> "BucketOut":
        return cls(
            name=bucket.name,
            target_rate=bucket.target_rate,
            funds=[FundOut.from_domain(f) for f in bucket.funds],
        )


def portfolio_out(buckets: list[Bucket]) -> list[BucketOut]:
    """Convert a portfolio snapshot to its response form."""
    return [BucketOut.from_domain(b) for b in buckets]


class AddFundRequest(BaseModel):
    """Request schema for adding a fund to a bucket."""

    bucket_index: int = Field(..., description="Position of the target bucket")
    name: str
    code: str
    current: NumberInput
    weight: NumberInput = Field(..., description="Share of the bucket, in (0, 1]")


class UpdateFundFieldRequest(BaseModel):
    """Request schema for editing one field of a fund."""

    bucket_index: int
    fund_index: int
    field: str = Field(..., description="One of name, code, current, weight")
    value: NumberInput


class EditFundRequest(BaseModel):
    """Request schema for an atomic multi-field fund edit."""

    bucket_index: int
    fund_index: int
    name: Optional[str] = None
    code: Optional[str] = None
    current: Optional[NumberInput] = None
    weight: Optional[NumberInput] = None


class DeleteFundRequest(BaseModel):
    """Request schema for deleting a fund."""

    bucket_index: int
    fund_index: int
