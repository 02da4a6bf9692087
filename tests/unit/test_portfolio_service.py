"""
Unit tests for PortfolioService.

Tests cover:
- Adding funds with per-field validation
- Single-field and batched edits
- Deleting funds by position
- Unknown bucket/fund positions
- Optional weight budget
- Default seeding
"""

from decimal import Decimal

import pytest

from fundbalance.core.exceptions import ValidationError, NotFoundError
from fundbalance.domain.models import FundField, FundPatch
from fundbalance.services import PortfolioService, default_buckets
from fundbalance.services.portfolio_service import parse_decimal


# =============================================================================
# ADD FUND
# =============================================================================


class TestAddFund:
    """Tests for PortfolioService.add_fund."""

    def test_add_fund_appends_to_bucket(self, portfolio_service, seeded_portfolio):
        """
        GIVEN the default portfolio
        WHEN I add a fund to bucket 0
        THEN it is the last fund of bucket 0 and other buckets are untouched
        """
        buckets = portfolio_service.add_fund(0, "New Fund", "999999", "12.5", "0.5")

        added = buckets[0].funds[-1]
        assert added.name == "New Fund"
        assert added.code == "999999"
        assert added.current == Decimal("12.5")
        assert added.weight == Decimal("0.5")
        assert len(buckets[0].funds) == len(seeded_portfolio[0].funds) + 1
        assert buckets[1] == seeded_portfolio[1]
        assert buckets[2] == seeded_portfolio[2]

    def test_add_fund_strips_text(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.add_fund(1, "  Padded  ", " 123 ", 1, 1)

        assert buckets[1].funds[-1].name == "Padded"
        assert buckets[1].funds[-1].code == "123"

    def test_weight_of_one_is_accepted(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.add_fund(0, "Full", "F", "0", "1")

        assert buckets[0].funds[-1].weight == Decimal("1")

    @pytest.mark.parametrize("weight", ["0", "1.5", "-0.1"])
    def test_weight_outside_range_rejected(self, portfolio_service, seeded_portfolio, weight):
        """
        GIVEN a weight outside (0, 1]
        WHEN I add a fund
        THEN ValidationError is raised and the portfolio is unchanged
        """
        with pytest.raises(ValidationError):
            portfolio_service.add_fund(0, "X", "X", "10", weight)

        assert portfolio_service.list_buckets() == seeded_portfolio

    @pytest.mark.parametrize("name,code", [("", "C"), ("   ", "C"), ("N", ""), ("N", None)])
    def test_missing_name_or_code_rejected(self, portfolio_service, seeded_portfolio, name, code):
        with pytest.raises(ValidationError):
            portfolio_service.add_fund(0, name, code, "10", "0.5")

    def test_non_numeric_current_rejected(self, portfolio_service, seeded_portfolio):
        with pytest.raises(ValidationError, match="current"):
            portfolio_service.add_fund(0, "X", "X", "abc", "0.5")

    def test_negative_current_rejected(self, portfolio_service, seeded_portfolio):
        with pytest.raises(ValidationError, match="negative"):
            portfolio_service.add_fund(0, "X", "X", "-1", "0.5")

    def test_unknown_bucket_is_not_found(self, portfolio_service, seeded_portfolio):
        with pytest.raises(NotFoundError) as exc_info:
            portfolio_service.add_fund(3, "X", "X", "10", "0.5")

        assert exc_info.value.resource == "Bucket"
        assert portfolio_service.list_buckets() == seeded_portfolio

    def test_validation_runs_before_bucket_lookup(self, portfolio_service, seeded_portfolio):
        with pytest.raises(ValidationError):
            portfolio_service.add_fund(99, "", "X", "10", "0.5")


# =============================================================================
# EDIT FUND
# =============================================================================


class TestEditFundField:
    """Tests for PortfolioService.edit_fund_field."""

    def test_edit_current(self, portfolio_service, seeded_portfolio):
        """
        GIVEN the default portfolio
        WHEN I set current of fund (1, 0) to 70
        THEN only that field changes
        """
        buckets = portfolio_service.edit_fund_field(1, 0, "current", "70")

        before = seeded_portfolio[1].funds[0]
        after = buckets[1].funds[0]
        assert after.current == Decimal("70")
        assert (after.name, after.code, after.weight) == (before.name, before.code, before.weight)
        assert after.fund_id == before.fund_id

    def test_edit_accepts_enum_field(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.edit_fund_field(0, 0, FundField.NAME, "Renamed")

        assert buckets[0].funds[0].name == "Renamed"

    def test_invalid_field_rejected(self, portfolio_service, seeded_portfolio):
        with pytest.raises(ValidationError, match="Invalid field"):
            portfolio_service.edit_fund_field(0, 0, "color", "red")

    def test_invalid_value_leaves_fund_unchanged(self, portfolio_service, seeded_portfolio):
        with pytest.raises(ValidationError):
            portfolio_service.edit_fund_field(1, 0, "weight", "2")

        assert portfolio_service.list_buckets() == seeded_portfolio

    def test_unknown_fund_is_not_found(self, portfolio_service, seeded_portfolio):
        with pytest.raises(NotFoundError) as exc_info:
            portfolio_service.edit_fund_field(0, 5, "current", "1")

        assert exc_info.value.resource == "Fund"


class TestEditFund:
    """Tests for the batched PortfolioService.edit_fund."""

    def test_batched_edit_applies_all_fields(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.edit_fund(
            2, 1, FundPatch(name="Renamed", current="90", weight="0.25")
        )

        fund = buckets[2].funds[1]
        assert fund.name == "Renamed"
        assert fund.current == Decimal("90")
        assert fund.weight == Decimal("0.25")
        assert fund.code == seeded_portfolio[2].funds[1].code

    def test_one_bad_field_rejects_whole_edit(self, portfolio_service, seeded_portfolio):
        """
        GIVEN a patch with a valid name and an invalid weight
        WHEN I apply it
        THEN ValidationError is raised and the name is not changed either
        """
        with pytest.raises(ValidationError):
            portfolio_service.edit_fund(2, 1, FundPatch(name="Renamed", weight="5"))

        assert portfolio_service.list_buckets() == seeded_portfolio

    def test_empty_patch_rejected(self, portfolio_service, seeded_portfolio):
        with pytest.raises(ValidationError, match="No fields"):
            portfolio_service.edit_fund(0, 0, FundPatch())


# =============================================================================
# DELETE FUND
# =============================================================================


class TestDeleteFund:
    """Tests for PortfolioService.delete_fund."""

    def test_delete_shifts_later_positions(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.delete_fund(2, 0)

        assert len(buckets[2].funds) == 2
        assert buckets[2].funds[0] == seeded_portfolio[2].funds[1]
        assert buckets[2].funds[1] == seeded_portfolio[2].funds[2]

    def test_delete_last_fund_leaves_empty_bucket(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.delete_fund(0, 0)

        assert buckets[0].funds == []
        assert len(buckets) == 3

    def test_delete_unknown_bucket(self, portfolio_service, seeded_portfolio):
        """
        GIVEN three buckets
        WHEN I delete fund (5, 0)
        THEN NotFoundError is raised and the portfolio is unchanged
        """
        with pytest.raises(NotFoundError):
            portfolio_service.delete_fund(5, 0)

        assert portfolio_service.list_buckets() == seeded_portfolio

    @pytest.mark.parametrize("bucket_index,fund_index", [(-1, 0), (0, -1), (0, 1)])
    def test_delete_out_of_range(self, portfolio_service, seeded_portfolio, bucket_index, fund_index):
        with pytest.raises(NotFoundError):
            portfolio_service.delete_fund(bucket_index, fund_index)


# =============================================================================
# WEIGHT BUDGET
# =============================================================================


class TestWeightBudget:
    """Weight budget is enforced only when enabled."""

    @pytest.fixture
    def strict_service(self, portfolio_repo) -> PortfolioService:
        service = PortfolioService(portfolio_repo, enforce_weight_budget=True)
        service.seed_defaults(default_buckets())
        return service

    def test_disabled_by_default(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.add_fund(1, "Extra", "E", "10", "0.5")

        assert sum(f.weight for f in buckets[1].funds) == Decimal("1.5")

    def test_add_over_budget_rejected(self, strict_service):
        with pytest.raises(ValidationError, match="bucket limit"):
            strict_service.add_fund(1, "Extra", "E", "10", "0.1")

    def test_edit_excludes_own_weight(self, strict_service):
        buckets = strict_service.edit_fund_field(1, 0, "weight", "0.5")

        assert buckets[1].funds[0].weight == Decimal("0.5")

    def test_edit_over_budget_rejected(self, strict_service):
        with pytest.raises(ValidationError):
            strict_service.edit_fund_field(1, 0, "weight", "0.6")


# =============================================================================
# SEEDING
# =============================================================================


class TestSeedDefaults:
    """Tests for PortfolioService.seed_defaults."""

    def test_seeds_empty_store(self, portfolio_service):
        assert portfolio_service.seed_defaults(default_buckets()) is True

        buckets = portfolio_service.list_buckets()
        assert [b.name for b in buckets] == [b.name for b in default_buckets()]
        assert sum(b.target_rate for b in buckets) == Decimal("1")

    def test_second_seed_is_a_no_op(self, portfolio_service):
        portfolio_service.seed_defaults(default_buckets())

        assert portfolio_service.seed_defaults(default_buckets()) is False
        assert len(portfolio_service.list_buckets()) == 3


# =============================================================================
# NUMBER PARSING
# =============================================================================


class TestParseDecimal:
    """Tests for parse_decimal."""

    @pytest.mark.parametrize("value,expected", [
        ("0.05", Decimal("0.05")),
        (" 12 ", Decimal("12")),
        (3, Decimal("3")),
        (0.5, Decimal("0.5")),
        (Decimal("1.25"), Decimal("1.25")),
    ])
    def test_valid_numbers(self, value, expected):
        assert parse_decimal(value, "x") == expected

    @pytest.mark.parametrize("value", ["abc", "", None, True, "NaN", "Infinity"])
    def test_invalid_numbers(self, value):
        with pytest.raises(ValidationError):
            parse_decimal(value, "x")


# =============================================================================
# STORED RANGE AND SCALE
# =============================================================================


class TestStoredRange:
    """Values must fit the columns they are stored in."""

    @pytest.mark.parametrize("current", ["1e400", "1e14", "-1e400"])
    def test_oversized_current_rejected(self, portfolio_service, seeded_portfolio, current):
        """
        GIVEN a current value too large for the amount column
        WHEN I add a fund
        THEN ValidationError is raised and nothing is stored
        """
        with pytest.raises(ValidationError):
            portfolio_service.add_fund(0, "Huge", "H", current, "0.5")

        assert portfolio_service.list_buckets() == seeded_portfolio

    def test_large_current_accepted(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.add_fund(0, "Big", "B", "9999999999.9999", "0.5")

        assert buckets[0].funds[-1].current == Decimal("9999999999.9999")

    def test_current_rounded_to_four_places(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.add_fund(0, "Odd", "O", "12.34567", "0.5")

        assert buckets[0].funds[-1].current == Decimal("12.3457")

    def test_weight_rounding_to_zero_rejected(self, portfolio_service, seeded_portfolio):
        """
        GIVEN a weight that is 0 at six decimal places
        WHEN I add a fund or edit a weight
        THEN ValidationError is raised and no zero weight is stored
        """
        with pytest.raises(ValidationError):
            portfolio_service.add_fund(0, "Tiny", "T", "1", "0.0000001")
        with pytest.raises(ValidationError):
            portfolio_service.edit_fund_field(1, 0, "weight", "0.0000004")

        assert portfolio_service.list_buckets() == seeded_portfolio

    def test_weight_rounded_to_six_places(self, portfolio_service, seeded_portfolio):
        buckets = portfolio_service.edit_fund_field(1, 0, "weight", "0.1234567")

        assert buckets[1].funds[0].weight == Decimal("0.123457")
