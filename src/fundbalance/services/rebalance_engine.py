"""Rebalance engine: pure threshold-deviation classification."""

from decimal import Decimal
from typing import Sequence

from fundbalance.core.amounts import RATE_SCALE, quantize_amount, to_rate
from fundbalance.core.exceptions import ValidationError
from fundbalance.domain.models import Advice, Bucket, Fund, Suggestion
from fundbalance.domain.views import BucketSuggestions, RebalanceResult

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


class RebalanceEngine:
    """
    Computes target values and BUY/SELL/HOLD advice for every fund.

    Stateless and free of I/O: the same buckets and threshold always give the
    same result, and the input buckets are never modified.

    Amounts are rounded to 4 decimal places and the threshold to 6, the
    scales history stores them at.

    Algorithm:
        total_value  = Σ fund.current over all buckets
        bucket_target = total_value × bucket.target_rate
        fund_target   = bucket_target × fund.weight   (weights not renormalized)
        diff          = fund.current − fund_target

    A fund is SELL when diff > threshold × fund_target, BUY when
    diff < −threshold × fund_target, otherwise HOLD (the boundary is HOLD).
    A zero target falls back to the sign of diff.
    """

    def run(self, buckets: Sequence[Bucket], threshold: Decimal) -> RebalanceResult:
        """Run the engine over a portfolio snapshot."""
        threshold = to_rate(Decimal(str(threshold)), "threshold")
        if threshold <= _ZERO:
            raise ValidationError(
                f"Threshold must be greater than 0 at {RATE_SCALE} decimal places"
            )

        total_value = quantize_amount(
            sum((f.current for b in buckets for f in b.funds), _ZERO)
        )

        bucket_results = []
        for bucket in buckets:
            bucket_target = quantize_amount(total_value * bucket.target_rate)
            # Fund targets round from the exact product, not the rounded bucket target
            suggestions = tuple(
                self.classify(
                    fund,
                    quantize_amount(total_value * bucket.target_rate * fund.weight),
                    threshold,
                )
                for fund in bucket.funds
            )
            bucket_results.append(
                BucketSuggestions(
                    name=bucket.name,
                    target_rate=bucket.target_rate,
                    current_value=bucket.current_value,
                    target_value=bucket_target,
                    suggestions=suggestions,
                )
            )

        return RebalanceResult(
            threshold=threshold,
            total_value=total_value,
            buckets=tuple(bucket_results),
        )

    def classify(self, fund: Fund, target: Decimal, threshold: Decimal) -> Suggestion:
        """Build the suggestion for one fund given its target value."""
        diff = quantize_amount(fund.current - target)
        advice, reason = self._advise(fund.current, target, diff, threshold)
        return Suggestion(
            fund_id=fund.fund_id,
            fund_name=fund.name,
            fund_code=fund.code,
            current_value=fund.current,
            target_value=target,
            diff_value=diff,
            advice=advice,
            reason=reason,
        )

    @staticmethod
    def _advise(
        current: Decimal,
        target: Decimal,
        diff: Decimal,
        threshold: Decimal,
    ) -> tuple[Advice, str]:
        threshold_pct = threshold * _HUNDRED

        if target <= _ZERO:
            if diff > _ZERO:
                return Advice.SELL, (
                    f"Target is 0 but current value is {current:.2f}; sell {diff:.2f}"
                )
            if diff < _ZERO:
                return Advice.BUY, f"Target is {target:.2f}; buy {abs(diff):.2f}"
            return Advice.HOLD, "Current and target are both 0; within tolerance"

        relative_pct = diff / target * _HUNDRED
        band = threshold * target

        if diff > band:
            return Advice.SELL, (
                f"Current {current:.2f} is {relative_pct:.1f}% above target "
                f"{target:.2f}, exceeds {threshold_pct:.1f}% threshold; "
                f"sell {diff:.2f}"
            )
        if diff < -band:
            return Advice.BUY, (
                f"Current {current:.2f} is {abs(relative_pct):.1f}% below target "
                f"{target:.2f}, exceeds {threshold_pct:.1f}% threshold; "
                f"buy {abs(diff):.2f}"
            )
        return Advice.HOLD, (
            f"Deviation {relative_pct:+.1f}% from target {target:.2f} is within "
            f"±{threshold_pct:.1f}% tolerance"
        )
