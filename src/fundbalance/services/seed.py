"""Default portfolio inserted on first start."""

from decimal import Decimal

from fundbalance.domain.models import Bucket, Fund


def default_buckets() -> list[Bucket]:
    """Return a fresh copy of the starter portfolio (short/medium/long)."""
    return [
        Bucket(
            name="Short-term (money market)",
            target_rate=Decimal("0.10"),
            funds=[
                Fund("E Fund Money Market A", "000009", Decimal("20"), Decimal("1.0")),
            ],
        ),
        Bucket(
            name="Medium-term (bonds)",
            target_rate=Decimal("0.30"),
            funds=[
                Fund("GF CDB Bond 7-10Y A", "003375", Decimal("50"), Decimal("0.5")),
                Fund("Bosera Credit Bond A", "050026", Decimal("40"), Decimal("0.5")),
            ],
        ),
        Bucket(
            name="Long-term (equities)",
            target_rate=Decimal("0.60"),
            funds=[
                Fund("E Fund CSI 300 ETF Feeder A", "110020", Decimal("100"), Decimal("0.4")),
                Fund("Southern CSI 500 ETF Feeder A", "160119", Decimal("80"), Decimal("0.3")),
                Fund("China Universal Overseas Internet 50", "006327", Decimal("60"), Decimal("0.3")),
            ],
        ),
    ]
