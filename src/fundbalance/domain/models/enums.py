"""Enumerations for domain models."""

from enum import Enum


class Advice(str, Enum):
    """Discrete rebalance recommendation for one fund."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class FundField(str, Enum):
    """Fund attributes that can be edited one at a time."""

    NAME = "name"
    CODE = "code"
    CURRENT = "current"
    WEIGHT = "weight"
