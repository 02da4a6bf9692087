"""Fund bucket rebalancer: portfolio store, rebalance engine and history."""

__version__ = "0.1.0"
