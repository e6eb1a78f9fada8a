"""Pool state, share ledger, pricing engine and liquidity operations."""

from miniswap.pool.ledger import ShareLedger
from miniswap.pool.state import PoolDetails, PoolSnapshot, PoolState

__all__ = ["PoolDetails", "PoolSnapshot", "PoolState", "ShareLedger"]
