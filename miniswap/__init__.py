"""Miniswap - a two-asset constant-product liquidity pool."""

from miniswap.config import PoolConfig
from miniswap.pool.liquidity import LiquidityPool, build_pool

__version__ = "0.1.0"
__all__ = ["LiquidityPool", "PoolConfig", "build_pool", "__version__"]
