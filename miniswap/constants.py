"""Pool-wide arithmetic constants.

All pool math is integer math; these values fix the scale of share issuance
and the swap fee.
"""

# Share unit scale. Only used to size the very first issuance.
PRECISION = 1_000_000

# Shares issued for the first deposit into an empty pool, independent of
# the deposited amounts.
INITIAL_SHARE = 100 * PRECISION

# Swap fee of 0.3%: 997/1000 of the input is priced, the rest stays in the pool
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

# Default gateway account holding the pool's custody balances
DEFAULT_POOL_ACCOUNT = "miniswap-pool"
