"""Token transfer gateway: the pool's view of the external token ledgers."""

from miniswap.gateway.base import (
    AllowanceLedger,
    BalanceReader,
    TokenGateway,
    Transfer,
    TransferJournal,
)
from miniswap.gateway.memory import InMemoryTokenLedger

__all__ = [
    "AllowanceLedger",
    "BalanceReader",
    "InMemoryTokenLedger",
    "TokenGateway",
    "Transfer",
    "TransferJournal",
]
