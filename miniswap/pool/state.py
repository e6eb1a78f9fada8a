"""Pool state: reserves, total share, and structural validation.

PoolState is the ground truth the pricing engine reads and the liquidity
operations mutate. The validation helpers here run before any economic
logic and raise typed PoolError subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from miniswap.config import PoolConfig
from miniswap.errors import (
    EmptyPoolError,
    InvalidAmountError,
    InvalidPairError,
    PoolInvariantError,
    UnknownTokenError,
    ZeroAmountError,
)
from miniswap.safe_int import S

if TYPE_CHECKING:
    from collections.abc import Iterable

    from miniswap.gateway.base import Transfer
    from miniswap.pool.ledger import ShareLedger


@dataclass(frozen=True)
class PoolSnapshot:
    """Copy of the mutable pool state, used to roll back a failed operation."""

    reserves: tuple[tuple[str, int], ...]
    total_share: int
    shares: tuple[tuple[str, int], ...]


@dataclass(frozen=True)
class PoolDetails:
    """Public view of the pool's reserves and share supply."""

    token_x: str
    token_y: str
    reserve_x: int
    reserve_y: int
    total_share: int


@dataclass
class PoolState:
    """Reserves and total share supply of one two-token pool.

    Invariant: total_share == 0 exactly when both reserves are 0.
    """

    config: PoolConfig
    reserves: dict[str, int] = field(default_factory=dict)
    total_share: int = 0

    def __post_init__(self) -> None:
        if not self.reserves:
            self.reserves = {token: 0 for token in self.config.tokens}
        elif set(self.reserves) != set(self.config.tokens):
            raise UnknownTokenError(
                f"Reserves {sorted(self.reserves)} do not match pool tokens {self.config.tokens}"
            )

    @property
    def is_active(self) -> bool:
        return self.total_share > 0

    def require_active(self) -> None:
        """Raise EmptyPoolError if the pool holds no liquidity."""
        if self.total_share == 0:
            raise EmptyPoolError("Pool has no liquidity")

    def require_known_token(self, token: str) -> None:
        """Raise UnknownTokenError if token is not one of the pool's tokens."""
        if token not in self.reserves:
            raise UnknownTokenError(f"Token {token!r} not in pool")

    def require_distinct_pair(self, token_a: str, token_b: str) -> None:
        """Raise InvalidPairError unless (token_a, token_b) is the configured pair."""
        if token_a == token_b:
            raise InvalidPairError(f"Pair tokens must differ, got {token_a!r} twice")
        for token in (token_a, token_b):
            if token not in self.reserves:
                raise InvalidPairError(
                    f"Token {token!r} not in pool pair {self.config.tokens}"
                )

    def pair_of(self, token: str) -> str:
        """Return the configured token that is not `token`."""
        self.require_known_token(token)
        token_x, token_y = self.config.tokens
        return token_y if token == token_x else token_x

    def reserve_of(self, token: str) -> int:
        self.require_known_token(token)
        return self.reserves[token]

    def details(self) -> PoolDetails:
        token_x, token_y = self.config.tokens
        return PoolDetails(
            token_x=token_x,
            token_y=token_y,
            reserve_x=self.reserves[token_x],
            reserve_y=self.reserves[token_y],
            total_share=self.total_share,
        )

    def snapshot(self, ledger: ShareLedger) -> PoolSnapshot:
        return PoolSnapshot(
            reserves=tuple(self.reserves.items()),
            total_share=self.total_share,
            shares=tuple(ledger.items()),
        )

    def restore(self, snapshot: PoolSnapshot, ledger: ShareLedger) -> None:
        self.reserves = dict(snapshot.reserves)
        self.total_share = snapshot.total_share
        ledger.replace(dict(snapshot.shares))

    def settle(self, transfers: Iterable[Transfer]) -> None:
        """Book transfers that went through and could not be reversed.

        Used after a rollback so the reserves match what custody actually
        holds. Shares are left as restored.
        """
        for transfer in transfers:
            if transfer.direction == "pull":
                self.reserves[transfer.token] += transfer.amount
            else:
                remaining = S(self.reserves[transfer.token]) - transfer.amount
                self.reserves[transfer.token] = remaining.value

    def check_invariants(self, ledger: ShareLedger) -> None:
        """Raise PoolInvariantError if the accounting invariants do not hold."""
        reserves_empty = all(amount == 0 for amount in self.reserves.values())
        if (self.total_share == 0) != reserves_empty:
            raise PoolInvariantError(
                f"total_share={self.total_share} inconsistent with reserves={self.reserves}"
            )
        if any(amount < 0 for amount in self.reserves.values()):
            raise PoolInvariantError(f"Negative reserve: {self.reserves}")
        if ledger.total() != self.total_share:
            raise PoolInvariantError(
                f"Ledger sum {ledger.total()} != total_share {self.total_share}"
            )


def require_amount(amount: int, name: str = "amount") -> None:
    """Raise InvalidAmountError unless amount is a non-negative int."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(f"{name} must be an int, got {type(amount).__name__}")
    if amount < 0:
        raise InvalidAmountError(f"{name} must be non-negative, got {amount}")


def require_positive(amount: int, name: str = "amount") -> None:
    """Raise ZeroAmountError unless amount is a strictly positive int."""
    require_amount(amount, name)
    if amount == 0:
        raise ZeroAmountError(f"{name} must be positive")
