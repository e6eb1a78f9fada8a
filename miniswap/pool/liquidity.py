"""Liquidity operations: provide, withdraw and swap.

Each operation follows the same shape:
    validate -> quote (pricing engine) -> transfer + mutate -> return amount

Operations are serialized by a per-pool lock. Anything raised inside an
operation restores the pre-operation state and reverses the transfers that
already went through, so a failed call leaves the pool exactly as it was.
If the gateway refuses one of those reversals, the transfer is booked into
the restored reserves instead, keeping them equal to what custody holds.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import structlog

from miniswap.config import PoolConfig
from miniswap.errors import (
    InsufficientReserveError,
    InsufficientShareError,
    InvalidParticipantError,
    PoolError,
)
from miniswap.gateway.base import BalanceReader, TokenGateway, TransferJournal
from miniswap.gateway.memory import InMemoryTokenLedger
from miniswap.pool import pricing
from miniswap.pool.ledger import ShareLedger
from miniswap.pool.state import PoolDetails, PoolState, require_positive
from miniswap.safe_int import S, Underflow

logger = structlog.get_logger()


@dataclass(frozen=True)
class Holdings:
    """A participant's token balances on the gateway and share in the pool."""

    participant: str
    balance_x: int
    balance_y: int
    share: int


class LiquidityPool:
    """Two-token constant product pool.

    Args:
        config: Pool tokens and custody account
        gateway: Token ledger the pool pulls from and pushes to
    """

    def __init__(self, config: PoolConfig, gateway: TokenGateway) -> None:
        self.config = config
        self.gateway = gateway
        self.state = PoolState(config)
        self.ledger = ShareLedger()
        self._lock = threading.Lock()

    # --- Mutating operations ---

    def provide(
        self,
        participant: str,
        token_a: str,
        amount_a: int,
        token_b: str,
        amount_b: int,
    ) -> int:
        """Deposit both tokens and receive pool share.

        The first deposit into an empty pool sets the exchange rate and is
        issued INITIAL_SHARE. Later deposits must match the reserve ratio
        exactly.

        Returns:
            Share issued to the participant
        """
        self.require_participant(participant)
        with self._transaction("provide", participant) as journal:
            self.state.require_distinct_pair(token_a, token_b)
            require_positive(amount_a, "amount_a")
            require_positive(amount_b, "amount_b")
            share = pricing.quote_deposit_share(self.state, token_a, amount_a, token_b, amount_b)

            journal.pull(token_a, participant, amount_a)
            journal.pull(token_b, participant, amount_b)

            self.state.reserves[token_a] += amount_a
            self.state.reserves[token_b] += amount_b
            self.state.total_share += share
            self.ledger.credit(participant, share)
            total_share = self.state.total_share

        logger.info(
            "liquidity_provided",
            participant=participant,
            amounts={token_a: amount_a, token_b: amount_b},
            share=share,
            total_share=total_share,
        )
        return share

    def withdraw(self, participant: str, share: int) -> tuple[int, int]:
        """Burn `share` and receive both tokens pro rata.

        Returns:
            Amounts paid out, in (token_x, token_y) order
        """
        self.require_participant(participant)
        token_x, token_y = self.config.tokens
        with self._transaction("withdraw", participant) as journal:
            self.state.require_active()
            require_positive(share, "share")
            held = self.ledger.share_of(participant)
            if share > held:
                raise InsufficientShareError(
                    f"{participant!r} holds {held} shares, cannot withdraw {share}"
                )
            # Both amounts come from the same pre-mutation reserves and total share
            amount_x, amount_y = pricing.quote_withdrawal_pair(self.state, share)

            self.ledger.debit(participant, share)
            self.state.total_share = (S(self.state.total_share) - share).value
            total_share = self.state.total_share
            self.state.reserves[token_x] = (S(self.state.reserves[token_x]) - amount_x).value
            self.state.reserves[token_y] = (S(self.state.reserves[token_y]) - amount_y).value

            journal.push(token_x, participant, amount_x)
            journal.push(token_y, participant, amount_y)

        logger.info(
            "liquidity_withdrawn",
            participant=participant,
            share=share,
            amounts={token_x: amount_x, token_y: amount_y},
            total_share=total_share,
        )
        return amount_x, amount_y

    def swap(self, participant: str, token_in: str, token_out: str, amount_in: int) -> int:
        """Sell exactly `amount_in` of `token_in` for `token_out`.

        Returns:
            Amount of token_out paid to the participant
        """
        self.require_participant(participant)
        with self._transaction("swap", participant) as journal:
            self.state.require_active()
            self.state.require_distinct_pair(token_in, token_out)
            require_positive(amount_in, "amount_in")
            amount_out = pricing.quote_swap_out(self.state, token_in, amount_in)

            reserve_out = self.state.reserves[token_out]
            try:
                new_reserve_out = S(reserve_out) - amount_out
            except Underflow as err:
                raise InsufficientReserveError(
                    f"Swap output {amount_out} exceeds {token_out} reserve {reserve_out}"
                ) from err
            if not new_reserve_out:
                raise InsufficientReserveError(f"Swap would drain the {token_out} reserve")

            journal.pull(token_in, participant, amount_in)
            self.state.reserves[token_in] += amount_in
            self.state.reserves[token_out] = new_reserve_out.value
            journal.push(token_out, participant, amount_out)

        logger.info(
            "swap_executed",
            participant=participant,
            token_in=token_in,
            amount_in=amount_in,
            token_out=token_out,
            amount_out=amount_out,
        )
        return amount_out

    # --- Quotes and queries ---

    def quote_equivalent(self, token_in: str, amount_in: int) -> int:
        with self._lock:
            return pricing.quote_equivalent(self.state, token_in, amount_in)

    def quote_swap_out(self, token_in: str, amount_in: int) -> int:
        with self._lock:
            return pricing.quote_swap_out(self.state, token_in, amount_in)

    def quote_swap_in(self, token_out: str, amount_out: int) -> int:
        with self._lock:
            return pricing.quote_swap_in(self.state, token_out, amount_out)

    def quote_withdrawal(self, token: str, share: int) -> int:
        with self._lock:
            return pricing.quote_withdrawal(self.state, token, share)

    def quote_withdrawal_pair(self, share: int) -> tuple[int, int]:
        with self._lock:
            return pricing.quote_withdrawal_pair(self.state, share)

    @property
    def reserves(self) -> dict[str, int]:
        with self._lock:
            return dict(self.state.reserves)

    @property
    def total_share(self) -> int:
        with self._lock:
            return self.state.total_share

    def share_of(self, participant: str) -> int:
        with self._lock:
            return self.ledger.share_of(participant)

    def details(self) -> PoolDetails:
        with self._lock:
            return self.state.details()

    def holdings(self, participant: str) -> Holdings:
        """Gateway balances of both tokens plus pool share for one participant.

        Raises:
            TypeError: If the gateway cannot report balances
        """
        if not isinstance(self.gateway, BalanceReader):
            raise TypeError(f"{type(self.gateway).__name__} does not expose balance_of")
        token_x, token_y = self.config.tokens
        with self._lock:
            return Holdings(
                participant=participant,
                balance_x=self.gateway.balance_of(token_x, participant),
                balance_y=self.gateway.balance_of(token_y, participant),
                share=self.ledger.share_of(participant),
            )

    def require_participant(self, participant: str) -> None:
        """Raise InvalidParticipantError for an empty id or the custody account."""
        if not isinstance(participant, str) or not participant:
            raise InvalidParticipantError("participant must be a non-empty string")
        if participant == self.config.pool_account:
            raise InvalidParticipantError(
                f"{participant!r} is the pool custody account and cannot trade with the pool"
            )

    # --- Internals ---

    @contextmanager
    def _transaction(self, operation: str, participant: str) -> Iterator[TransferJournal]:
        """Run one operation under the pool lock with full rollback on failure."""
        with self._lock:
            snapshot = self.state.snapshot(self.ledger)
            journal = TransferJournal(self.gateway, self.config.pool_account)
            try:
                yield journal
                self.state.check_invariants(self.ledger)
            except Exception as exc:
                mutated = bool(journal.completed) or self.state.snapshot(self.ledger) != snapshot
                unreversed = journal.compensate()
                self.state.restore(snapshot, self.ledger)
                if unreversed:
                    self.state.settle(unreversed)
                    logger.error(
                        "transfers_unreversed",
                        operation=operation,
                        participant=participant,
                        transfers=[
                            (t.direction, t.token, t.account, t.amount) for t in unreversed
                        ],
                        reserves=dict(self.state.reserves),
                    )
                if mutated or not isinstance(exc, PoolError):
                    logger.warning(
                        "operation_rolled_back",
                        operation=operation,
                        participant=participant,
                        error=type(exc).__name__,
                        detail=str(exc),
                    )
                else:
                    logger.debug(
                        "operation_rejected",
                        operation=operation,
                        participant=participant,
                        error=exc.code,
                        detail=str(exc),
                    )
                raise


def build_pool(config: PoolConfig, gateway: TokenGateway | None = None) -> LiquidityPool:
    """Create a pool, backed by an in-memory token ledger unless a gateway is given."""
    if gateway is None:
        gateway = InMemoryTokenLedger(custody_account=config.pool_account)
    return LiquidityPool(config, gateway)
