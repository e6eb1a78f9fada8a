"""In-memory token ledger implementing the gateway.

Useful for local runs, the HTTP service and tests. Balances and allowances
live in dicts; every public call is serialized by a lock.
"""

from __future__ import annotations

import threading
from collections import defaultdict

import structlog

from miniswap.constants import DEFAULT_POOL_ACCOUNT
from miniswap.errors import GatewayTransferError, InvalidAmountError

logger = structlog.get_logger()


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidAmountError(f"Transfer amount must be a non-negative int, got {amount!r}")


class InMemoryTokenLedger:
    """Multi-token balance sheet with ERC20-style allowances.

    `pull` spends the allowance the owner granted to the custody account,
    `push` pays out of the custody account's own balance.
    """

    def __init__(self, custody_account: str = DEFAULT_POOL_ACCOUNT) -> None:
        self.custody_account = custody_account
        self._balances: dict[tuple[str, str], int] = defaultdict(int)
        self._allowances: dict[tuple[str, str, str], int] = defaultdict(int)
        self._lock = threading.Lock()

    def balance_of(self, token: str, account: str) -> int:
        with self._lock:
            return self._balances.get((token, account), 0)

    def allowance(self, token: str, owner: str, spender: str) -> int:
        with self._lock:
            return self._allowances.get((token, owner, spender), 0)

    def mint(self, token: str, account: str, amount: int) -> int:
        """Credit freshly created tokens to `account` (faucet).

        Returns:
            The account's new balance
        """
        _check_amount(amount)
        with self._lock:
            self._balances[(token, account)] += amount
            balance = self._balances[(token, account)]
        logger.debug("tokens_minted", token=token, account=account, amount=amount)
        return balance

    def approve(self, token: str, owner: str, spender: str, amount: int) -> None:
        """Set how much of owner's `token` the spender may pull."""
        _check_amount(amount)
        with self._lock:
            self._allowances[(token, owner, spender)] = amount

    def pull(self, token: str, from_: str, to: str, amount: int) -> None:
        _check_amount(amount)
        with self._lock:
            allowed = self._allowances.get((token, from_, to), 0)
            if allowed < amount:
                raise GatewayTransferError(
                    f"{from_!r} authorized {to!r} for {allowed} {token}, need {amount}"
                )
            self._move(token, from_, to, amount)
            self._allowances[(token, from_, to)] = allowed - amount

    def push(self, token: str, to: str, amount: int) -> None:
        _check_amount(amount)
        with self._lock:
            self._move(token, self.custody_account, to, amount)

    def _move(self, token: str, from_: str, to: str, amount: int) -> None:
        balance = self._balances.get((token, from_), 0)
        if balance < amount:
            raise GatewayTransferError(f"{from_!r} holds {balance} {token}, need {amount}")
        self._balances[(token, from_)] = balance - amount
        self._balances[(token, to)] += amount
