"""Token transfer gateway interface.

The pool never keeps token balances itself; it asks a gateway to move
tokens between participants and the pool's custody account. Both calls are
all-or-nothing and raise GatewayTransferError on rejection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

import structlog

from miniswap.errors import GatewayTransferError

logger = structlog.get_logger()


@runtime_checkable
class TokenGateway(Protocol):
    """Capabilities the pool needs from the surrounding token ledger."""

    def pull(self, token: str, from_: str, to: str, amount: int) -> None:
        """Move `amount` of `token` from `from_` into custody account `to`."""
        ...

    def push(self, token: str, to: str, amount: int) -> None:
        """Move `amount` of `token` out of pool custody to `to`."""
        ...


@runtime_checkable
class BalanceReader(Protocol):
    """Optional gateway capability used for holdings queries."""

    def balance_of(self, token: str, account: str) -> int: ...


@runtime_checkable
class AllowanceLedger(Protocol):
    """Optional gateway capability: read and set spending authorizations."""

    def allowance(self, token: str, owner: str, spender: str) -> int: ...

    def approve(self, token: str, owner: str, spender: str, amount: int) -> None: ...


@dataclass(frozen=True)
class Transfer:
    """One completed gateway transfer."""

    direction: Literal["pull", "push"]
    token: str
    account: str
    amount: int


class TransferJournal:
    """Records the transfers of one pool operation so they can be undone.

    A pool operation may need several transfers (two pulls for a deposit,
    a pull and a push for a swap). If a later step fails, `compensate()`
    replays the opposite transfers in reverse order so the participant ends
    up where they started. On gateways that expose allowances, the
    authorization a pull spent (forward or reversing) is granted back, so a
    failed operation leaves allowances as it found them.
    """

    def __init__(self, gateway: TokenGateway, custody_account: str) -> None:
        self.gateway = gateway
        self.custody_account = custody_account
        self.completed: list[Transfer] = []

    def pull(self, token: str, from_: str, amount: int) -> None:
        if amount == 0:
            return
        self.gateway.pull(token, from_, self.custody_account, amount)
        self.completed.append(Transfer("pull", token, from_, amount))

    def push(self, token: str, to: str, amount: int) -> None:
        if amount == 0:
            return
        self.gateway.push(token, to, amount)
        self.completed.append(Transfer("push", token, to, amount))

    def compensate(self) -> list[Transfer]:
        """Reverse every completed transfer, newest first.

        Returns:
            Transfers the gateway refused to reverse, in the order they
            originally happened. Their effect on custody is permanent.
        """
        unreversed: list[Transfer] = []
        while self.completed:
            transfer = self.completed.pop()
            try:
                self._reverse(transfer)
            except GatewayTransferError:
                logger.exception(
                    "compensation_failed",
                    direction=transfer.direction,
                    token=transfer.token,
                    account=transfer.account,
                    amount=transfer.amount,
                )
                unreversed.append(transfer)
        unreversed.reverse()
        return unreversed

    def _reverse(self, transfer: Transfer) -> None:
        if transfer.direction == "pull":
            self.gateway.push(transfer.token, transfer.account, transfer.amount)
        else:
            self.gateway.pull(
                transfer.token, transfer.account, self.custody_account, transfer.amount
            )
        # Either way exactly one pull of `amount` spent the participant's allowance
        self._regrant(transfer.token, transfer.account, transfer.amount)

    def _regrant(self, token: str, owner: str, amount: int) -> None:
        if not isinstance(self.gateway, AllowanceLedger):
            return
        current = self.gateway.allowance(token, owner, self.custody_account)
        self.gateway.approve(token, owner, self.custody_account, current + amount)
