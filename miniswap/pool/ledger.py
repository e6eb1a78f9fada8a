"""Per-participant share balances."""

from __future__ import annotations

from collections.abc import Iterator

from miniswap.errors import InsufficientShareError


class ShareLedger:
    """Sparse map of participant -> share balance.

    Absent participants hold zero shares. Balances that drop to zero are
    removed, so a zero balance and absence are the same thing.
    """

    def __init__(self, shares: dict[str, int] | None = None) -> None:
        self._shares: dict[str, int] = {}
        if shares:
            self.replace(shares)

    def share_of(self, participant: str) -> int:
        return self._shares.get(participant, 0)

    def credit(self, participant: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot credit negative share: {amount}")
        if amount:
            self._shares[participant] = self.share_of(participant) + amount

    def debit(self, participant: str, amount: int) -> None:
        """Remove `amount` shares from a participant.

        Raises:
            InsufficientShareError: If the participant holds fewer shares
        """
        balance = self.share_of(participant)
        if amount > balance:
            raise InsufficientShareError(
                f"{participant!r} holds {balance} shares, cannot remove {amount}"
            )
        remaining = balance - amount
        if remaining:
            self._shares[participant] = remaining
        else:
            self._shares.pop(participant, None)

    def total(self) -> int:
        return sum(self._shares.values())

    def items(self) -> Iterator[tuple[str, int]]:
        return iter(self._shares.items())

    def replace(self, shares: dict[str, int]) -> None:
        """Overwrite all balances, dropping zero entries."""
        self._shares = {holder: amount for holder, amount in shares.items() if amount}

    def __len__(self) -> int:
        return len(self._shares)

    def __contains__(self, participant: object) -> bool:
        return participant in self._shares
