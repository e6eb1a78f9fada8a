"""Pool error classes.

Every error aborts the triggering operation and leaves the pool unchanged.
`http_status` is the status code the HTTP layer answers with.
"""


class PoolError(Exception):
    """Base error for pool operations."""

    http_status = 400

    @property
    def code(self) -> str:
        return type(self).__name__


class UnknownTokenError(PoolError):
    """Token is not one of the pool's two configured tokens."""

    pass


class InvalidPairError(PoolError):
    """Token pair is not the configured pair, or both sides are the same token."""

    pass


class EmptyPoolError(PoolError):
    """Pricing or withdrawal attempted while the pool holds no liquidity."""

    http_status = 409


class ZeroAmountError(PoolError):
    """Amount must be strictly positive."""

    pass


class InvalidAmountError(PoolError):
    """Amount is negative or not an integer."""

    pass


class UnbalancedDepositError(PoolError):
    """Deposit does not match the pool's current reserve ratio exactly."""

    http_status = 409


class NegligibleContributionError(PoolError):
    """Deposit is too small to be issued any share."""

    pass


class InsufficientShareError(PoolError):
    """Withdrawal exceeds the caller's share balance."""

    http_status = 409


class ShareExceedsTotalError(PoolError):
    """Quoted share exceeds the pool's total share."""

    pass


class InsufficientReserveError(PoolError):
    """Requested output would drain the output reserve."""

    http_status = 409


class GatewayTransferError(PoolError):
    """The token ledger rejected a pull or push."""

    http_status = 402


class PoolInvariantError(PoolError):
    """Internal accounting invariant is broken."""

    http_status = 500


class InvalidParticipantError(PoolError):
    """Participant id is empty or names the pool's own custody account."""

    pass
