"""Pricing engine: pure quote functions over a PoolState.

Nothing in this module mutates state, so every quote can be repeated any
number of times and returns the same result for the same reserves. The
liquidity operations call these to price a request before touching the pool.

Swap pricing is the constant product formula with a 0.3% input fee:

    amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)

All divisions are floor divisions.
"""

from __future__ import annotations

from miniswap.constants import FEE_DENOMINATOR, FEE_NUMERATOR, INITIAL_SHARE
from miniswap.errors import (
    InsufficientReserveError,
    NegligibleContributionError,
    ShareExceedsTotalError,
    UnbalancedDepositError,
)
from miniswap.pool.state import PoolState, require_amount
from miniswap.safe_int import S


def quote_equivalent(state: PoolState, token_in: str, amount_in: int) -> int:
    """Amount of the other token that balances `amount_in` at the current ratio.

    Args:
        state: Pool to price against
        token_in: Token the amount is denominated in
        amount_in: Amount of token_in

    Returns:
        reserve[other] * amount_in // reserve[token_in]
    """
    state.require_active()
    require_amount(amount_in, "amount_in")
    token_out = state.pair_of(token_in)

    return (S(state.reserves[token_out]) * S(amount_in) // S(state.reserves[token_in])).value


def quote_swap_out(state: PoolState, token_in: str, amount_in: int) -> int:
    """Output received for selling exactly `amount_in` of `token_in`.

    Adding the full input to reserve_in and removing the result from
    reserve_out never decreases reserve_in * reserve_out.

    Args:
        state: Pool to price against
        token_in: Token being sold
        amount_in: Amount sold (fee included)

    Returns:
        Amount of the other token paid out
    """
    state.require_active()
    require_amount(amount_in, "amount_in")
    token_out = state.pair_of(token_in)
    reserve_in = S(state.reserves[token_in])
    reserve_out = S(state.reserves[token_out])

    amount_in_with_fee = S(amount_in) * FEE_NUMERATOR
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * FEE_DENOMINATOR + amount_in_with_fee

    return (numerator // denominator).value


def quote_swap_in(state: PoolState, token_out: str, amount_out: int) -> int:
    """Input needed to buy `amount_out` of `token_out`.

    Uses floor division like quote_swap_out, so this is not an exact inverse
    of it: selling the returned amount may yield slightly less than
    amount_out.

    Args:
        state: Pool to price against
        token_out: Token being bought
        amount_out: Desired output amount

    Returns:
        Amount of the other token to sell

    Raises:
        InsufficientReserveError: If amount_out >= reserve[token_out]
    """
    state.require_active()
    require_amount(amount_out, "amount_out")
    token_in = state.pair_of(token_out)
    reserve_in = S(state.reserves[token_in])
    reserve_out = S(state.reserves[token_out])

    if amount_out >= reserve_out:
        raise InsufficientReserveError(
            f"Cannot buy {amount_out} {token_out}: reserve is {reserve_out.value}"
        )

    numerator = reserve_in * amount_out * FEE_DENOMINATOR
    denominator = (reserve_out - amount_out) * FEE_NUMERATOR

    return (numerator // denominator).value


def quote_withdrawal(state: PoolState, token: str, share: int) -> int:
    """Amount of `token` redeemed by burning `share` shares.

    Raises:
        ShareExceedsTotalError: If share > total share supply
    """
    state.require_active()
    require_amount(share, "share")
    state.require_known_token(token)
    if share > state.total_share:
        raise ShareExceedsTotalError(
            f"Share {share} exceeds total share {state.total_share}"
        )

    return (S(share) * S(state.reserves[token]) // S(state.total_share)).value


def quote_withdrawal_pair(state: PoolState, share: int) -> tuple[int, int]:
    """Both withdrawal amounts for `share`, in (token_x, token_y) order."""
    token_x, token_y = state.config.tokens
    return (
        quote_withdrawal(state, token_x, share),
        quote_withdrawal(state, token_y, share),
    )


def quote_deposit_share(
    state: PoolState,
    token_a: str,
    amount_a: int,
    token_b: str,
    amount_b: int,
) -> int:
    """Share that a two-sided deposit would be issued.

    The first deposit into an empty pool always receives INITIAL_SHARE. Any
    later deposit must match the reserve ratio exactly under floor division:
    the share implied by each side has to be identical.

    Raises:
        UnbalancedDepositError: If the two sides imply different shares
        NegligibleContributionError: If the deposit rounds down to zero share
    """
    state.require_distinct_pair(token_a, token_b)
    require_amount(amount_a, "amount_a")
    require_amount(amount_b, "amount_b")

    if not state.is_active:
        return INITIAL_SHARE

    total = S(state.total_share)
    share_a = (total * amount_a // S(state.reserves[token_a])).value
    share_b = (total * amount_b // S(state.reserves[token_b])).value

    if share_a != share_b:
        raise UnbalancedDepositError(
            f"Deposit implies {share_a} share from {token_a} but {share_b} from {token_b}"
        )
    if share_a == 0:
        raise NegligibleContributionError(
            f"Deposit of {amount_a} {token_a} / {amount_b} {token_b} is worth zero share"
        )
    return share_a
