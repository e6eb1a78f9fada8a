"""API endpoints for the pool.

Handlers are plain functions: FastAPI runs them in its threadpool and the
pool's own lock serializes the mutations.
"""

import threading

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from miniswap.config import ApiSettings
from miniswap.gateway.memory import InMemoryTokenLedger
from miniswap.models.api import (
    ApproveRequest,
    FaucetRequest,
    ParticipantResponse,
    PoolDetailsResponse,
    ProvideRequest,
    ProvideResponse,
    QuoteResponse,
    SwapRequest,
    SwapResponse,
    WithdrawRequest,
    WithdrawResponse,
)
from miniswap.pool.liquidity import LiquidityPool, build_pool

logger = structlog.get_logger()

router = APIRouter()


def _create_default_pool() -> LiquidityPool:
    """Create the service's pool from MINISWAP_* settings, backed by an in-memory ledger."""
    settings = ApiSettings.from_env()
    pool = build_pool(settings.pool_config())
    logger.info("pool_created", tokens=list(pool.config.tokens))
    return pool


_default_pool: LiquidityPool | None = None
_default_pool_lock = threading.Lock()


def get_default_pool() -> LiquidityPool:
    """Return the service's pool, creating it on first use."""
    global _default_pool
    with _default_pool_lock:
        if _default_pool is None:
            _default_pool = _create_default_pool()
        return _default_pool


def get_pool() -> LiquidityPool:
    """Dependency provider for the pool instance.

    Override this in tests to inject a fresh pool:
        app.dependency_overrides[get_pool] = lambda: pool
    """
    return get_default_pool()


def _memory_ledger(pool: LiquidityPool) -> InMemoryTokenLedger:
    if not isinstance(pool.gateway, InMemoryTokenLedger):
        raise HTTPException(status_code=501, detail="Pool gateway does not support test tokens")
    return pool.gateway


@router.get("/pool")
def pool_details(pool: LiquidityPool = Depends(get_pool)) -> PoolDetailsResponse:
    """Current reserves and total share."""
    return PoolDetailsResponse.from_details(pool.details())


@router.get("/participants/{participant}")
def participant_holdings(
    participant: str, pool: LiquidityPool = Depends(get_pool)
) -> ParticipantResponse:
    """Token balances and pool share of one participant."""
    token_x, token_y = pool.config.tokens
    return ParticipantResponse.from_holdings(pool.holdings(participant), token_x, token_y)


@router.get("/quotes/equivalent")
def quote_equivalent(
    token: str,
    amount: int = Query(ge=0),
    pool: LiquidityPool = Depends(get_pool),
) -> QuoteResponse:
    """Amount of the other token that balances `amount` of `token`."""
    result = pool.quote_equivalent(token, amount)
    return QuoteResponse(token=pool.state.pair_of(token), amount=str(result))


@router.get("/quotes/swap-out")
def quote_swap_out(
    token: str,
    amount: int = Query(ge=0),
    pool: LiquidityPool = Depends(get_pool),
) -> QuoteResponse:
    """Output received for selling `amount` of `token`."""
    result = pool.quote_swap_out(token, amount)
    return QuoteResponse(token=pool.state.pair_of(token), amount=str(result))


@router.get("/quotes/swap-in")
def quote_swap_in(
    token: str,
    amount: int = Query(ge=0),
    pool: LiquidityPool = Depends(get_pool),
) -> QuoteResponse:
    """Input needed to buy `amount` of `token`."""
    result = pool.quote_swap_in(token, amount)
    return QuoteResponse(token=pool.state.pair_of(token), amount=str(result))


@router.get("/quotes/withdrawal")
def quote_withdrawal(
    share: int = Query(ge=0),
    token: str | None = None,
    pool: LiquidityPool = Depends(get_pool),
) -> WithdrawResponse:
    """Amounts redeemed for `share`, for one token or both."""
    if token is not None:
        return WithdrawResponse(amounts={token: str(pool.quote_withdrawal(token, share))})
    token_x, token_y = pool.config.tokens
    amount_x, amount_y = pool.quote_withdrawal_pair(share)
    return WithdrawResponse(amounts={token_x: str(amount_x), token_y: str(amount_y)})


@router.post("/provide")
def provide(request: ProvideRequest, pool: LiquidityPool = Depends(get_pool)) -> ProvideResponse:
    """Deposit both tokens for pool share."""
    share = pool.provide(
        request.participant,
        request.token_a,
        int(request.amount_a),
        request.token_b,
        int(request.amount_b),
    )
    return ProvideResponse(share=str(share))


@router.post("/withdraw")
def withdraw(request: WithdrawRequest, pool: LiquidityPool = Depends(get_pool)) -> WithdrawResponse:
    """Burn share for both tokens."""
    token_x, token_y = pool.config.tokens
    amount_x, amount_y = pool.withdraw(request.participant, int(request.share))
    return WithdrawResponse(amounts={token_x: str(amount_x), token_y: str(amount_y)})


@router.post("/swap")
def swap(request: SwapRequest, pool: LiquidityPool = Depends(get_pool)) -> SwapResponse:
    """Sell an exact input amount of one token for the other."""
    amount_out = pool.swap(
        request.participant, request.token_in, request.token_out, int(request.amount_in)
    )
    return SwapResponse(amount_out=str(amount_out))


@router.post("/faucet")
def faucet(request: FaucetRequest, pool: LiquidityPool = Depends(get_pool)) -> QuoteResponse:
    """Mint test tokens for a participant. Returns the new balance."""
    pool.require_participant(request.participant)
    pool.state.require_known_token(request.token)
    balance = _memory_ledger(pool).mint(request.token, request.participant, int(request.amount))
    return QuoteResponse(token=request.token, amount=str(balance))


@router.post("/approve")
def approve(request: ApproveRequest, pool: LiquidityPool = Depends(get_pool)) -> QuoteResponse:
    """Authorize the pool to pull up to `amount` of a participant's token."""
    pool.require_participant(request.participant)
    pool.state.require_known_token(request.token)
    _memory_ledger(pool).approve(
        request.token, request.participant, pool.config.pool_account, int(request.amount)
    )
    return QuoteResponse(token=request.token, amount=request.amount)
