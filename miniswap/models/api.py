"""Request and response bodies for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from miniswap.models.types import Amount, ParticipantId, TokenId
from miniswap.pool.liquidity import Holdings
from miniswap.pool.state import PoolDetails


class ProvideRequest(BaseModel):
    participant: ParticipantId
    token_a: TokenId = Field(alias="tokenA")
    amount_a: Amount = Field(alias="amountA")
    token_b: TokenId = Field(alias="tokenB")
    amount_b: Amount = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class ProvideResponse(BaseModel):
    share: Amount


class WithdrawRequest(BaseModel):
    participant: ParticipantId
    share: Amount


class WithdrawResponse(BaseModel):
    """Amounts paid out for a withdrawal, keyed by token."""

    amounts: dict[str, Amount]


class SwapRequest(BaseModel):
    participant: ParticipantId
    token_in: TokenId = Field(alias="tokenIn")
    token_out: TokenId = Field(alias="tokenOut")
    amount_in: Amount = Field(alias="amountIn")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    amount_out: Amount = Field(serialization_alias="amountOut")


class FaucetRequest(BaseModel):
    """Mint test tokens into a participant's in-memory balance."""

    participant: ParticipantId
    token: TokenId
    amount: Amount


class ApproveRequest(BaseModel):
    """Authorize the pool to pull up to `amount` of `token`."""

    participant: ParticipantId
    token: TokenId
    amount: Amount


class QuoteResponse(BaseModel):
    token: str
    amount: Amount


class PoolDetailsResponse(BaseModel):
    reserves: dict[str, Amount]
    total_share: Amount = Field(serialization_alias="totalShare")

    @classmethod
    def from_details(cls, details: PoolDetails) -> PoolDetailsResponse:
        return cls(
            reserves={
                details.token_x: str(details.reserve_x),
                details.token_y: str(details.reserve_y),
            },
            total_share=str(details.total_share),
        )


class ParticipantResponse(BaseModel):
    participant: str
    balances: dict[str, Amount]
    share: Amount

    @classmethod
    def from_holdings(
        cls, holdings: Holdings, token_x: str, token_y: str
    ) -> ParticipantResponse:
        return cls(
            participant=holdings.participant,
            balances={token_x: str(holdings.balance_x), token_y: str(holdings.balance_y)},
            share=str(holdings.share),
        )
