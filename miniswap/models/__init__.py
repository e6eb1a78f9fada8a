"""Pydantic models for the Miniswap HTTP API."""

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
from miniswap.models.types import Amount, ParticipantId, TokenId

__all__ = [
    # Types
    "Amount",
    "ParticipantId",
    "TokenId",
    # Requests
    "ApproveRequest",
    "FaucetRequest",
    "ProvideRequest",
    "SwapRequest",
    "WithdrawRequest",
    # Responses
    "ParticipantResponse",
    "PoolDetailsResponse",
    "ProvideResponse",
    "QuoteResponse",
    "SwapResponse",
    "WithdrawResponse",
]
