"""Configuration for the pool and the HTTP service."""

from __future__ import annotations

import os
from dataclasses import dataclass

from miniswap.constants import DEFAULT_POOL_ACCOUNT
from miniswap.errors import InvalidPairError


@dataclass(frozen=True)
class PoolConfig:
    """Immutable pool configuration.

    Attributes:
        token_x: First configured token. Withdrawals report this token first.
        token_y: Second configured token.
        pool_account: Gateway account that holds the pool's custody balances.
    """

    token_x: str
    token_y: str
    pool_account: str = DEFAULT_POOL_ACCOUNT

    def __post_init__(self) -> None:
        if not self.token_x or not self.token_y:
            raise InvalidPairError("Pool tokens must be non-empty")
        if self.token_x == self.token_y:
            raise InvalidPairError(f"Pool tokens must be distinct, got {self.token_x} twice")
        if not self.pool_account:
            raise ValueError("pool_account must be non-empty")

    @property
    def tokens(self) -> tuple[str, str]:
        """Both tokens in (token_x, token_y) order."""
        return self.token_x, self.token_y


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class ApiSettings:
    """HTTP service settings, read from MINISWAP_* environment variables."""

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    token_x: str = "KSM"
    token_y: str = "DOT"

    @classmethod
    def from_env(cls) -> ApiSettings:
        """Build settings from the environment, falling back to defaults."""
        return cls(
            host=os.environ.get("MINISWAP_HOST", cls.host),
            port=int(os.environ.get("MINISWAP_PORT", str(cls.port))),
            debug=_env_flag("MINISWAP_DEBUG", "false"),
            log_level=os.environ.get("MINISWAP_LOG_LEVEL", cls.log_level).upper(),
            token_x=os.environ.get("MINISWAP_TOKEN_X", cls.token_x),
            token_y=os.environ.get("MINISWAP_TOKEN_Y", cls.token_y),
        )

    def pool_config(self) -> PoolConfig:
        return PoolConfig(token_x=self.token_x, token_y=self.token_y)
