"""Pytest configuration and fixtures."""

import pytest

from miniswap.gateway.memory import InMemoryTokenLedger
from miniswap.pool.liquidity import LiquidityPool
from tests.helpers import ALICE, fund, make_pool, make_seeded_pool
from tests.helpers.gateways import FlakyGateway


@pytest.fixture
def pool() -> LiquidityPool:
    """An empty KSM/DOT pool on a fresh in-memory ledger."""
    return make_pool()


@pytest.fixture
def funded_pool(pool: LiquidityPool) -> LiquidityPool:
    """An empty pool where ALICE holds and has approved plenty of both tokens."""
    fund(pool, ALICE)
    return pool


@pytest.fixture
def seeded_pool() -> LiquidityPool:
    """A pool with reserves X=100, Y=200 and total share 100_000_000 held by ALICE."""
    return make_seeded_pool()


@pytest.fixture
def ledger(seeded_pool: LiquidityPool) -> InMemoryTokenLedger:
    """The in-memory ledger behind `seeded_pool`."""
    gateway = seeded_pool.gateway
    assert isinstance(gateway, InMemoryTokenLedger)
    return gateway


@pytest.fixture
def flaky_gateway() -> FlakyGateway:
    """A ledger with no failures armed yet."""
    return FlakyGateway()
