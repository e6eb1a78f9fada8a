"""Unit tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from miniswap.api import endpoints
from miniswap.api.endpoints import get_default_pool, get_pool
from miniswap.api.main import MAX_REQUEST_SIZE, app
from miniswap.config import PoolConfig
from miniswap.pool.liquidity import LiquidityPool
from tests.helpers import ALICE, BOB, FUNDING, POOL_ACCOUNT, X, Y, Z, make_pool, make_seeded_pool


@pytest.fixture
def pool() -> LiquidityPool:
    return make_pool()


@pytest.fixture
def client(pool: LiquidityPool):
    """Test client whose requests hit `pool`."""
    app.dependency_overrides[get_pool] = lambda: pool
    yield TestClient(app)
    app.dependency_overrides.clear()


def fund_via_api(client: TestClient, participant: str, amount: int = FUNDING) -> None:
    for token in (X, Y):
        body = {"participant": participant, "token": token, "amount": str(amount)}
        assert client.post("/faucet", json=body).status_code == 200
        assert client.post("/approve", json=body).status_code == 200


class TestHealth:
    def test_health_returns_ok(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_oversized_request_returns_413(self, client: TestClient):
        response = client.post(
            "/swap",
            json={},
            headers={"Content-Length": str(MAX_REQUEST_SIZE + 1)},
        )
        assert response.status_code == 413


class TestLiquidityFlow:
    """End-to-end provide / swap / withdraw through the API."""

    def test_provide(self, client: TestClient):
        fund_via_api(client, ALICE)
        response = client.post(
            "/provide",
            json={"participant": ALICE, "tokenA": X, "amountA": "100", "tokenB": Y, "amountB": "200"},
        )
        assert response.status_code == 200
        assert response.json() == {"share": "100000000"}

        details = client.get("/pool").json()
        assert details == {"reserves": {X: "100", Y: "200"}, "totalShare": "100000000"}

    def test_swap_and_withdraw(self, client: TestClient):
        fund_via_api(client, ALICE)
        fund_via_api(client, BOB)
        client.post(
            "/provide",
            json={"participant": ALICE, "tokenA": X, "amountA": "100", "tokenB": Y, "amountB": "200"},
        )

        swap = client.post(
            "/swap", json={"participant": BOB, "tokenIn": X, "tokenOut": Y, "amountIn": "10"}
        )
        assert swap.status_code == 200
        assert swap.json() == {"amountOut": "18"}

        withdraw = client.post("/withdraw", json={"participant": ALICE, "share": "100000000"})
        assert withdraw.status_code == 200
        assert withdraw.json() == {"amounts": {X: "110", Y: "182"}}

    def test_participant_holdings(self, client: TestClient):
        fund_via_api(client, ALICE, amount=1000)
        client.post(
            "/provide",
            json={"participant": ALICE, "tokenA": X, "amountA": "100", "tokenB": Y, "amountB": "200"},
        )
        data = client.get(f"/participants/{ALICE}").json()
        assert data == {
            "participant": ALICE,
            "balances": {X: "900", Y: "800"},
            "share": "100000000",
        }


class TestQuotes:
    @pytest.fixture
    def pool(self) -> LiquidityPool:
        return make_seeded_pool()

    def test_equivalent(self, client: TestClient):
        response = client.get("/quotes/equivalent", params={"token": X, "amount": 50})
        assert response.json() == {"token": Y, "amount": "100"}

    def test_swap_out(self, client: TestClient):
        response = client.get("/quotes/swap-out", params={"token": X, "amount": 10})
        assert response.json() == {"token": Y, "amount": "18"}

    def test_swap_in(self, client: TestClient):
        response = client.get("/quotes/swap-in", params={"token": Y, "amount": 18})
        assert response.json() == {"token": X, "amount": "9"}

    def test_withdrawal_both_tokens(self, client: TestClient):
        response = client.get("/quotes/withdrawal", params={"share": 50_000_000})
        assert response.json() == {"amounts": {X: "50", Y: "100"}}

    def test_withdrawal_single_token(self, client: TestClient):
        response = client.get("/quotes/withdrawal", params={"share": 50_000_000, "token": Y})
        assert response.json() == {"amounts": {Y: "100"}}

    def test_negative_amount_is_422(self, client: TestClient):
        response = client.get("/quotes/swap-out", params={"token": X, "amount": -1})
        assert response.status_code == 422


class TestErrorMapping:
    """Pool errors become structured JSON responses."""

    def test_empty_pool(self, client: TestClient):
        response = client.get("/quotes/swap-out", params={"token": X, "amount": 10})
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "EmptyPoolError"

    def test_unbalanced_deposit(self, client: TestClient, pool: LiquidityPool):
        fund_via_api(client, ALICE)
        fund_via_api(client, BOB)
        pool.provide(ALICE, X, 100, Y, 200)
        response = client.post(
            "/provide",
            json={"participant": BOB, "tokenA": X, "amountA": "50", "tokenB": Y, "amountB": "99"},
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "UnbalancedDepositError"

    def test_zero_amount(self, client: TestClient):
        response = client.post(
            "/provide",
            json={"participant": ALICE, "tokenA": X, "amountA": "0", "tokenB": Y, "amountB": "200"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ZeroAmountError"

    def test_drain_reserve(self, client: TestClient, pool: LiquidityPool):
        fund_via_api(client, ALICE)
        pool.provide(ALICE, X, 100, Y, 200)
        response = client.get("/quotes/swap-in", params={"token": Y, "amount": 200})
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "InsufficientReserveError"

    def test_unapproved_transfer(self, client: TestClient):
        client.post("/faucet", json={"participant": ALICE, "token": X, "amount": "100"})
        client.post("/faucet", json={"participant": ALICE, "token": Y, "amount": "200"})
        response = client.post(
            "/provide",
            json={"participant": ALICE, "tokenA": X, "amountA": "100", "tokenB": Y, "amountB": "200"},
        )
        assert response.status_code == 402
        assert response.json()["error"]["code"] == "GatewayTransferError"

    def test_faucet_unknown_token(self, client: TestClient):
        response = client.post("/faucet", json={"participant": ALICE, "token": Z, "amount": "1"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UnknownTokenError"

    @pytest.mark.parametrize("route", ["/faucet", "/approve"])
    def test_custody_account_rejected(self, client: TestClient, pool: LiquidityPool, route: str):
        body = {"participant": POOL_ACCOUNT, "token": X, "amount": "1000"}
        response = client.post(route, json=body)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "InvalidParticipantError"
        assert pool.holdings(POOL_ACCOUNT).balance_x == 0

    def test_malformed_amount_is_422(self, client: TestClient):
        response = client.post("/withdraw", json={"participant": ALICE, "share": "lots"})
        assert response.status_code == 422


class TestNonMemoryGateway:
    def test_faucet_not_supported(self):
        class PushPullOnly:
            def pull(self, token, from_, to, amount):
                pass

            def push(self, token, to, amount):
                pass

        pool = LiquidityPool(PoolConfig(token_x=X, token_y=Y), PushPullOnly())
        app.dependency_overrides[get_pool] = lambda: pool
        try:
            response = TestClient(app).post(
                "/faucet", json={"participant": ALICE, "token": X, "amount": "1"}
            )
            assert response.status_code == 501
        finally:
            app.dependency_overrides.clear()


class TestDefaultPool:
    def test_created_on_first_use(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(endpoints, "_default_pool", None)
        monkeypatch.setenv("MINISWAP_TOKEN_X", "ACA")
        monkeypatch.setenv("MINISWAP_TOKEN_Y", "DOT")

        pool = get_default_pool()
        assert pool.config.tokens == ("ACA", "DOT")
        assert get_default_pool() is pool
