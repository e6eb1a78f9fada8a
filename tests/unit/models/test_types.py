"""Tests for HTTP model field validation."""

import pytest
from pydantic import ValidationError

from miniswap.models import ProvideRequest, SwapRequest, WithdrawRequest
from miniswap.models.types import MAX_AMOUNT, validate_amount


class TestValidateAmount:
    def test_accepts_decimal_string(self):
        assert validate_amount("100") == "100"

    def test_accepts_int(self):
        assert validate_amount(42) == "42"

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="negative"):
            validate_amount("-1")

    def test_rejects_overflow(self):
        with pytest.raises(ValueError, match="overflow"):
            validate_amount(MAX_AMOUNT + 1)

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            validate_amount("12abc")
        with pytest.raises(ValueError):
            validate_amount(1.5)
        with pytest.raises(ValueError):
            validate_amount(True)


class TestRequestModels:
    def test_provide_uses_camel_case_aliases(self):
        request = ProvideRequest.model_validate(
            {"participant": "alice", "tokenA": "KSM", "amountA": "100", "tokenB": "DOT", "amountB": 200}
        )
        assert request.token_a == "KSM"
        assert request.amount_b == "200"

    def test_swap_rejects_negative_amount(self):
        with pytest.raises(ValidationError):
            SwapRequest.model_validate(
                {"participant": "bob", "tokenIn": "KSM", "tokenOut": "DOT", "amountIn": "-5"}
            )

    def test_empty_participant_rejected(self):
        with pytest.raises(ValidationError):
            WithdrawRequest.model_validate({"participant": "", "share": "1"})
