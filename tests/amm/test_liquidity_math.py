import math

import hypothesis
import hypothesis.strategies
import pytest

from pairswap.amm.liquidity_math import burn_amounts, isqrt, mint_amount
from pairswap.constants import MAX_UINT256
from pairswap.exceptions import EmptyReserves, InvalidAmount


def test_isqrt_small_values():
    assert isqrt(0) == 0
    assert isqrt(1) == 1
    assert isqrt(2) == 1
    assert isqrt(3) == 1
    assert isqrt(4) == 2
    assert isqrt(8) == 2
    assert isqrt(9) == 3


def test_isqrt_floors():
    assert isqrt(10000) == 100
    assert isqrt(10001) == 100
    assert isqrt(20000) == 141
    assert isqrt(100 * 10**18 * 100 * 10**18) == 100 * 10**18


def test_isqrt_max_uint256():
    assert isqrt(MAX_UINT256) == 2**128 - 1


def test_isqrt_rejects_negative():
    with pytest.raises(InvalidAmount):
        isqrt(-1)


@hypothesis.given(y=hypothesis.strategies.integers(min_value=0, max_value=MAX_UINT256))
def test_isqrt_fuzz(y: int):
    assert isqrt(y) == math.isqrt(y)


def test_first_mint_uses_geometric_mean():
    assert (
        mint_amount(amount0=100, amount1=100, reserves0=0, reserves1=0, total_supply=0) == 100
    )
    assert (
        mint_amount(amount0=100, amount1=200, reserves0=0, reserves1=0, total_supply=0) == 141
    )


def test_first_mint_ignores_leftover_reserves():
    # A pool drained of shares can still hold dust, which does not affect the seed amount
    assert mint_amount(amount0=100, amount1=100, reserves0=1, reserves1=1, total_supply=0) == 100


def test_proportional_mint():
    assert (
        mint_amount(amount0=50, amount1=50, reserves0=100, reserves1=100, total_supply=100) == 50
    )


def test_off_ratio_mint_credits_limiting_side():
    assert (
        mint_amount(amount0=10, amount1=50, reserves0=100, reserves1=100, total_supply=100) == 10
    )
    assert (
        mint_amount(amount0=50, amount1=10, reserves0=100, reserves1=200, total_supply=100) == 5
    )


def test_mint_truncates_to_zero():
    assert (
        mint_amount(amount0=1, amount1=1, reserves0=1000, reserves1=1000, total_supply=100) == 0
    )


def test_mint_against_empty_reserves():
    with pytest.raises(EmptyReserves):
        mint_amount(amount0=1, amount1=1, reserves0=0, reserves1=100, total_supply=100)


def test_burn_amounts():
    assert burn_amounts(shares=50, reserves0=100, reserves1=100, total_supply=100) == (50, 50)
    assert burn_amounts(shares=100, reserves0=100, reserves1=100, total_supply=100) == (100, 100)


def test_burn_amounts_truncate():
    # 1 * 3 / 2 = 1.5, 1 * 7 / 2 = 3.5
    assert burn_amounts(shares=1, reserves0=3, reserves1=7, total_supply=2) == (1, 3)


def test_burn_amounts_without_supply():
    with pytest.raises(EmptyReserves):
        burn_amounts(shares=1, reserves0=100, reserves1=100, total_supply=0)


@hypothesis.given(
    amount0=hypothesis.strategies.integers(min_value=1, max_value=2**100),
    amount1=hypothesis.strategies.integers(min_value=1, max_value=2**100),
    reserves0=hypothesis.strategies.integers(min_value=1, max_value=2**100),
    reserves1=hypothesis.strategies.integers(min_value=1, max_value=2**100),
    total_supply=hypothesis.strategies.integers(min_value=1, max_value=2**100),
)
def test_mint_then_burn_never_returns_more(
    amount0: int,
    amount1: int,
    reserves0: int,
    reserves1: int,
    total_supply: int,
):
    shares = mint_amount(
        amount0=amount0,
        amount1=amount1,
        reserves0=reserves0,
        reserves1=reserves1,
        total_supply=total_supply,
    )
    returned0, returned1 = burn_amounts(
        shares=shares,
        reserves0=reserves0 + amount0,
        reserves1=reserves1 + amount1,
        total_supply=total_supply + shares,
    )
    assert returned0 <= amount0
    assert returned1 <= amount1
