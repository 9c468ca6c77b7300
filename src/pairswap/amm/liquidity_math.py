from pairswap.amm.checked_math import checked_mul, mul_div
from pairswap.exceptions import EmptyReserves
from pairswap.validation.evm_values import validate_uint256


def isqrt(y: int) -> int:
    """
    Floor integer square root using the Babylonian method, replicating the `Math.sqrt` helper used
    by Uniswap V2 pair contracts.

    ref: https://github.com/Uniswap/v2-core/blob/master/contracts/libraries/Math.sol
    """

    y = validate_uint256(y)

    z = 0
    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
    elif y != 0:
        z = 1
    return z


def mint_amount(
    amount0: int,
    amount1: int,
    reserves0: int,
    reserves1: int,
    total_supply: int,
) -> int:
    """
    Calculate the liquidity shares issued for a deposit of `amount0` and `amount1`.

    The first deposit into an empty pool is credited with the geometric mean of the two amounts.
    Later deposits are credited for the smaller of the two proportional contributions, so any
    excess of the other token is absorbed by the pool.
    """

    if total_supply == 0:
        return isqrt(checked_mul(amount0, amount1))

    if reserves0 == 0 or reserves1 == 0:
        raise EmptyReserves

    return min(
        mul_div(amount0, total_supply, reserves0),
        mul_div(amount1, total_supply, reserves1),
    )


def burn_amounts(
    shares: int,
    reserves0: int,
    reserves1: int,
    total_supply: int,
) -> tuple[int, int]:
    """
    Calculate the token amounts returned for burning `shares`. Each amount is truncated, so any
    remainder stays in the pool for the other holders.
    """

    if total_supply == 0:
        raise EmptyReserves

    return (
        mul_div(shares, reserves0, total_supply),
        mul_div(shares, reserves1, total_supply),
    )
