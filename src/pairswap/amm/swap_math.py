from pairswap.amm.checked_math import checked_add, checked_mul, checked_sub, mul_div
from pairswap.constants import FEE, PRICE_SCALE
from pairswap.exceptions import EmptyReserves, InsufficientLiquidity
from pairswap.validation.evm_values import validate_amount, validate_uint256

# 997 / 1000 for a 0.3% fee
FEE_PASS_THROUGH = FEE.denominator - FEE.numerator
FEE_DENOMINATOR = FEE.denominator


def get_amount_out(
    amount_in: int,
    reserves_in: int,
    reserves_out: int,
) -> int:
    """
    Calculate the amount out for an exact input from a constant product (x*y=k) invariant pool.

    The fee is deducted from the input and all divisions truncate, so the result matches the
    Uniswap V2 `getAmountOut` library function bit-for-bit. The result is not checked against
    `reserves_out`; the pool enforces that bound when it commits a swap.

    ref: https://github.com/Uniswap/v2-periphery/blob/master/contracts/libraries/UniswapV2Library.sol
    """

    amount_in = validate_amount(amount_in)
    reserves_in = validate_uint256(reserves_in)
    reserves_out = validate_uint256(reserves_out)
    if reserves_in == 0 or reserves_out == 0:
        raise EmptyReserves

    amount_in_with_fee = checked_mul(amount_in, FEE_PASS_THROUGH)
    return mul_div(
        amount_in_with_fee,
        reserves_out,
        checked_add(checked_mul(reserves_in, FEE_DENOMINATOR), amount_in_with_fee),
    )


def get_amount_in(
    amount_out: int,
    reserves_in: int,
    reserves_out: int,
) -> int:
    """
    Calculate the amount in necessary for an exact output swap through a constant product (x*y=k)
    invariant pool. The result is rounded up by one unit so the swap always covers `amount_out`.
    """

    amount_out = validate_amount(amount_out)
    reserves_in = validate_uint256(reserves_in)
    reserves_out = validate_uint256(reserves_out)
    if reserves_in == 0 or reserves_out == 0:
        raise EmptyReserves

    # last token becomes infinitely expensive, so largest possible swap out is reserves - 1
    if amount_out >= reserves_out:
        raise InsufficientLiquidity(amount_out=amount_out, reserves_out=reserves_out)

    return checked_add(
        mul_div(
            checked_mul(reserves_in, amount_out),
            FEE_DENOMINATOR,
            checked_mul(checked_sub(reserves_out, amount_out), FEE_PASS_THROUGH),
        ),
        1,
    )


def get_spot_price(
    reserves_in: int,
    reserves_out: int,
) -> int:
    """
    Calculate the marginal price of the input token in units of the output token, before fees,
    scaled by `PRICE_SCALE` and truncated.
    """

    reserves_in = validate_uint256(reserves_in)
    reserves_out = validate_uint256(reserves_out)
    if reserves_in == 0 or reserves_out == 0:
        raise EmptyReserves

    return mul_div(reserves_out, PRICE_SCALE, reserves_in)
