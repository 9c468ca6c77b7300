__all__ = (
    "FEE",
    "MAX_UINT256",
    "MIN_UINT256",
    "PRICE_SCALE",
)

import typing
from fractions import Fraction


def _min_uint(_: int) -> int:
    return 0


def _max_uint(bits: int) -> int:
    return typing.cast("int", 2**bits - 1)


MIN_UINT256 = _min_uint(256)
MAX_UINT256 = _max_uint(256)

# Swap fee taken from the input amount and retained by the pool
FEE = Fraction(3, 1000)

# Fixed-point unit for spot prices
PRICE_SCALE = 10**18
