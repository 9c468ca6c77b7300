from pairswap.exceptions.base import PairswapError, PairswapValueError
from pairswap.exceptions.evm import ArithmeticOverflow, DivisionByZero, EVMRevertError
from pairswap.exceptions.liquidity_pool import (
    EmptyReserves,
    InsufficientLiquidity,
    InsufficientLiquidityMinted,
    InsufficientOutput,
    InsufficientReturnAmount,
    InsufficientShares,
    InvalidAmount,
    InvariantViolation,
    LiquidityPoolError,
    ReentrantCall,
)

from . import (
    evm,
    liquidity_pool,
)

__all__ = (
    "ArithmeticOverflow",
    "DivisionByZero",
    "EVMRevertError",
    "EmptyReserves",
    "InsufficientLiquidity",
    "InsufficientLiquidityMinted",
    "InsufficientOutput",
    "InsufficientReturnAmount",
    "InsufficientShares",
    "InvalidAmount",
    "InvariantViolation",
    "LiquidityPoolError",
    "PairswapError",
    "PairswapValueError",
    "ReentrantCall",
    "evm",
    "liquidity_pool",
)
