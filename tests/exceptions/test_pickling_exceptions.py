import pickle

import pytest

from pairswap.exceptions import (
    ArithmeticOverflow,
    DivisionByZero,
    EmptyReserves,
    EVMRevertError,
    InsufficientLiquidity,
    InsufficientLiquidityMinted,
    InsufficientOutput,
    InsufficientReturnAmount,
    InsufficientShares,
    InvalidAmount,
    InvariantViolation,
    LiquidityPoolError,
    PairswapError,
    PairswapValueError,
    ReentrantCall,
)


@pytest.mark.parametrize(
    ("exception", "message"),
    [
        (PairswapValueError(message="Bad value"), "Bad value"),
        (EVMRevertError(error="SUB_OVERFLOW"), "EVM Revert: SUB_OVERFLOW"),
        (ArithmeticOverflow(operation="mul"), "EVM Revert: Arithmetic overflow in mul"),
        (DivisionByZero(), "EVM Revert: DIVISION BY ZERO"),
        (InvalidAmount(amount=-1), "Invalid amount: -1"),
        (
            InsufficientShares(balance=5, requested=6),
            "Insufficient LP balance: 5 held, 6 requested",
        ),
        (InsufficientLiquidityMinted(), "Insufficient liquidity minted."),
        (InsufficientReturnAmount(amount0=0, amount1=7), "Insufficient return amount: (0, 7)"),
        (InsufficientOutput(), "Insufficient output amount."),
        (
            InsufficientLiquidity(amount_out=100, reserves_out=100),
            "Requested amount out (100) >= pool reserves (100)",
        ),
        (EmptyReserves(), "Reserves empty"),
        (ReentrantCall(), "Reentrant call"),
        (InvariantViolation(message="Negative share balance."), "Negative share balance."),
    ],
)
def test_exception_pickling(exception: PairswapError, message: str) -> None:
    """
    Test that each exception survives a pickle round trip with its type, message and attributes.
    """

    unpickled_exception = pickle.loads(pickle.dumps(exception))

    assert type(unpickled_exception) is type(exception)
    assert unpickled_exception.message == message
    assert str(unpickled_exception) == message
    assert vars(unpickled_exception) == vars(exception)


def test_exception_hierarchy() -> None:
    assert issubclass(ArithmeticOverflow, EVMRevertError)
    assert issubclass(EVMRevertError, PairswapError)
    assert issubclass(ReentrantCall, LiquidityPoolError)
    assert issubclass(InvalidAmount, LiquidityPoolError)
    assert issubclass(LiquidityPoolError, PairswapError)

    # Exception attributes are kept for callers that inspect the failure
    exception = InsufficientShares(balance=5, requested=6)
    assert (exception.balance, exception.requested) == (5, 6)
