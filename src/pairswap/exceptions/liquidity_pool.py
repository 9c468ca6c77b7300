from typing import Any

from pairswap.exceptions.base import PairswapError


class LiquidityPoolError(PairswapError):
    """
    Exception raised inside liquidity pool helpers.
    """


# 2nd level exceptions for Liquidity Pool classes
class InvalidAmount(LiquidityPoolError):
    """
    Raised when a caller supplies a zero, negative, non-integer or out-of-range quantity.
    """

    def __init__(self, amount: Any) -> None:
        self.amount = amount
        super().__init__(message=f"Invalid amount: {amount!r}")

    def __reduce__(self) -> tuple[Any, ...]:
        # Pickling will raise an exception if a reduction method is not defined
        return self.__class__, (self.amount,)


class InsufficientShares(LiquidityPoolError):
    """
    Raised when a withdrawal would burn more shares than the caller holds.
    """

    def __init__(self, balance: int, requested: int) -> None:
        self.balance = balance
        self.requested = requested
        super().__init__(message=f"Insufficient LP balance: {balance} held, {requested} requested")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.balance, self.requested)


class InsufficientLiquidityMinted(LiquidityPoolError):
    def __init__(self) -> None:
        """
        Raised when a deposit would mint zero shares.
        """

        super().__init__(message="Insufficient liquidity minted.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class InsufficientReturnAmount(LiquidityPoolError):
    """
    Raised when a withdrawal would return nothing for one or both tokens.
    """

    def __init__(self, amount0: int, amount1: int) -> None:
        self.amount0 = amount0
        self.amount1 = amount1
        super().__init__(message=f"Insufficient return amount: ({amount0}, {amount1})")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.amount0, self.amount1)


class InsufficientOutput(LiquidityPoolError):
    def __init__(self) -> None:
        """
        Raised when a swap input is too small to produce any output.
        """

        super().__init__(message="Insufficient output amount.")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class InsufficientLiquidity(LiquidityPoolError):
    """
    Raised when a swap output would equal or exceed the reserves of the output token.
    """

    def __init__(self, amount_out: int, reserves_out: int) -> None:
        self.amount_out = amount_out
        self.reserves_out = reserves_out
        super().__init__(
            message=f"Requested amount out ({amount_out}) >= pool reserves ({reserves_out})"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.amount_out, self.reserves_out)


class EmptyReserves(LiquidityPoolError):
    def __init__(self) -> None:
        """
        Raised when a price or swap is requested against a pool with a zero reserve.
        """

        super().__init__(message="Reserves empty")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class ReentrantCall(LiquidityPoolError):
    def __init__(self) -> None:
        """
        Raised when a state-modifying operation is entered while another is in progress.
        """

        super().__init__(message="Reentrant call")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()


class InvariantViolation(LiquidityPoolError):
    """
    Raised when a committed state would break a pool invariant. The operation is rolled back.
    """

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.message,)
