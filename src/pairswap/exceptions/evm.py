from typing import Any

from pairswap.exceptions.base import PairswapError


class EVMRevertError(PairswapError):
    """
    Raised when an operation would revert under checked uint256 arithmetic.
    """

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(message=f"EVM Revert: {error}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.error,)


class ArithmeticOverflow(EVMRevertError):
    """
    Raised when an intermediate or final result does not fit in a uint256.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(error=f"Arithmetic overflow in {operation}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.operation,)


class DivisionByZero(EVMRevertError):
    def __init__(self) -> None:
        super().__init__(error="DIVISION BY ZERO")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, ()
