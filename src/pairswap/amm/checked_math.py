from pairswap.constants import MAX_UINT256, MIN_UINT256
from pairswap.exceptions import ArithmeticOverflow, DivisionByZero

# Python integers do not overflow, so each helper checks that the operands and the result fit in a
# uint256 and raises where a checked-arithmetic EVM contract would revert.


def _check_operands(operation: str, *values: int) -> None:
    for value in values:
        if not (MIN_UINT256 <= value <= MAX_UINT256):
            raise ArithmeticOverflow(operation=operation)


def checked_add(a: int, b: int) -> int:
    _check_operands("add", a, b)
    result = a + b
    if result > MAX_UINT256:
        raise ArithmeticOverflow(operation="add")
    return result


def checked_sub(a: int, b: int) -> int:
    _check_operands("sub", a, b)
    if b > a:
        raise ArithmeticOverflow(operation="sub")
    return a - b


def checked_mul(a: int, b: int) -> int:
    _check_operands("mul", a, b)
    result = a * b
    if result > MAX_UINT256:
        raise ArithmeticOverflow(operation="mul")
    return result


def checked_div(a: int, b: int) -> int:
    """
    Floor division, matching Solidity's truncating division for unsigned operands.
    """

    _check_operands("div", a, b)
    if b == 0:
        raise DivisionByZero
    return a // b


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    Calculate floor(a * b / denominator) with the intermediate product checked as a uint256, the
    way `(a * b) / denominator` evaluates in a checked-arithmetic contract.
    """

    return checked_div(checked_mul(a, b), denominator)
