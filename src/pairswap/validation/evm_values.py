from typing import Annotated

from pydantic import Field, TypeAdapter, ValidationError

from pairswap.constants import MAX_UINT256, MIN_UINT256
from pairswap.exceptions import InvalidAmount

type ValidatedUint256 = Annotated[int, Field(strict=True, ge=MIN_UINT256, le=MAX_UINT256)]
type ValidatedUint256NonZero = Annotated[int, Field(strict=True, gt=MIN_UINT256, le=MAX_UINT256)]

uint256_adapter: TypeAdapter[int] = TypeAdapter(ValidatedUint256)
uint256_nonzero_adapter: TypeAdapter[int] = TypeAdapter(ValidatedUint256NonZero)


def validate_amount(amount: int) -> int:
    """
    Return `amount` if it is a non-zero uint256, otherwise raise `InvalidAmount`.
    """

    try:
        return uint256_nonzero_adapter.validate_python(amount)
    except ValidationError:
        raise InvalidAmount(amount=amount) from None


def validate_uint256(value: int) -> int:
    """
    Return `value` if it is a uint256 (zero allowed), otherwise raise `InvalidAmount`.
    """

    try:
        return uint256_adapter.validate_python(value)
    except ValidationError:
        raise InvalidAmount(amount=value) from None
