from .custody import AssetTransferService
from .pool import ConstantProductPool
from .types import (
    ConstantProductPoolSimulationResult,
    ConstantProductPoolState,
    LiquidityAdded,
    LiquidityRemoved,
    Swap,
)

__all__ = (
    "AssetTransferService",
    "ConstantProductPool",
    "ConstantProductPoolSimulationResult",
    "ConstantProductPoolState",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swap",
)
