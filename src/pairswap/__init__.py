from .checksum_cache import get_checksum_address
from .config import settings
from .version import __version__

# isort: split

from .amm import (
    AssetTransferService,
    ConstantProductPool,
    ConstantProductPoolSimulationResult,
    ConstantProductPoolState,
    LiquidityAdded,
    LiquidityRemoved,
    Swap,
)
from .logging import logger

__all__ = (
    "AssetTransferService",
    "ConstantProductPool",
    "ConstantProductPoolSimulationResult",
    "ConstantProductPoolState",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swap",
    "__version__",
    "get_checksum_address",
    "logger",
    "settings",
)
