from .liquidity_pool import AbstractLiquidityPool
from .pool_state import AbstractPoolState


class AbstractSimulationResult: ...


__all__ = (
    "AbstractLiquidityPool",
    "AbstractPoolState",
    "AbstractSimulationResult",
)
