from .abstract import AbstractLiquidityPool, AbstractPoolState, AbstractSimulationResult
from .concrete import (
    AbstractPublisherMessage,
    PoolStateMessage,
    Publisher,
    PublisherMixin,
    Subscriber,
)

__all__ = (
    "AbstractLiquidityPool",
    "AbstractPoolState",
    "AbstractPublisherMessage",
    "AbstractSimulationResult",
    "PoolStateMessage",
    "Publisher",
    "PublisherMixin",
    "Subscriber",
)
