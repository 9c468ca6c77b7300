import dataclasses

from pairswap.types.abstract import AbstractPoolState, AbstractSimulationResult
from pairswap.types.aliases import Holder, Token
from pairswap.types.concrete import PoolStateMessage


@dataclasses.dataclass(slots=True, frozen=True, kw_only=True)
class ConstantProductPoolState(AbstractPoolState):
    reserves_token0: int
    reserves_token1: int
    total_supply: int


@dataclasses.dataclass(slots=True, frozen=True)
class ConstantProductPoolSimulationResult(AbstractSimulationResult):
    """
    The outcome of a simulated pool operation. Deltas are signed from the pool's perspective: a
    positive token delta is paid into the pool, a positive share delta is minted.
    """

    amount0_delta: int
    amount1_delta: int
    shares_delta: int
    initial_state: ConstantProductPoolState
    final_state: ConstantProductPoolState


@dataclasses.dataclass(slots=True, frozen=True)
class LiquidityAdded(PoolStateMessage):
    provider: Holder
    amount0: int
    amount1: int
    shares_minted: int
    state: ConstantProductPoolState


@dataclasses.dataclass(slots=True, frozen=True)
class LiquidityRemoved(PoolStateMessage):
    provider: Holder
    amount0: int
    amount1: int
    shares_burned: int
    state: ConstantProductPoolState


@dataclasses.dataclass(slots=True, frozen=True)
class Swap(PoolStateMessage):
    trader: Holder
    token_in: Token
    token_out: Token
    amount_in: int
    amount_out: int
    state: ConstantProductPoolState
