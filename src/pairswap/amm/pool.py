import contextlib
import dataclasses
from collections.abc import Iterator
from fractions import Fraction
from threading import Lock
from typing import Any
from weakref import WeakSet

from eth_typing import ChecksumAddress

from pairswap.amm.checked_math import checked_add, checked_sub
from pairswap.amm.custody import AssetTransferService
from pairswap.amm.liquidity_math import burn_amounts, mint_amount
from pairswap.amm.swap_math import get_amount_in, get_amount_out, get_spot_price
from pairswap.amm.types import (
    ConstantProductPoolSimulationResult,
    ConstantProductPoolState,
    LiquidityAdded,
    LiquidityRemoved,
    Swap,
)
from pairswap.checksum_cache import get_checksum_address
from pairswap.constants import FEE
from pairswap.exceptions import (
    EmptyReserves,
    InsufficientLiquidity,
    InsufficientLiquidityMinted,
    InsufficientOutput,
    InsufficientReturnAmount,
    InsufficientShares,
    InvariantViolation,
    PairswapValueError,
    ReentrantCall,
)
from pairswap.logging import logger
from pairswap.types.abstract import AbstractLiquidityPool
from pairswap.types.aliases import Holder, Token
from pairswap.types.concrete import PublisherMixin, Subscriber
from pairswap.validation.evm_values import validate_amount


class ConstantProductPool(PublisherMixin, AbstractLiquidityPool):
    """
    A two-token liquidity pool implementing the x*y=k constant function invariant with a fixed
    0.3% swap fee, and issuing liquidity shares to depositors.
    """

    type PoolState = ConstantProductPoolState

    _state: PoolState

    FEE = FEE

    def __init__(
        self,
        address: ChecksumAddress | str,
        token0: Token | str,
        token1: Token | str,
        *,
        custody: AssetTransferService | None = None,
        silent: bool = False,
    ) -> None:
        """
        An empty pool bound permanently to two tokens.

        Arguments
        ---------
        address:
            The address identifying the pool.
        token0, token1:
            The addresses of the pooled tokens. The order is kept as given.
        custody:
            The service that moves tokens in and out of the pool after each state change. If
            omitted, the pool only keeps accounts and assumes transfers happen elsewhere.
        silent:
            Suppress status output.
        """

        self.address = get_checksum_address(address)
        self.token0 = get_checksum_address(token0)
        self.token1 = get_checksum_address(token1)
        if self.token0 == self.token1:
            raise PairswapValueError(message="Pool tokens must be distinct.")

        self.custody = custody
        self.name = (
            f"{self.token0}-{self.token1} "
            f"({self.__class__.__name__}, {100 * self.FEE.numerator / self.FEE.denominator:.2f}%)"
        )

        self._state = self.PoolState.__value__(
            address=self.address,
            reserves_token0=0,
            reserves_token1=0,
            total_supply=0,
        )
        self._balances: dict[Holder, int] = {}
        self._reentrancy_lock = Lock()
        self._subscribers: WeakSet[Subscriber] = WeakSet()

        if not silent:  # pragma: no cover
            logger.info(self.name)
            logger.info(f"• Token 0: {self.token0}")
            logger.info(f"• Token 1: {self.token1}")

    def __getstate__(self) -> dict[str, Any]:
        # Remove objects that either cannot be pickled or are bound to the running process
        dropped_attributes = (
            "_reentrancy_lock",
            "_subscribers",
            "custody",
        )

        with self._nonreentrant():
            return {
                k: (v.copy() if k == "_balances" else v)
                for k, v in self.__dict__.items()
                if k not in dropped_attributes
            }

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self.custody = None
        self._reentrancy_lock = Lock()
        self._subscribers = WeakSet()

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(address={self.address}, token0={self.token0}, token1={self.token1})"  # noqa:E501

    @property
    def state(self) -> PoolState:
        return self._state

    @property
    def reserves_token0(self) -> int:
        return self.state.reserves_token0

    @property
    def reserves_token1(self) -> int:
        return self.state.reserves_token1

    @property
    def total_supply(self) -> int:
        return self.state.total_supply

    @property
    def tokens(self) -> tuple[Token, Token]:
        return self.token0, self.token1

    @property
    def holders(self) -> dict[Holder, int]:
        return self._balances.copy()

    def get_reserves(self) -> tuple[int, int]:
        state = self.state
        return state.reserves_token0, state.reserves_token1

    def balance_of(self, holder: Holder | str) -> int:
        return self._balances.get(get_checksum_address(holder), 0)

    @contextlib.contextmanager
    def _nonreentrant(self) -> Iterator[None]:
        """
        Hold the pool's reentrancy lock for the duration of the block. A call that finds the lock
        already held is rejected instead of waiting.
        """

        if not self._reentrancy_lock.acquire(blocking=False):
            raise ReentrantCall
        try:
            yield
        finally:
            self._reentrancy_lock.release()

    @contextlib.contextmanager
    def _rollback_on_error(self, holder: Holder) -> Iterator[None]:
        """
        Restore the state and the share balance of `holder` if the block raises.
        """

        initial_state = self._state
        initial_balance = self._balances.get(holder, 0)
        try:
            yield
        except Exception:
            self._state = initial_state
            self._set_balance(holder, initial_balance)
            raise

    def _set_balance(self, holder: Holder, balance: int) -> None:
        if balance == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = balance

    def _check_invariants(self) -> None:
        state = self._state
        if state.total_supply > 0 and (state.reserves_token0 == 0 or state.reserves_token1 == 0):
            raise InvariantViolation(message="Shares are outstanding against an empty reserve.")
        if any(balance < 0 for balance in self._balances.values()):
            raise InvariantViolation(message="Negative share balance.")
        if sum(self._balances.values()) != state.total_supply:
            raise InvariantViolation(message="Share balances do not sum to the total supply.")

    def _commit(self, state: PoolState, holder: Holder, balance: int) -> None:
        self._state = state
        self._set_balance(holder, balance)
        self._check_invariants()

    def _is_zero_for_one(self, token_in: Token | str) -> bool:
        token_in = get_checksum_address(token_in)
        if token_in == self.token0:
            return True
        if token_in == self.token1:
            return False
        raise PairswapValueError(
            message=f"Could not identify token_in: {token_in}! Pool holds: {self.token0} {self.token1}"  # noqa:E501
        )

    def _calculate_provide(
        self,
        state: PoolState,
        amount0: int,
        amount1: int,
    ) -> tuple[int, PoolState]:
        amount0 = validate_amount(amount0)
        amount1 = validate_amount(amount1)

        shares = mint_amount(
            amount0=amount0,
            amount1=amount1,
            reserves0=state.reserves_token0,
            reserves1=state.reserves_token1,
            total_supply=state.total_supply,
        )
        if shares == 0:
            raise InsufficientLiquidityMinted

        return shares, dataclasses.replace(
            state,
            reserves_token0=checked_add(state.reserves_token0, amount0),
            reserves_token1=checked_add(state.reserves_token1, amount1),
            total_supply=checked_add(state.total_supply, shares),
        )

    def _calculate_withdraw(
        self,
        state: PoolState,
        shares: int,
        balance: int,
    ) -> tuple[int, int, PoolState]:
        shares = validate_amount(shares)
        if shares > balance:
            raise InsufficientShares(balance=balance, requested=shares)

        amount0, amount1 = burn_amounts(
            shares=shares,
            reserves0=state.reserves_token0,
            reserves1=state.reserves_token1,
            total_supply=state.total_supply,
        )
        if amount0 == 0 or amount1 == 0:
            raise InsufficientReturnAmount(amount0=amount0, amount1=amount1)

        return (
            amount0,
            amount1,
            dataclasses.replace(
                state,
                reserves_token0=checked_sub(state.reserves_token0, amount0),
                reserves_token1=checked_sub(state.reserves_token1, amount1),
                total_supply=checked_sub(state.total_supply, shares),
            ),
        )

    def _calculate_swap(
        self,
        state: PoolState,
        zero_for_one: bool,
        amount_in: int,
    ) -> tuple[int, PoolState]:
        amount_in = validate_amount(amount_in)

        reserves_in, reserves_out = (
            (state.reserves_token0, state.reserves_token1)
            if zero_for_one
            else (state.reserves_token1, state.reserves_token0)
        )
        amount_out = get_amount_out(
            amount_in=amount_in,
            reserves_in=reserves_in,
            reserves_out=reserves_out,
        )
        if amount_out == 0:
            raise InsufficientOutput
        if amount_out >= reserves_out:
            raise InsufficientLiquidity(amount_out=amount_out, reserves_out=reserves_out)

        final_reserves_in = checked_add(reserves_in, amount_in)
        final_reserves_out = reserves_out - amount_out
        if final_reserves_in * final_reserves_out < reserves_in * reserves_out:
            raise InvariantViolation(message="Swap would decrease the constant product.")

        return amount_out, dataclasses.replace(
            state,
            reserves_token0=final_reserves_in if zero_for_one else final_reserves_out,
            reserves_token1=final_reserves_out if zero_for_one else final_reserves_in,
        )

    def provide(
        self,
        amount0: int,
        amount1: int,
        caller: Holder | str,
    ) -> int:
        """
        Deposit `amount0` of token0 and `amount1` of token1 on behalf of `caller`, and credit the
        caller with newly minted shares. Returns the number of shares minted.

        Amounts are added to the reserves as given. A deposit that deviates from the pool ratio is
        credited only for its limiting side.
        """

        caller = get_checksum_address(caller)

        with self._nonreentrant(), self._rollback_on_error(caller):
            shares, final_state = self._calculate_provide(self._state, amount0, amount1)
            self._commit(
                state=final_state,
                holder=caller,
                balance=self._balances.get(caller, 0) + shares,
            )
            if self.custody is not None:
                self.custody.pull_from(self.token0, caller, amount0)
                self.custody.pull_from(self.token1, caller, amount1)

        logger.debug(f"[{self.name}] {caller} added ({amount0}, {amount1}) for {shares} shares")
        self._notify_subscribers(
            message=LiquidityAdded(
                provider=caller,
                amount0=amount0,
                amount1=amount1,
                shares_minted=shares,
                state=final_state,
            )
        )
        return shares

    def withdraw(
        self,
        shares: int,
        caller: Holder | str,
    ) -> tuple[int, int]:
        """
        Burn `shares` held by `caller` and return the proportional amounts of both tokens.
        """

        caller = get_checksum_address(caller)

        with self._nonreentrant(), self._rollback_on_error(caller):
            balance = self._balances.get(caller, 0)
            amount0, amount1, final_state = self._calculate_withdraw(self._state, shares, balance)
            self._commit(
                state=final_state,
                holder=caller,
                balance=balance - shares,
            )
            if self.custody is not None:
                self.custody.push_to(self.token0, caller, amount0)
                self.custody.push_to(self.token1, caller, amount1)

        logger.debug(f"[{self.name}] {caller} burned {shares} shares for ({amount0}, {amount1})")
        self._notify_subscribers(
            message=LiquidityRemoved(
                provider=caller,
                amount0=amount0,
                amount1=amount1,
                shares_burned=shares,
                state=final_state,
            )
        )
        return amount0, amount1

    def swap(
        self,
        token_in: Token | str,
        amount_in: int,
        caller: Holder | str,
    ) -> int:
        """
        Swap an exact input of `token_in` for the other token. Returns the amount out.
        """

        caller = get_checksum_address(caller)
        zero_for_one = self._is_zero_for_one(token_in)
        token_in, token_out = (
            (self.token0, self.token1) if zero_for_one else (self.token1, self.token0)
        )

        with self._nonreentrant(), self._rollback_on_error(caller):
            amount_out, final_state = self._calculate_swap(self._state, zero_for_one, amount_in)
            self._commit(
                state=final_state,
                holder=caller,
                balance=self._balances.get(caller, 0),
            )
            if self.custody is not None:
                self.custody.pull_from(token_in, caller, amount_in)
                self.custody.push_to(token_out, caller, amount_out)

        logger.debug(f"[{self.name}] {caller} swapped {amount_in} {token_in} for {amount_out}")
        self._notify_subscribers(
            message=Swap(
                trader=caller,
                token_in=token_in,
                token_out=token_out,
                amount_in=amount_in,
                amount_out=amount_out,
                state=final_state,
            )
        )
        return amount_out

    def calculate_tokens_out_from_tokens_in(
        self,
        token_in: Token | str,
        token_in_quantity: int,
        override_state: PoolState | None = None,
    ) -> int:
        """
        Calculates the expected token OUTPUT for a target INPUT at current pool reserves.

        Accepts a `PoolState` state override for calculation against an arbitrary state
        in lieu of the recorded state.
        """

        if override_state:  # pragma: no cover
            logger.debug(f"State overrides applied: {override_state}")

        state = override_state if override_state is not None else self.state
        if self._is_zero_for_one(token_in):
            reserves_in, reserves_out = state.reserves_token0, state.reserves_token1
        else:
            reserves_in, reserves_out = state.reserves_token1, state.reserves_token0

        return get_amount_out(
            amount_in=token_in_quantity,
            reserves_in=reserves_in,
            reserves_out=reserves_out,
        )

    def calculate_tokens_in_from_tokens_out(
        self,
        token_out: Token | str,
        token_out_quantity: int,
        override_state: PoolState | None = None,
    ) -> int:
        """
        Calculates the required token INPUT of the other token for a target OUTPUT of `token_out`
        at current pool reserves.
        """

        if override_state:  # pragma: no cover
            logger.debug(f"State overrides applied: {override_state}")

        state = override_state if override_state is not None else self.state
        if self._is_zero_for_one(token_out):
            reserves_in, reserves_out = state.reserves_token1, state.reserves_token0
        else:
            reserves_in, reserves_out = state.reserves_token0, state.reserves_token1

        return get_amount_in(
            amount_out=token_out_quantity,
            reserves_in=reserves_in,
            reserves_out=reserves_out,
        )

    def get_spot_price(
        self,
        token: Token | str | None = None,
        override_state: PoolState | None = None,
    ) -> int:
        """
        Get the spot price of `token` (token0 if omitted) in units of the other token, scaled by
        `pairswap.constants.PRICE_SCALE` and truncated.
        """

        state = override_state if override_state is not None else self.state
        if token is None or self._is_zero_for_one(token):
            return get_spot_price(
                reserves_in=state.reserves_token0,
                reserves_out=state.reserves_token1,
            )
        return get_spot_price(
            reserves_in=state.reserves_token1,
            reserves_out=state.reserves_token0,
        )

    def get_exchange_rate(
        self,
        token: Token | str,
        override_state: PoolState | None = None,
    ) -> Fraction:
        """
        Get the exact exchange rate for the given token, expressed as units of the paired token
        per unit of `token`. Intended for display; swaps always use the integer formulas.
        """

        state = override_state if override_state is not None else self.state
        if state.reserves_token0 == 0 or state.reserves_token1 == 0:
            raise EmptyReserves

        return (
            Fraction(state.reserves_token1, state.reserves_token0)
            if self._is_zero_for_one(token)
            else Fraction(state.reserves_token0, state.reserves_token1)
        )

    def simulate_provide(
        self,
        amount0: int,
        amount1: int,
        override_state: PoolState | None = None,
    ) -> ConstantProductPoolSimulationResult:
        """
        Simulate adding liquidity.
        """

        initial_state = override_state if override_state is not None else self.state
        shares, final_state = self._calculate_provide(initial_state, amount0, amount1)

        return ConstantProductPoolSimulationResult(
            amount0_delta=amount0,
            amount1_delta=amount1,
            shares_delta=shares,
            initial_state=initial_state,
            final_state=final_state,
        )

    def simulate_withdraw(
        self,
        shares: int,
        holder: Holder | str | None = None,
        override_state: PoolState | None = None,
    ) -> ConstantProductPoolSimulationResult:
        """
        Simulate removing liquidity. If `holder` is given, their current balance bounds the shares
        that can be burned, otherwise the total supply does.
        """

        initial_state = override_state if override_state is not None else self.state
        balance = self.balance_of(holder) if holder is not None else initial_state.total_supply
        amount0, amount1, final_state = self._calculate_withdraw(initial_state, shares, balance)

        return ConstantProductPoolSimulationResult(
            amount0_delta=-amount0,
            amount1_delta=-amount1,
            shares_delta=-shares,
            initial_state=initial_state,
            final_state=final_state,
        )

    def simulate_swap(
        self,
        token_in: Token | str,
        amount_in: int,
        override_state: PoolState | None = None,
    ) -> ConstantProductPoolSimulationResult:
        """
        Simulate an exact input swap.
        """

        initial_state = override_state if override_state is not None else self.state
        zero_for_one = self._is_zero_for_one(token_in)
        amount_out, final_state = self._calculate_swap(initial_state, zero_for_one, amount_in)

        return ConstantProductPoolSimulationResult(
            amount0_delta=amount_in if zero_for_one else -amount_out,
            amount1_delta=-amount_out if zero_for_one else amount_in,
            shares_delta=0,
            initial_state=initial_state,
            final_state=final_state,
        )
