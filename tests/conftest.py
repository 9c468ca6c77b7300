import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

import pytest

from pairswap.amm import ConstantProductPool
from pairswap.logging import logger
from pairswap.types.concrete import AbstractPublisherMessage, Publisher

POOL_ADDRESS = "0x0000000000000000000000000000000000000001"
TOKEN0_ADDRESS = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
TOKEN1_ADDRESS = "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599"

# Addresses made of digits only are already in checksum form
OWNER = "0x1111111111111111111111111111111111111111"
PROVIDER = "0x2222222222222222222222222222222222222222"
TRADER = "0x3333333333333333333333333333333333333333"

ONE_ETHER = 10**18


@pytest.fixture(scope="session", autouse=True)
def _set_pairswap_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


class FakeSubscriber:
    """
    This subscriber class provides a record of received messages, and can be used to test that
    publisher/subscriber methods operate as expected.
    """

    def __init__(self) -> None:
        self.inbox: list[dict[str, Any]] = list()

    def notify(self, publisher: Publisher, message: AbstractPublisherMessage) -> None:
        self.inbox.append(
            {
                "from": publisher,
                "message": message,
            }
        )

    def subscribe(self, publisher: Publisher) -> None:
        publisher.subscribe(self)

    def unsubscribe(self, publisher: Publisher) -> None:
        publisher.unsubscribe(self)


class InsufficientTokenBalance(Exception): ...


class FakeCustody:
    """
    An in-memory token ledger standing in for the asset transfer service. Every transfer is
    recorded, and an optional hook runs before each transfer to simulate callbacks from a token
    contract.
    """

    def __init__(self, pool_address: str) -> None:
        self.pool_address = pool_address
        self.balances: defaultdict[tuple[str, str], int] = defaultdict(int)
        self.transfers: list[tuple[str, str, str, int]] = list()
        self.hook: Callable[[], None] | None = None

    def mint(self, token: str, holder: str, amount: int) -> None:
        self.balances[(token, holder)] += amount

    def _move(self, token: str, sender: str, recipient: str, amount: int) -> None:
        if self.hook is not None:
            self.hook()
        if self.balances[(token, sender)] < amount:
            raise InsufficientTokenBalance
        self.balances[(token, sender)] -= amount
        self.balances[(token, recipient)] += amount
        self.transfers.append((token, sender, recipient, amount))

    def pull_from(self, token: str, holder: str, amount: int) -> None:
        self._move(token, holder, self.pool_address, amount)

    def push_to(self, token: str, holder: str, amount: int) -> None:
        self._move(token, self.pool_address, holder, amount)


@pytest.fixture
def pool() -> ConstantProductPool:
    return ConstantProductPool(
        address=POOL_ADDRESS,
        token0=TOKEN0_ADDRESS,
        token1=TOKEN1_ADDRESS,
        silent=True,
    )


@pytest.fixture
def custody() -> FakeCustody:
    custody = FakeCustody(pool_address=POOL_ADDRESS)
    for holder in (OWNER, PROVIDER, TRADER):
        custody.mint(TOKEN0_ADDRESS, holder, 1_000_000 * ONE_ETHER)
        custody.mint(TOKEN1_ADDRESS, holder, 1_000_000 * ONE_ETHER)
    return custody


@pytest.fixture
def custodial_pool(custody: FakeCustody) -> ConstantProductPool:
    return ConstantProductPool(
        address=POOL_ADDRESS,
        token0=TOKEN0_ADDRESS,
        token1=TOKEN1_ADDRESS,
        custody=custody,
        silent=True,
    )
