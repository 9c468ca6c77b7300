from dataclasses import dataclass

from eth_typing import ChecksumAddress


@dataclass(slots=True, frozen=True, kw_only=True)
class AbstractPoolState:
    address: ChecksumAddress
