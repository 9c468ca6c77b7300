from typing import Protocol

from pairswap.types.aliases import Holder, Token


class AssetTransferService(Protocol):
    """
    Moves tokens between holders and the custody of a pool.

    The pool calls these methods only after its own state has been committed. Either method may
    raise to reject the transfer, in which case the pool restores its previous state and re-raises.
    Implementations may call back into the pool; read-only queries observe the committed state,
    while state-modifying calls are rejected with `ReentrantCall`.
    """

    def pull_from(self, token: Token, holder: Holder, amount: int) -> None:
        """
        Move `amount` of `token` from `holder` into the pool's custody.
        """

    def push_to(self, token: Token, holder: Holder, amount: int) -> None:
        """
        Move `amount` of `token` out of the pool's custody to `holder`.
        """
