"""Unit of work protocol: one atomic consistency boundary."""

from typing import Protocol

from papertrade.repositories.protocols.user_repo import UserRepository
from papertrade.repositories.protocols.position_repo import PositionRepository
from papertrade.repositories.protocols.trade_repo import TradeRepository
from papertrade.repositories.protocols.post_repo import PostRepository


class UnitOfWork(Protocol):
    """
    Groups repository writes into a single all-or-nothing transaction.

    Nothing staged through the repositories is visible to other units until
    commit(); leaving the context without committing rolls everything back.
    """

    users: UserRepository
    positions: PositionRepository
    trades: TradeRepository
    posts: PostRepository

    def __enter__(self) -> "UnitOfWork":
        """Begin the unit."""
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        """End the unit, rolling back anything not committed."""
        ...

    def commit(self) -> None:
        """Commit all staged writes."""
        ...

    def rollback(self) -> None:
        """Discard all staged writes."""
        ...
