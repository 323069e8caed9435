"""Repository protocol definitions (interfaces)."""

from papertrade.repositories.protocols.user_repo import UserRepository
from papertrade.repositories.protocols.position_repo import PositionRepository
from papertrade.repositories.protocols.trade_repo import TradeRepository
from papertrade.repositories.protocols.post_repo import PostRepository
from papertrade.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "UserRepository",
    "PositionRepository",
    "TradeRepository",
    "PostRepository",
    "UnitOfWork",
]
