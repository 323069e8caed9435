"""Repository layer - data access abstractions and implementations."""

from papertrade.repositories.protocols import (
    UserRepository,
    PositionRepository,
    TradeRepository,
    PostRepository,
    UnitOfWork,
)

__all__ = [
    "UserRepository",
    "PositionRepository",
    "TradeRepository",
    "PostRepository",
    "UnitOfWork",
]
