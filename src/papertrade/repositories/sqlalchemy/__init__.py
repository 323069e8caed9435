"""SQLAlchemy repository implementations."""

from papertrade.repositories.sqlalchemy.database import (
    create_db_engine,
    create_session_factory,
    create_tables,
    Base,
)
from papertrade.repositories.sqlalchemy.user_repo import SqlAlchemyUserRepository
from papertrade.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from papertrade.repositories.sqlalchemy.trade_repo import SqlAlchemyTradeRepository
from papertrade.repositories.sqlalchemy.post_repo import SqlAlchemyPostRepository
from papertrade.repositories.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    SqlAlchemyUnitOfWorkFactory,
)

__all__ = [
    "create_db_engine",
    "create_session_factory",
    "create_tables",
    "Base",
    "SqlAlchemyUserRepository",
    "SqlAlchemyPositionRepository",
    "SqlAlchemyTradeRepository",
    "SqlAlchemyPostRepository",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUnitOfWorkFactory",
]
