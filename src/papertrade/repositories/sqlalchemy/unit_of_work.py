"""SQLAlchemy unit of work: one session, one transaction, all-or-nothing."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from papertrade.core.exceptions import StorageConflictError, StorageFailureError
from papertrade.repositories.sqlalchemy.user_repo import SqlAlchemyUserRepository
from papertrade.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from papertrade.repositories.sqlalchemy.trade_repo import SqlAlchemyTradeRepository
from papertrade.repositories.sqlalchemy.post_repo import SqlAlchemyPostRepository

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """
    Transaction boundary over a fresh Session.

    Repositories only flush; nothing becomes visible to other sessions until
    commit(). Leaving the block without committing, or with an exception,
    rolls back every staged write. Persistence errors are translated on the
    way out: constraint and stale-version conflicts become
    StorageConflictError, anything else from SQLAlchemy StorageFailureError.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self.session: Optional[Session] = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._session_factory()
        self.users = SqlAlchemyUserRepository(self.session)
        self.positions = SqlAlchemyPositionRepository(self.session)
        self.trades = SqlAlchemyTradeRepository(self.session)
        self.posts = SqlAlchemyPostRepository(self.session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            # No-op after a successful commit
            self.session.rollback()
        finally:
            self.session.close()
            self.session = None

        if isinstance(exc, (IntegrityError, StaleDataError)):
            logger.info("Unit of work rolled back on conflict: %s", exc)
            raise StorageConflictError() from exc
        if isinstance(exc, SQLAlchemyError):
            logger.error("Unit of work rolled back on storage failure", exc_info=exc)
            raise StorageFailureError() from exc

    def commit(self) -> None:
        """Commit all staged writes."""
        self.session.commit()

    def rollback(self) -> None:
        """Discard all staged writes."""
        self.session.rollback()


class SqlAlchemyUnitOfWorkFactory:
    """Callable producing a new unit of work per atomic operation."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def __call__(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self._session_factory)
