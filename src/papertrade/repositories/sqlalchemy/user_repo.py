"""SQLAlchemy implementation of UserRepository."""

from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from papertrade.core.timezone import to_eastern, to_naive_eastern
from papertrade.domain.models import User
from papertrade.repositories.sqlalchemy.orm_models import UserORM


class SqlAlchemyUserRepository:
    """SQLAlchemy-backed user repository. Writes are flushed, never committed here."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, user: User) -> User:
        """Stage a new user."""
        orm_user = UserORM(
            user_id=user.user_id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            cash_balance=user.cash_balance,
            created_at=to_naive_eastern(user.created_at),
        )
        self._db.add(orm_user)
        self._db.flush()
        return self._to_domain(orm_user)

    def get(self, user_id: str, for_update: bool = False) -> Optional[User]:
        """Retrieve user by ID, optionally locking the row for the current unit."""
        query = self._db.query(UserORM).filter(UserORM.user_id == user_id)
        if for_update:
            query = query.with_for_update()
        orm_user = query.first()
        return self._to_domain(orm_user) if orm_user else None

    def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        """Retrieve the given users keyed by ID; unknown IDs are left out."""
        ids = set(user_ids)
        if not ids:
            return {}
        orm_users = self._db.query(UserORM).filter(UserORM.user_id.in_(ids)).all()
        return {u.user_id: self._to_domain(u) for u in orm_users}

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve user by username."""
        orm_user = self._db.query(UserORM).filter(
            UserORM.username == username
        ).first()
        return self._to_domain(orm_user) if orm_user else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve user by (normalized) email."""
        orm_user = self._db.query(UserORM).filter(
            UserORM.email == email
        ).first()
        return self._to_domain(orm_user) if orm_user else None

    def list_all(self) -> list[User]:
        """List all users."""
        orm_users = self._db.query(UserORM).order_by(UserORM.username).all()
        return [self._to_domain(u) for u in orm_users]

    def update_balance(self, user_id: str, cash_balance: Decimal) -> User:
        """Stage a new cash balance for a user."""
        orm_user = self._db.query(UserORM).filter(
            UserORM.user_id == user_id
        ).first()
        if orm_user is None:
            raise ValueError(f"User not found: {user_id}")
        orm_user.cash_balance = cash_balance
        self._db.flush()
        return self._to_domain(orm_user)

    @staticmethod
    def _to_domain(orm: UserORM) -> User:
        """Convert ORM model to domain model."""
        return User(
            user_id=orm.user_id,
            username=orm.username,
            cash_balance=Decimal(str(orm.cash_balance)) if orm.cash_balance else Decimal("0"),
            created_at=to_eastern(orm.created_at) if orm.created_at else None,
            first_name=orm.first_name or "",
            last_name=orm.last_name or "",
            email=orm.email,
        )
