"""SQLAlchemy implementation of PositionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from papertrade.domain.models import Position
from papertrade.repositories.sqlalchemy.orm_models import PositionORM


class SqlAlchemyPositionRepository:
    """SQLAlchemy-backed position repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, user_id: str, symbol: str, for_update: bool = False) -> Optional[Position]:
        """Get the position for a symbol, if any."""
        orm_pos = self._query_one(user_id, symbol, for_update)
        return self._to_domain(orm_pos) if orm_pos else None

    def list_for_user(self, user_id: str) -> list[Position]:
        """List a user's positions ordered by symbol."""
        orm_positions = (
            self._db.query(PositionORM)
            .filter(PositionORM.user_id == user_id)
            .order_by(PositionORM.symbol)
            .all()
        )
        return [self._to_domain(p) for p in orm_positions]

    def list_all(self) -> list[Position]:
        """List every stored position."""
        orm_positions = (
            self._db.query(PositionORM)
            .order_by(PositionORM.user_id, PositionORM.symbol)
            .all()
        )
        return [self._to_domain(p) for p in orm_positions]

    def save(self, position: Position) -> Position:
        """Insert or update a position."""
        orm_pos = self._query_one(position.user_id, position.symbol)

        if orm_pos:
            orm_pos.quantity = position.quantity
            orm_pos.average_cost = position.average_cost
        else:
            orm_pos = PositionORM(
                user_id=position.user_id,
                symbol=position.symbol,
                quantity=position.quantity,
                average_cost=position.average_cost,
            )
            self._db.add(orm_pos)

        self._db.flush()
        return self._to_domain(orm_pos)

    def delete(self, user_id: str, symbol: str) -> None:
        """Remove a position (no-op when absent)."""
        self._db.query(PositionORM).filter(
            PositionORM.user_id == user_id,
            PositionORM.symbol == symbol,
        ).delete(synchronize_session="fetch")
        self._db.flush()

    def _query_one(self, user_id: str, symbol: str, for_update: bool = False) -> Optional[PositionORM]:
        query = self._db.query(PositionORM).filter(
            PositionORM.user_id == user_id,
            PositionORM.symbol == symbol,
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def _to_domain(orm: PositionORM) -> Position:
        """Convert ORM position to domain model."""
        return Position(
            user_id=orm.user_id,
            symbol=orm.symbol,
            quantity=int(orm.quantity),
            average_cost=Decimal(str(orm.average_cost)) if orm.average_cost else Decimal("0"),
        )
