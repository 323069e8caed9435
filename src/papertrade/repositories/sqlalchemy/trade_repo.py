"""SQLAlchemy implementation of TradeRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from papertrade.core.timezone import to_eastern, to_naive_eastern
from papertrade.domain.models import Trade
from papertrade.repositories.sqlalchemy.orm_models import TradeORM


class SqlAlchemyTradeRepository:
    """SQLAlchemy-backed append-only trade log."""

    def __init__(self, db: Session):
        self._db = db

    def append(self, trade: Trade) -> Trade:
        """Append a trade."""
        orm_trade = TradeORM(
            trade_id=trade.trade_id,
            user_id=trade.user_id,
            symbol=trade.symbol,
            quantity=trade.quantity,
            price=trade.price,
            side=trade.side,
            executed_at=to_naive_eastern(trade.executed_at),
        )
        self._db.add(orm_trade)
        self._db.flush()
        return trade

    def list_for_user(self, user_id: str, limit: Optional[int] = None) -> list[Trade]:
        """List a user's trades, oldest first."""
        query = (
            self._db.query(TradeORM)
            .filter(TradeORM.user_id == user_id)
            .order_by(TradeORM.executed_at, TradeORM.trade_id)
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    def count_for_user(self, user_id: str) -> int:
        """Number of trades recorded for a user."""
        return (
            self._db.query(func.count(TradeORM.trade_id))
            .filter(TradeORM.user_id == user_id)
            .scalar()
        ) or 0

    @staticmethod
    def _to_domain(orm: TradeORM) -> Trade:
        """Convert ORM model to domain model."""
        return Trade(
            trade_id=orm.trade_id,
            user_id=orm.user_id,
            symbol=orm.symbol,
            quantity=int(orm.quantity),
            price=Decimal(str(orm.price)),
            side=orm.side,
            executed_at=to_eastern(orm.executed_at),
        )
