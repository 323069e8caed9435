"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Integer,
    DateTime,
    Text,
    ForeignKey,
    Numeric,
    UniqueConstraint,
    CheckConstraint,
    Index,
    Enum as SqlEnum,
)

from papertrade.repositories.sqlalchemy.database import Base
from papertrade.domain.models.enums import OrderSide

MONEY = Numeric(precision=18, scale=4)
AVERAGE_COST = Numeric(precision=28, scale=10)


class UserORM(Base):
    """SQLAlchemy model for User."""

    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True)
    username = Column(String(64), unique=True, nullable=False)
    first_name = Column(String(64), nullable=False, default="")
    last_name = Column(String(64), nullable=False, default="")
    email = Column(String(254), unique=True, nullable=False)
    cash_balance = Column(MONEY, nullable=False, default=Decimal("0"))
    # Bumped on every update; a stale write raises StaleDataError
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("cash_balance >= 0", name="ck_users_cash_non_negative"),
    )
    __mapper_args__ = {"version_id_col": version}


class PositionORM(Base):
    """SQLAlchemy model for Position (one row per held symbol)."""

    __tablename__ = "positions"

    user_id = Column(String(36), ForeignKey("users.user_id"), primary_key=True)
    symbol = Column(String(20), primary_key=True)
    quantity = Column(Integer, nullable=False)
    average_cost = Column(AVERAGE_COST, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_positions_quantity_positive"),
    )


class TradeORM(Base):
    """SQLAlchemy model for Trade (append-only log)."""

    __tablename__ = "trades"

    trade_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    symbol = Column(String(20), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(MONEY, nullable=False)
    side = Column(SqlEnum(OrderSide), nullable=False)
    executed_at = Column(DateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_trades_quantity_positive"),
        Index("ix_trades_user_executed", "user_id", "executed_at"),
    )


class PostORM(Base):
    """SQLAlchemy model for Post (trade-derived feed entry)."""

    __tablename__ = "posts"

    post_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    trade_id = Column(String(36), ForeignKey("trades.trade_id"), nullable=False)
    symbol = Column(String(20), nullable=False)
    quantity = Column(Integer, nullable=False)
    side = Column(SqlEnum(OrderSide), nullable=False)
    rationale = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, index=True)


class LikeORM(Base):
    """SQLAlchemy model for Like."""

    __tablename__ = "likes"

    user_id = Column(String(36), ForeignKey("users.user_id"), primary_key=True)
    post_id = Column(String(36), ForeignKey("posts.post_id"), primary_key=True)
    liked_at = Column(DateTime, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),
    )
