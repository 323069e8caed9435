"""Portfolio read side: account valuation and the leaderboard."""

from collections import defaultdict
from decimal import Decimal
from typing import Callable

from papertrade.core.exceptions import UserNotFoundError
from papertrade.domain.models import Position
from papertrade.domain.views import LeaderboardEntry, PortfolioValueView, PositionView
from papertrade.repositories.protocols import UnitOfWork
from papertrade.services.market_data_service import MarketDataService


class PortfolioService:
    """
    Read-only valuation of user accounts.

    Positions are marked at the current price when one can be obtained and
    at their average cost otherwise. Gain/loss is measured against the
    configured initial balance every account started with.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        market_data: MarketDataService,
        initial_balance: Decimal,
    ):
        self._uow_factory = uow_factory
        self._market_data = market_data
        self._initial_balance = Decimal(initial_balance)

    def get_portfolio_value(self, user_id: str) -> PortfolioValueView:
        """Cash balance, marked positions and total value for one user."""
        with self._uow_factory() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            positions = uow.positions.list_for_user(user_id)

        prices = self._market_data.get_prices([p.symbol for p in positions])
        views = [self._value_position(p, prices) for p in positions]
        total = user.cash_balance + sum((v.market_value for v in views), Decimal("0"))

        return PortfolioValueView(
            user_id=user_id,
            balance=user.cash_balance,
            positions=views,
            total_value=total,
        )

    def get_leaderboard(self) -> list[LeaderboardEntry]:
        """All users ranked by total account value, highest first."""
        with self._uow_factory() as uow:
            users = uow.users.list_all()
            positions = uow.positions.list_all()

        by_user: dict[str, list[Position]] = defaultdict(list)
        for position in positions:
            by_user[position.user_id].append(position)

        prices = self._market_data.get_prices(sorted({p.symbol for p in positions}))

        rows = []
        for user in users:
            holdings = sum(
                (self._value_position(p, prices).market_value for p in by_user[user.user_id]),
                Decimal("0"),
            )
            total = user.cash_balance + holdings
            rows.append((user, total))

        # Ties broken by username so the order is stable
        rows.sort(key=lambda row: (-row[1], row[0].username))

        return [
            LeaderboardEntry(
                rank=index,
                user_id=user.user_id,
                username=user.username,
                total_value=total,
                gain_loss=total - self._initial_balance,
            )
            for index, (user, total) in enumerate(rows, start=1)
        ]

    @staticmethod
    def _value_position(position: Position, prices: dict[str, Decimal]) -> PositionView:
        price = prices.get(position.symbol)
        priced = price is not None
        if not priced:
            price = position.average_cost
        market_value = price * position.quantity
        return PositionView(
            symbol=position.symbol,
            quantity=position.quantity,
            average_cost=position.average_cost,
            last_price=price,
            market_value=market_value,
            unrealized_pnl=market_value - position.cost_basis,
            priced=priced,
        )
