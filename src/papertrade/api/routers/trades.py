"""Trade execution and trade history API."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from papertrade.api.deps import get_current_user_id, get_ledger_service, get_trade_executor
from papertrade.api.schemas import (
    TradeListResponse,
    TradeRequest,
    TradeResponse,
    TradeResultResponse,
)
from papertrade.domain.models import Order
from papertrade.services import LedgerService, TradeExecutor

router = APIRouter(prefix="/trades", tags=["trades"])


@router.post("", response_model=TradeResultResponse, status_code=201)
def execute_trade(
    data: TradeRequest,
    user_id: str = Depends(get_current_user_id),
    executor: TradeExecutor = Depends(get_trade_executor),
):
    """
    Execute a market order at the current price.

    The trade and its feed post are recorded together; on any error nothing
    is written.
    """
    order = Order(
        symbol=data.symbol,
        quantity=data.quantity,
        side=data.side,
        rationale=data.rationale,
    )
    result = executor.execute(user_id, order)
    return TradeResultResponse.model_validate(result)


@router.get("", response_model=TradeListResponse)
def list_trades(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    user_id: str = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """List the caller's trades, oldest first."""
    trades = ledger.list_trades(user_id, limit=limit)
    return TradeListResponse(
        trades=[TradeResponse.model_validate(t) for t in trades],
        count=len(trades),
    )
