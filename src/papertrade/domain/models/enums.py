"""Enumerations for domain models."""

from enum import Enum


class OrderSide(str, Enum):
    """Direction of an order or fill."""

    BUY = "buy"
    SELL = "sell"
