"""User domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class User:
    """
    Trading participant holding a virtual cash balance.

    The balance is only ever changed by the ledger while recording a fill.
    """

    user_id: str
    username: str
    cash_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    created_at: Optional[datetime] = field(default=None)
    first_name: str = ""
    last_name: str = ""
    email: str = ""
