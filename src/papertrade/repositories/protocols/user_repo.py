"""User repository protocol."""

from decimal import Decimal
from typing import Iterable, Protocol, Optional

from papertrade.domain.models import User


class UserRepository(Protocol):
    """Interface for user and cash balance data access."""

    def add(self, user: User) -> User:
        """Stage a new user."""
        ...

    def get(self, user_id: str, for_update: bool = False) -> Optional[User]:
        """Retrieve user by ID, optionally locking the row for the current unit."""
        ...

    def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        """Retrieve the given users keyed by ID."""
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve user by username."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve user by email."""
        ...

    def list_all(self) -> list[User]:
        """List all users."""
        ...

    def update_balance(self, user_id: str, cash_balance: Decimal) -> User:
        """Stage a new cash balance for a user."""
        ...
