"""User service: registration, login lookup and user queries."""

import logging
import re
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable

from papertrade.core.timezone import now_eastern
from papertrade.core.exceptions import (
    StorageConflictError,
    UnauthenticatedError,
    UserNotFoundError,
    ValidationError,
)
from papertrade.domain.models import User
from papertrade.repositories.protocols import UnitOfWork

logger = logging.getLogger(__name__)

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{3,64}$")
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
MAX_NAME_LENGTH = 64
MAX_EMAIL_LENGTH = 254


class UserService:
    """
    Creates trading users funded with the configured starting balance.

    Credentials are not handled here; tokens come from the auth provider.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        initial_balance: Decimal,
        clock: Callable[[], datetime] = now_eastern,
    ):
        self._uow_factory = uow_factory
        self._initial_balance = Decimal(initial_balance)
        self._clock = clock

    def register(self, username: str, first_name: str, last_name: str, email: str) -> User:
        """
        Create a new user.

        Args:
            username: Unique handle, 3-64 letters, digits, '_', '.', '-'
            first_name: Required, up to 64 characters
            last_name: Required, up to 64 characters
            email: Unique address, stored lower-cased

        Returns:
            Created User with the initial cash balance

        Raises:
            ValidationError: a field is missing or malformed
            StorageConflictError: the email or username is already taken
        """
        username = (username or "").strip()
        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        email = normalize_email(email)

        if not first_name or not last_name:
            raise ValidationError("First name and last name are required")
        if len(first_name) > MAX_NAME_LENGTH or len(last_name) > MAX_NAME_LENGTH:
            raise ValidationError(f"Names must be at most {MAX_NAME_LENGTH} characters")
        if len(email) > MAX_EMAIL_LENGTH or not _EMAIL_RE.match(email):
            raise ValidationError("A valid email is required")
        if not _USERNAME_RE.match(username):
            raise ValidationError(
                "Username must be 3-64 characters of letters, digits, '_', '.' or '-'"
            )

        with self._uow_factory() as uow:
            if uow.users.get_by_email(email) is not None:
                raise StorageConflictError("Email already exists")
            if uow.users.get_by_username(username) is not None:
                raise StorageConflictError("Username already exists")
            # A racing registration still trips the unique constraints on flush
            user = uow.users.add(
                User(
                    user_id=str(uuid.uuid4()),
                    username=username,
                    cash_balance=self._initial_balance,
                    created_at=self._clock(),
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                )
            )
            uow.commit()

        logger.info("Registered user %s (%s)", user.username, user.user_id)
        return user

    def login(self, username: str, email: str) -> User:
        """
        Resolve an existing user from their username and registered email.

        Raises:
            UnauthenticatedError: no user matches both values
        """
        username = (username or "").strip()
        with self._uow_factory() as uow:
            user = uow.users.get_by_username(username) if username else None
        if user is None or user.email != normalize_email(email):
            raise UnauthenticatedError("Invalid username or email")
        return user

    def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        with self._uow_factory() as uow:
            user = uow.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def list_users(self) -> list[User]:
        """List all users."""
        with self._uow_factory() as uow:
            return uow.users.list_all()


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()
