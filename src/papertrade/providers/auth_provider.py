"""Authentication provider protocol and an opaque bearer-token implementation."""

import secrets
import threading
from typing import Protocol

from papertrade.core.exceptions import UnauthenticatedError


class AuthProvider(Protocol):
    """Resolves an opaque credential to a stable user identity."""

    def authenticate(self, credential: str) -> str:
        """Return the user id for the credential or raise UnauthenticatedError."""
        ...

    def issue_token(self, user_id: str) -> str:
        """Create a new credential for a user."""
        ...

    def revoke_token(self, token: str) -> None:
        """Invalidate a credential."""
        ...


class TokenAuthProvider:
    """
    In-memory bearer tokens.

    Tokens are random and carry no meaning; they are issued at registration
    or login, resolved back to the user id they were issued for, and
    forgotten on logout. A user may hold several tokens at once.
    """

    def __init__(self):
        self._tokens: dict[str, str] = {}
        self._lock = threading.Lock()

    def issue_token(self, user_id: str) -> str:
        """Create a new token for a user."""
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._tokens[token] = user_id
        return token

    def revoke_token(self, token: str) -> None:
        """Forget a token (idempotent)."""
        with self._lock:
            self._tokens.pop(token, None)

    def authenticate(self, credential: str) -> str:
        """Return the user id for a token."""
        if not credential:
            raise UnauthenticatedError()
        with self._lock:
            user_id = self._tokens.get(credential)
        if user_id is None:
            raise UnauthenticatedError("Invalid or expired token")
        return user_id
