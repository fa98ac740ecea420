"""
Identity Collaborator

Credential management and session persistence belong to an external
identity provider. This module defines the contract the tracker consumes
and an in-memory provider used by the demo and the test suite.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import uuid4

from .errors import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    """The signed-in user as exposed by the identity provider."""
    uid: str
    display_name: str = ""
    email: str = ""


UserCallback = Callable[[Optional[User]], None]


class IdentityProvider(ABC):
    """
    Abstract identity provider.

    Subscribers are called with the current user (or None) immediately
    on subscription and again on every sign-in or sign-out.
    """

    @property
    @abstractmethod
    def current_user(self) -> Optional[User]:
        pass

    @abstractmethod
    def subscribe(self, callback: UserCallback) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""
        pass

    @abstractmethod
    def sign_in(self, email: str, password: str) -> User:
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str, display_name: str = "") -> User:
        pass

    @abstractmethod
    def sign_out(self) -> None:
        pass


class InMemoryIdentityProvider(IdentityProvider):
    """Identity provider holding accounts in a dict."""

    MIN_PASSWORD_LENGTH = 6

    def __init__(self):
        self._accounts: dict[str, tuple[str, User]] = {}
        self._current: Optional[User] = None
        self._subscribers: list[UserCallback] = []

    @property
    def current_user(self) -> Optional[User]:
        return self._current

    def subscribe(self, callback: UserCallback) -> Callable[[], None]:
        self._subscribers.append(callback)
        callback(self._current)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def sign_in(self, email: str, password: str) -> User:
        account = self._accounts.get(email.lower())
        if account is None or account[0] != password:
            raise AuthenticationError("Firebase: Error (auth/invalid-credential).")

        self._set_user(account[1])
        return account[1]

    def sign_up(self, email: str, password: str, display_name: str = "") -> User:
        key = email.lower()
        if key in self._accounts:
            raise AuthenticationError("Firebase: Error (auth/email-already-in-use).")
        if len(password) < self.MIN_PASSWORD_LENGTH:
            raise AuthenticationError(
                "Firebase: Password should be at least 6 characters (auth/weak-password)."
            )

        user = User(uid=uuid4().hex, display_name=display_name, email=email)
        self._accounts[key] = (password, user)
        logger.info("Created account %s", user.uid)
        self._set_user(user)
        return user

    def sign_out(self) -> None:
        self._set_user(None)

    def _set_user(self, user: Optional[User]) -> None:
        self._current = user
        for callback in list(self._subscribers):
            callback(user)
