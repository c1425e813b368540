"""User store abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from models.user import User


class StoreError(Exception):
    """Raised when the backing store cannot complete an operation."""


class DuplicateEmailError(StoreError):
    """Raised when an insert collides with an existing account email."""


class AbstractUserStore(ABC):
    """Interface for user persistence backends."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Return the account registered under ``email`` or None."""

    @abstractmethod
    def save(self, user: User) -> User:
        """Insert or update ``user`` and return the persisted record.

        Implementations assign ``user.id`` on insert and raise
        :class:`DuplicateEmailError` when the email is already taken.
        """
