"""Local email + password accounts.

Covers signup (and its ``register`` alias), signin with one-time migration of
legacy plaintext passwords, and the password setup step for accounts that
were created through a federated login.
"""

from __future__ import annotations

import logging

from models.user import PROVIDER_LOCAL, User
from storage import AbstractUserStore, DuplicateEmailError

from .errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .hashing import PasswordHasher
from .policy import AuthPolicy

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."


class CredentialService:
    """Signup, signin and password setup against a user store."""

    def __init__(
        self,
        store: AbstractUserStore,
        hasher: PasswordHasher,
        policy: AuthPolicy | None = None,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.policy = policy or AuthPolicy()

    def _password_ok(self, password: str | None) -> bool:
        return password is not None and len(password) >= self.policy.min_password_length

    def sign_up(
        self,
        email: str | None,
        password: str | None,
        name: str | None = None,
        role: str | None = None,
        *,
        via: str = "signup",
    ) -> User:
        """Create a local account and return it."""

        if self.policy.is_reserved(email, role):
            logger.warning("Blocked admin account creation via %s", via)
            raise ForbiddenError(f"Admin account cannot be created via {via}.")

        email = (email or "").strip()
        if not email or not self._password_ok(password):
            raise ValidationError(
                f"Invalid email or password (min {self.policy.min_password_length} chars)."
            )

        if self.store.find_by_email(email) is not None:
            raise ConflictError("Email is already registered.")

        role = (role or "").strip() or self.policy.default_role
        user = User(
            email=email,
            name=name,
            password_digest=self.hasher.hash(password),
            provider=PROVIDER_LOCAL,
            role=role,
        )
        try:
            user = self.store.save(user)
        except DuplicateEmailError as exc:
            raise ConflictError("Email is already registered.") from exc

        logger.info("Created local account %s with role %s", user.email, user.role)
        return user

    def register(
        self,
        email: str | None,
        password: str | None,
        name: str | None = None,
        role: str | None = None,
    ) -> User:
        """Alias of :meth:`sign_up` kept for the ``/register`` endpoint."""

        return self.sign_up(email, password, name, role, via="register")

    def sign_in(self, email: str | None, password: str | None) -> User:
        """Authenticate a local account.

        Every failure raises the same :class:`UnauthorizedError` message so
        callers cannot tell an unknown email from a wrong password.
        """

        user = self.store.find_by_email(email or "")
        if user is None or not user.has_password or password is None:
            logger.warning("Failed signin for %s", email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        stored = user.password_digest
        matches = self.hasher.verify(password, stored)
        if not matches and self._is_legacy_match(stored, password):
            self._migrate_legacy_password(user, password)
            matches = True

        if not matches:
            logger.warning("Failed signin for %s", email)
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return user

    def _is_legacy_match(self, stored: str, password: str) -> bool:
        return not self.hasher.is_digest(stored) and stored == password

    def _migrate_legacy_password(self, user: User, password: str) -> None:
        """Replace a plaintext credential with its digest.

        Afterwards the stored value carries a digest prefix, so the plaintext
        comparison can never match this account again.
        """

        user.password_digest = self.hasher.hash(password)
        self.store.save(user)
        logger.info("Migrated legacy plaintext password for %s", user.email)

    def setup_password(self, email: str | None, password: str | None) -> None:
        """Give a password-less (federated) account its first local password."""

        if not email or not self._password_ok(password):
            raise ValidationError(
                f"Invalid email or password (min {self.policy.min_password_length} chars)."
            )

        user = self.store.find_by_email(email)
        if user is None:
            raise NotFoundError("User not found.")
        if user.has_password:
            raise ConflictError("Password already set.")

        user.password_digest = self.hasher.hash(password)
        self.store.save(user)
        logger.info("Password set up for %s", user.email)
