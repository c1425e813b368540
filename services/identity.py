"""Link federated (OAuth2) identities to local accounts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from models.user import User
from storage import AbstractUserStore, DuplicateEmailError

from .errors import ForbiddenError, IdentityError
from .policy import AuthPolicy

logger = logging.getLogger(__name__)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class FederatedAttributes:
    """Typed view of the attribute map a provider returns for a principal."""

    email: str | None
    name: str | None = None
    given_name: str | None = None
    raw: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, attributes: Mapping[str, Any] | None) -> "FederatedAttributes":
        attributes = dict(attributes or {})
        return cls(
            email=_optional_str(attributes.get("email")),
            name=_optional_str(attributes.get("name")),
            given_name=_optional_str(attributes.get("given_name")),
            raw=attributes,
        )

    @property
    def display_name(self) -> str | None:
        return self.name if self.name is not None else self.given_name


@dataclass(frozen=True)
class FederatedPrincipal:
    """What the transport layer needs to build a session for the login."""

    attributes: Mapping[str, Any]
    authorities: tuple[str, ...] = ()
    name_attribute: str = "email"

    @property
    def name(self) -> str | None:
        return _optional_str(self.attributes.get(self.name_attribute))


@dataclass(frozen=True)
class FederatedResolution:
    user: User
    is_new_account: bool
    principal: FederatedPrincipal


class IdentityLinker:
    """Create or refresh the local account behind a federated login.

    Accounts created here never receive a password; the password setup
    flow is how they acquire one.
    """

    def __init__(
        self,
        store: AbstractUserStore,
        provider: str = "GOOGLE",
        policy: AuthPolicy | None = None,
    ) -> None:
        self.store = store
        self.provider = provider
        self.policy = policy or AuthPolicy()

    def resolve_federated_user(
        self,
        attributes: Mapping[str, Any] | FederatedAttributes,
        authorities: tuple[str, ...] = (),
    ) -> FederatedResolution:
        if not isinstance(attributes, FederatedAttributes):
            attributes = FederatedAttributes.from_mapping(attributes)
        if attributes.email is None:
            raise IdentityError("Email not provided by OAuth2 provider.")

        user = self.store.find_by_email(attributes.email)
        is_new = user is None
        if is_new and self.policy.is_reserved(attributes.email, None):
            logger.warning("Blocked admin account creation via federated login")
            raise ForbiddenError("Admin account cannot be created via federated login.")
        if is_new:
            try:
                user = self.store.save(
                    User(
                        email=attributes.email,
                        name=attributes.display_name,
                        provider=self.provider,
                        password_digest=None,
                        role=self.policy.default_role,
                    )
                )
            except DuplicateEmailError:
                # A concurrent login created the account first.
                user = self.store.find_by_email(attributes.email)
                if user is None:
                    raise
                is_new = False
        if not is_new:
            # The provider is authoritative for the display name on every login.
            user.name = attributes.display_name
            user.provider = self.provider
            user = self.store.save(user)

        logger.info(
            "Federated login for %s via %s (new account: %s)",
            user.email,
            self.provider,
            is_new,
        )
        principal = FederatedPrincipal(attributes=attributes.raw, authorities=tuple(authorities))
        return FederatedResolution(user=user, is_new_account=is_new, principal=principal)
