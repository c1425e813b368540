"""Authentication services."""

from .credentials import CredentialService
from .errors import (
    AuthError,
    ConflictError,
    ForbiddenError,
    IdentityError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .hashing import PasswordHasher
from .identity import FederatedAttributes, FederatedPrincipal, FederatedResolution, IdentityLinker
from .policy import AuthPolicy
from .post_auth import Default, SetupRequired, decide_post_auth_redirect, redirect_url

__all__ = [
    "AuthError",
    "AuthPolicy",
    "ConflictError",
    "CredentialService",
    "Default",
    "FederatedAttributes",
    "FederatedPrincipal",
    "FederatedResolution",
    "ForbiddenError",
    "IdentityError",
    "IdentityLinker",
    "NotFoundError",
    "PasswordHasher",
    "SetupRequired",
    "UnauthorizedError",
    "ValidationError",
    "decide_post_auth_redirect",
    "redirect_url",
]
