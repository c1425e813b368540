"""Decide where a browser lands after a successful federated login."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union
from urllib.parse import urlencode

from storage import AbstractUserStore, StoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetupRequired:
    """The account has no local password yet."""

    email: str


@dataclass(frozen=True)
class Default:
    """Send the user to the application home."""


PostAuthDecision = Union[SetupRequired, Default]


def decide_post_auth_redirect(store: AbstractUserStore, email: str | None) -> PostAuthDecision:
    """Return SetupRequired iff the account exists and has no password.

    This is a navigation choice, not a security gate: a missing email or a
    failed lookup falls back to Default.
    """

    if not email:
        return Default()
    try:
        user = store.find_by_email(email)
    except StoreError:
        logger.warning("Post-auth lookup failed for %s; using default redirect", email, exc_info=True)
        return Default()

    if user is not None and not user.has_password:
        return SetupRequired(email=email)
    return Default()


def redirect_url(decision: PostAuthDecision, frontend_url: str) -> str:
    base = frontend_url.rstrip("/")
    if isinstance(decision, SetupRequired):
        return f"{base}/setup-password?{urlencode({'email': decision.email})}"
    return f"{base}/"
