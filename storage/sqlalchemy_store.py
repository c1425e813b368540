"""SQLAlchemy-backed user store implementation."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from models.user import User

from .abstract_store import AbstractUserStore, DuplicateEmailError, StoreError

logger = logging.getLogger(__name__)


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


class SqlAlchemyUserStore(AbstractUserStore):
    """Persist accounts through the Flask-SQLAlchemy session."""

    def __init__(self, session=None):
        self.session = session or db.session

    def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup of a single account."""

        normalized = normalize_email(email)
        if not normalized:
            return None
        try:
            return (
                self.session.query(User)
                .filter(func.lower(User.email) == normalized)
                .first()
            )
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError("User lookup failed.") from exc

    def save(self, user: User) -> User:
        """Add or update the account and commit the unit of work."""

        is_insert = user.id is None
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if is_insert:
                logger.info("Rejected duplicate account insert for %s", user.email)
                raise DuplicateEmailError("A user with that email already exists.") from exc
            raise StoreError("User update violated a constraint.") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError("User save failed.") from exc
        return user
