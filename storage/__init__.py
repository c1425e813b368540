"""User store backends."""

from .abstract_store import AbstractUserStore, DuplicateEmailError, StoreError
from .sqlalchemy_store import SqlAlchemyUserStore, normalize_email

__all__ = [
    "AbstractUserStore",
    "DuplicateEmailError",
    "SqlAlchemyUserStore",
    "StoreError",
    "normalize_email",
]
