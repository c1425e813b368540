"""Error kinds raised by the authentication services."""

from __future__ import annotations

from http import HTTPStatus


class AuthError(Exception):
    """Base class for auth errors.

    Each subclass carries the HTTP status the transport layer answers with.
    """

    status_code: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AuthError):
    """Raised when the submitted email or password is malformed."""

    status_code = HTTPStatus.BAD_REQUEST


class UnauthorizedError(AuthError):
    """Raised for any failed signin, whatever the underlying cause."""

    status_code = HTTPStatus.UNAUTHORIZED


class ForbiddenError(AuthError):
    """Raised when a public path attempts to create the admin identity."""

    status_code = HTTPStatus.FORBIDDEN


class NotFoundError(AuthError):
    """Raised when the referenced account does not exist."""

    status_code = HTTPStatus.NOT_FOUND


class ConflictError(AuthError):
    """Raised on duplicate emails or when a password is already set."""

    status_code = HTTPStatus.CONFLICT


class IdentityError(AuthError):
    """Raised when the federated provider omitted a required attribute."""

    status_code = HTTPStatus.BAD_GATEWAY
