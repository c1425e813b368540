"""Account rules shared by the credential service and the identity linker."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthPolicy:
    """Account rules injected from configuration."""

    admin_email: str = "admin@apnaride.com"
    admin_role: str = "admin"
    default_role: str = "user"
    min_password_length: int = 6

    def __post_init__(self) -> None:
        if self.default_role.strip().casefold() == self.admin_role.casefold():
            raise ValueError("The default role must not be the admin role.")

    @classmethod
    def from_config(cls, config) -> "AuthPolicy":
        return cls(
            admin_email=config.get("ADMIN_EMAIL", cls.admin_email),
            admin_role=config.get("ADMIN_ROLE", cls.admin_role),
            default_role=config.get("DEFAULT_ROLE", cls.default_role),
            min_password_length=int(config.get("MIN_PASSWORD_LENGTH", cls.min_password_length)),
        )

    def is_reserved(self, email: str | None, role: str | None) -> bool:
        """True when the email or role names the reserved admin identity."""

        if role and role.strip().casefold() == self.admin_role.casefold():
            return True
        return bool(email) and email.strip().casefold() == self.admin_email.casefold()
