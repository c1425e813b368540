"""User model definition."""

from datetime import datetime

from . import db


PROVIDER_LOCAL = "LOCAL"


class User(db.Model):
    """Represents a rider, customer or admin account."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=True)
    # Null for accounts created through a federated login.
    password_digest = db.Column(db.String(255), nullable=True)
    provider = db.Column(
        db.String(32),
        nullable=False,
        default=PROVIDER_LOCAL,
        server_default=db.text("'LOCAL'"),
    )
    role = db.Column(db.String(32), nullable=False, default="user")
    phone = db.Column(db.String(32), nullable=True)
    emergency_phone = db.Column(db.String(32), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @property
    def has_password(self) -> bool:
        """Return True when a local credential (hashed or legacy) is stored."""

        return bool(self.password_digest and self.password_digest.strip())

    def public_view(self) -> dict:
        """Serialize the fields safe to hand back to clients."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "phone": self.phone,
            "emergencyPhone": self.emergency_phone,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"


# One account per email regardless of letter case.
db.Index("uq_users_email_lower", db.func.lower(User.email), unique=True)
